"""Infrastructure Layer — Resource Store backends, database sessions, fixtures, logging.

Invariants:
    - Backends implement core.repository_protocols.ResourceStore
    - Driver exceptions never leave this layer unmapped (StoreError subclasses only)
"""

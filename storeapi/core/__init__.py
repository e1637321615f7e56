"""Core Layer — record semantics, error kinds, identifiers and the store contract.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions here do no IO
"""

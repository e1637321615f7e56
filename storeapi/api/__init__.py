"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON objects with a boolean `success` (bare listings excepted)

Design Decisions:
    - Thin routes delegate to ResourceHandler (services/)
"""

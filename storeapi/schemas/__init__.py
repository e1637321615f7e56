"""Pydantic Schemas — payload validation for resources with a fixed shape.

Invariants:
    - Schemas validate at system boundary (client payloads)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

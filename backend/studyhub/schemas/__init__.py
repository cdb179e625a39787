"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas shape what leaves the system; ORM models never serialized directly

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""

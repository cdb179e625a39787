"""Infrastructure Layer — storage backends and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All storage failures mapped to the error hierarchy in core/errors.py

Design Decisions:
    - Thin wrappers over SQLAlchemy and the file system, injected into services
"""

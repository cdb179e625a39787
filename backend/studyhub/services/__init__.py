"""Services Layer — post repository, community linkage, ingestion and retrieval.

Invariants:
    - Services raise StudyHubError subclasses; routes never build error responses
    - Storage reached through repositories/blob store, never raw SQL in routes

Design Decisions:
    - One file per component for locality
"""

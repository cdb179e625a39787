"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Post is the aggregate root of the resource pipeline; Community is owned
      by the community directory service and only read/appended here

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from studyhub.models.community import Community, community_posts  # noqa: F401
from studyhub.models.post import Post  # noqa: F401

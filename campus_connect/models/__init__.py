"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - College.domain is unique; every Post belongs to exactly one College

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (standard SQLAlchemy pattern)
"""

from campus_connect.models.college import College  # noqa: F401
from campus_connect.models.profile import Profile  # noqa: F401
from campus_connect.models.post import Post  # noqa: F401
from campus_connect.models.like import Like  # noqa: F401
from campus_connect.models.comment import Comment  # noqa: F401

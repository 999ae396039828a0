"""College ORM — the Institution record matched by email domain.

Invariants:
    - domain is lowercase and UNIQUE: at most one college per domain
      (the affiliation resolver relies on this, it never deduplicates)
    - Rows are maintained by an external process; this service only reads them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campus_connect.db.base import Base


class College(Base):
    """College entity — join target for profiles and posts."""
    __tablename__ = "colleges"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    domain: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    profiles: Mapped[list["Profile"]] = relationship(
        "Profile", back_populates="college",
    )
    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="college",
    )

"""Profile ORM — per-user record linking an authenticated identity to a college.

Invariants:
    - id equals the auth provider's user id (no separate surrogate key)
    - college_id is nullable: an unaffiliated user has no college, never a guessed one
    - is_verified is True only when college_id came from an email-domain match
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campus_connect.db.base import Base


class Profile(Base):
    """Profile entity — author of posts, likes and comments."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    college_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("colleges.id"), nullable=True,
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    college: Mapped["College | None"] = relationship(
        "College", back_populates="profiles", lazy="selectin",
    )

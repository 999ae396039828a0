"""Post ORM — article, photo or video shared with a college community.

Invariants:
    - type is one of: article, photo, video (core/domain_types.PostType)
    - college_id is the author's college at creation time
    - view_count only ever moves through an atomic SQL increment
    - cascade delete for likes and comments

Design Decisions:
    - media_url references bytes stored by the external provider (no blobs here)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from campus_connect.db.base import Base


class Post(Base):
    """Post entity — one item in the feed."""
    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            "type IN ('article', 'photo', 'video')", name="ck_posts_type",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id"), nullable=False,
    )
    college_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("colleges.id"), nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    media_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    view_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    # Relationships
    author: Mapped["Profile"] = relationship("Profile", lazy="selectin")
    college: Mapped["College"] = relationship(
        "College", back_populates="posts", lazy="selectin",
    )
    likes: Mapped[list["Like"]] = relationship(
        "Like", back_populates="post", cascade="all, delete-orphan",
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="post", cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )

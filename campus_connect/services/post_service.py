"""Post Service — create, feed, detail, view counting, likes and comments.

Invariants:
    - Every method takes the caller's Identity explicitly (no ambient "current user")
    - Writes (post, like, comment) require an affiliated profile (require_affiliation)
    - Posts are validated by core/post_rules before insert
    - view_count moves only through an atomic UPDATE ... SET view_count = view_count + 1;
      a failed increment is logged and never fails the read
    - Like writes go through the LikeToggle two-phase state machine

Design Decisions:
    - Counts and is_liked computed as correlated subqueries in one SELECT
      (no N+1 per post as in a naive feed loop)
    - Returns plain dicts; routes validate them into tagged response schemas
"""

import logging
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus_connect.config import Settings, get_settings
from campus_connect.core.domain_types import Identity, PostId, PostType, UserId
from campus_connect.core.errors import (
    DatabaseError, ErrorContext, PostValidationError, ResourceNotFoundError,
)
from campus_connect.core.like_toggle import LikeToggle
from campus_connect.core.post_rules import (
    clean_text, normalize_post_draft, validate_post_draft,
)
from campus_connect.infrastructure.database import translate_db_errors
from campus_connect.infrastructure.repositories import (
    SqlInstitutionRepository, SqlLikeRepository, SqlProfileRepository,
)
from campus_connect.models.comment import Comment
from campus_connect.models.like import Like
from campus_connect.models.post import Post
from campus_connect.services.profile_provisioning import (
    ensure_profile, require_affiliation,
)

logger = logging.getLogger(__name__)


def _author_dict(profile) -> dict:
    return {
        "id": profile.id,
        "display_name": profile.display_name,
        "avatar_url": profile.avatar_url,
    }


def _post_dict(post: Post, like_count: int, comment_count: int, is_liked) -> dict:
    return {
        "id": post.id,
        "type": post.type,
        "title": post.title,
        "content": post.content,
        "media_url": post.media_url,
        "media_type": post.media_type,
        "view_count": post.view_count,
        "created_at": post.created_at,
        "author": _author_dict(post.author),
        "college": {"id": post.college.id, "name": post.college.name},
        "like_count": like_count or 0,
        "comment_count": comment_count or 0,
        "is_liked": bool(is_liked),
    }


def _comment_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "author": _author_dict(comment.author),
    }


class PostService:
    """Post, like and comment workflows over one request-scoped session."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self.profiles = SqlProfileRepository(db)
        self.institutions = SqlInstitutionRepository(db)
        self.likes = SqlLikeRepository(db)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _affiliated_profile(self, identity: Identity) -> dict:
        result = await ensure_profile(identity, self.profiles, self.institutions)
        return require_affiliation(
            result, retry_after_ms=self.settings.lookup_retry_after_ms,
        )

    async def get_post_or_404(self, post_id: PostId) -> Post:
        async with translate_db_errors(self.db, "query"):
            post = await self.db.get(Post, post_id)
        if not post:
            raise ResourceNotFoundError(
                "Post", str(post_id), ErrorContext(post_id=str(post_id)),
            )
        return post

    def _feed_query(self, viewer_id: UserId):
        like_count = (
            select(func.count(Like.id))
            .where(Like.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        is_liked = (
            select(Like.id)
            .where(Like.post_id == Post.id)
            .where(Like.user_id == viewer_id)
            .correlate(Post)
            .exists()
        )
        return select(
            Post,
            like_count.label("like_count"),
            comment_count.label("comment_count"),
            is_liked.label("is_liked"),
        )

    # ─── Posts ───────────────────────────────────────────────────

    async def create_post(
        self,
        identity: Identity,
        post_type: PostType,
        title: str | None = None,
        content: str | None = None,
        media_url: str | None = None,
        media_type: str | None = None,
        media_size_bytes: int | None = None,
    ) -> dict:
        """Create a post under the author's college."""
        profile = await self._affiliated_profile(identity)

        error = validate_post_draft(
            post_type, title, content, media_url, media_type,
            media_size_bytes, max_media_bytes=self.settings.max_media_bytes,
        )
        if error:
            raise PostValidationError(
                error["message"], error["field"],
                ErrorContext(user_id=str(identity.user_id)),
            )

        post = Post(
            author_id=identity.user_id,
            college_id=profile["college_id"],
            **normalize_post_draft(
                post_type, title, content, media_url, media_type,
            ),
        )
        async with translate_db_errors(self.db, "commit"):
            self.db.add(post)
            await self.db.commit()
        logger.info(
            f"Post created ({post_type.value})",
            extra={
                "user_id": identity.user_id,
                "post_id": post.id,
                "college_id": post.college_id,
            },
        )
        return await self.get_post(identity, PostId(post.id))

    async def list_feed(
        self,
        identity: Identity,
        post_type: PostType | None = None,
        college_id: UUID | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """Newest-first posts, optionally narrowed to a type and/or college."""
        query = self._feed_query(identity.user_id)
        if post_type is not None:
            query = query.where(Post.type == post_type.value)
        if college_id is not None:
            query = query.where(Post.college_id == college_id)
        query = (
            query.order_by(Post.created_at.desc())
            .limit(limit or self.settings.feed_page_size)
            .offset(offset)
        )
        async with translate_db_errors(self.db, "query"):
            result = await self.db.execute(query)
            rows = result.all()
        return [_post_dict(*row) for row in rows]

    async def get_post(self, identity: Identity, post_id: PostId) -> dict:
        query = (
            self._feed_query(identity.user_id)
            .where(Post.id == post_id)
            .execution_options(populate_existing=True)
        )
        async with translate_db_errors(self.db, "query"):
            result = await self.db.execute(query)
            row = result.first()
        if row is None:
            raise ResourceNotFoundError(
                "Post", str(post_id), ErrorContext(post_id=str(post_id)),
            )
        return _post_dict(*row)

    async def get_post_detail(self, identity: Identity, post_id: PostId) -> dict:
        """Post with its comments; records one view."""
        post = await self.get_post(identity, post_id)
        if await self.increment_view_count(post_id):
            post["view_count"] += 1
        return {"post": post, "comments": await self.list_comments(post_id)}

    async def increment_view_count(self, post_id: PostId) -> bool:
        """Atomic +1. Returns False (and logs) instead of raising on failure."""
        try:
            async with translate_db_errors(self.db, "update"):
                await self.db.execute(
                    update(Post)
                    .where(Post.id == post_id)
                    .values(view_count=Post.view_count + 1),
                )
                await self.db.commit()
        except DatabaseError as e:
            logger.warning(
                f"View count not recorded: {e.message}",
                extra={"post_id": post_id, "error_code": e.code},
            )
            return False
        return True

    # ─── Likes ───────────────────────────────────────────────────

    async def toggle_like(self, identity: Identity, post_id: PostId) -> dict:
        """Flip the caller's like; a failed write rolls the local state back."""
        await self.get_post_or_404(post_id)
        await self._affiliated_profile(identity)

        toggle = LikeToggle(
            liked=await self.likes.exists(post_id, identity.user_id),
            like_count=await self.likes.count(post_id),
        )
        target = toggle.begin()
        try:
            if target:
                await self.likes.add(post_id, identity.user_id)
            else:
                await self.likes.remove(post_id, identity.user_id)
        except DatabaseError as e:
            toggle.rollback()
            logger.warning(
                f"Like write failed, rolled back: {e.message}",
                extra={"user_id": identity.user_id, "post_id": post_id},
            )
        else:
            toggle.commit()
        return toggle.to_dict()

    # ─── Comments ────────────────────────────────────────────────

    async def add_comment(
        self, identity: Identity, post_id: PostId, content: str,
    ) -> dict:
        await self.get_post_or_404(post_id)
        await self._affiliated_profile(identity)

        text = clean_text(content)
        if not text:
            raise PostValidationError(
                "Comment cannot be empty", "content",
                ErrorContext(post_id=str(post_id)),
            )
        comment = Comment(
            post_id=post_id, author_id=identity.user_id, content=text,
        )
        async with translate_db_errors(self.db, "commit"):
            self.db.add(comment)
            await self.db.commit()
            await self.db.refresh(comment, attribute_names=["author"])
        return _comment_dict(comment)

    async def list_comments(
        self, post_id: PostId, limit: int = 100, offset: int = 0,
    ) -> list[dict]:
        """Oldest first, matching the reading order of a thread."""
        async with translate_db_errors(self.db, "query"):
            result = await self.db.execute(
                select(Comment)
                .where(Comment.post_id == post_id)
                .order_by(Comment.created_at.asc())
                .limit(limit)
                .offset(offset),
            )
            return [_comment_dict(c) for c in result.scalars().all()]

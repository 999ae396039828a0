"""College Directory — browse, search and community stats for colleges.

Invariants:
    - Read-only over colleges; never creates or edits a college
    - Search is a case-insensitive substring match on name (not on domain)
    - Listing is ordered by name; every college appears even with zero posts
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_connect.core.errors import ErrorContext, ResourceNotFoundError
from campus_connect.infrastructure.database import translate_db_errors
from campus_connect.models.college import College
from campus_connect.models.post import Post
from campus_connect.models.profile import Profile


class CollegeDirectory:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_colleges(self, search: str | None = None) -> list[dict]:
        """All colleges with post counts, optionally filtered by name."""
        post_count = func.count(Post.id)
        query = (
            select(College, post_count.label("post_count"))
            .outerjoin(Post, Post.college_id == College.id)
            .group_by(College.id)
            .order_by(College.name.asc())
        )
        needle = (search or "").strip().lower()
        if needle:
            query = query.where(func.lower(College.name).contains(needle))

        async with translate_db_errors(self.db, "query"):
            result = await self.db.execute(query)
            rows = result.all()
        return [
            {
                "id": college.id,
                "name": college.name,
                "domain": college.domain,
                "post_count": count,
            }
            for college, count in rows
        ]

    async def get_college(self, college_id: UUID) -> dict:
        """College plus student and post counts; 404 when missing."""
        async with translate_db_errors(self.db, "query"):
            college = await self.db.get(College, college_id)
            if not college:
                raise ResourceNotFoundError(
                    "College", str(college_id),
                    ErrorContext(college_id=str(college_id)),
                )
            students = await self.db.scalar(
                select(func.count(Profile.id))
                .where(Profile.college_id == college_id),
            )
            posts = await self.db.scalar(
                select(func.count(Post.id)).where(Post.college_id == college_id),
            )
        return {
            "id": college.id,
            "name": college.name,
            "domain": college.domain,
            "student_count": students or 0,
            "post_count": posts or 0,
        }

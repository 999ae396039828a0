"""SQL Repositories — SQLAlchemy implementations of the core boundary protocols.

Invariants:
    - Each repository wraps one AsyncSession owned by the caller (request scope)
    - Every query runs inside translate_db_errors: callers only ever see DatabaseError
    - SqlInstitutionRepository is read-only (colleges are maintained elsewhere)

Design Decisions:
    - Return plain dicts / frozen dataclasses, not ORM rows: core never touches ORM
    - get_by_domain uses scalar_one_or_none — a second row would be a broken
      unique index and surfaces as DatabaseError, not as a silent pick
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_connect.core.domain_types import (
    CollegeId, Domain, Institution, PostId, UserId,
)
from campus_connect.infrastructure.database import translate_db_errors
from campus_connect.models.college import College
from campus_connect.models.like import Like
from campus_connect.models.profile import Profile

logger = logging.getLogger(__name__)


def college_to_institution(college: College) -> Institution:
    return Institution(
        id=CollegeId(college.id), name=college.name, domain=Domain(college.domain),
    )


def profile_to_dict(profile: Profile) -> dict:
    return {
        "id": profile.id,
        "email": profile.email,
        "display_name": profile.display_name,
        "avatar_url": profile.avatar_url,
        "college_id": profile.college_id,
        "is_verified": profile.is_verified,
        "created_at": profile.created_at,
    }


class SqlInstitutionRepository:
    """InstitutionLookup over the colleges table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_domain(self, domain: Domain) -> Institution | None:
        async with translate_db_errors(self.db, "lookup"):
            result = await self.db.execute(
                select(College).where(College.domain == domain),
            )
            college = result.scalar_one_or_none()
        return college_to_institution(college) if college else None

    async def get_by_id(self, college_id: CollegeId) -> Institution | None:
        async with translate_db_errors(self.db, "lookup"):
            college = await self.db.get(College, college_id)
        return college_to_institution(college) if college else None


class SqlProfileRepository:
    """ProfileRepository over the profiles table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UserId) -> dict | None:
        async with translate_db_errors(self.db, "query"):
            profile = await self.db.get(Profile, user_id)
        return profile_to_dict(profile) if profile else None

    async def create(
        self,
        user_id: UserId,
        email: str,
        display_name: str,
        college_id: CollegeId | None,
        is_verified: bool,
    ) -> dict:
        profile = Profile(
            id=user_id,
            email=email,
            display_name=display_name,
            college_id=college_id,
            is_verified=is_verified,
        )
        async with translate_db_errors(self.db, "commit"):
            self.db.add(profile)
            await self.db.commit()
            await self.db.refresh(profile)
        logger.info(
            "Profile created",
            extra={"user_id": user_id, "college_id": college_id},
        )
        return profile_to_dict(profile)


class SqlLikeRepository:
    """LikeRepository over the likes table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, post_id: PostId, user_id: UserId) -> bool:
        async with translate_db_errors(self.db, "query"):
            result = await self.db.execute(
                select(Like.id)
                .where(Like.post_id == post_id)
                .where(Like.user_id == user_id),
            )
            return result.first() is not None

    async def count(self, post_id: PostId) -> int:
        async with translate_db_errors(self.db, "query"):
            result = await self.db.execute(
                select(func.count(Like.id)).where(Like.post_id == post_id),
            )
            return result.scalar_one()

    async def add(self, post_id: PostId, user_id: UserId) -> None:
        async with translate_db_errors(self.db, "commit"):
            self.db.add(Like(post_id=post_id, user_id=user_id))
            await self.db.commit()

    async def remove(self, post_id: PostId, user_id: UserId) -> None:
        async with translate_db_errors(self.db, "commit"):
            await self.db.execute(
                delete(Like)
                .where(Like.post_id == post_id)
                .where(Like.user_id == user_id),
            )
            await self.db.commit()

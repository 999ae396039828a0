"""College Routes — directory, community page and per-college feed.

Invariants:
    - GET /colleges is public: the signup college picker runs before an account exists
    - Community page and per-college feed require an Identity (signed-in students only)
    - GET /colleges/{id}/posts uses the same feed shape as GET /posts
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campus_connect.api.dependencies import get_identity
from campus_connect.core.domain_types import Identity, PostType
from campus_connect.infrastructure.database import get_db
from campus_connect.schemas.college import CollegeDetailOut, CollegeSummaryOut
from campus_connect.schemas.post import PostOut
from campus_connect.services.college_directory import CollegeDirectory
from campus_connect.services.post_service import PostService

router = APIRouter(prefix="/api/v1/colleges", tags=["colleges"])


@router.get("", response_model=list[CollegeSummaryOut])
async def list_colleges(
    q: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    """All colleges by name with post counts; `q` filters by name substring."""
    return await CollegeDirectory(db).list_colleges(q)


@router.get("/{college_id}", response_model=CollegeDetailOut)
async def get_college(
    college_id: UUID,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await CollegeDirectory(db).get_college(college_id)


@router.get("/{college_id}/posts", response_model=list[PostOut])
async def list_college_posts(
    college_id: UUID,
    post_type: PostType | None = Query(None, alias="type"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Feed for one college community (404 when the college does not exist)."""
    await CollegeDirectory(db).get_college(college_id)
    return await PostService(db).list_feed(
        identity, post_type=post_type, college_id=college_id,
        limit=limit, offset=offset,
    )

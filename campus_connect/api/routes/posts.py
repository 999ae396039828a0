"""Post Routes — feed, create, detail, likes and comments.

Invariants:
    - Every endpoint requires an Identity and passes it down explicitly
    - Writes require an affiliated profile (403 otherwise, 503 if lookup failed)
    - GET /posts/{id} counts one view per request
    - POST /posts/{id}/like always answers 200 with the toggle outcome;
      status=rolled_back tells the client to revert its optimistic UI
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_connect.api.dependencies import get_identity
from campus_connect.core.domain_types import Identity, PostId, PostType
from campus_connect.infrastructure.database import get_db
from campus_connect.schemas.post import (
    CommentCreate, CommentOut, LikeOut, PostCreate, PostDetailOut, PostOut,
)
from campus_connect.services.post_service import PostService

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.get("", response_model=list[PostOut])
async def list_feed(
    post_type: PostType | None = Query(None, alias="type"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Newest posts across all colleges, optionally by type."""
    return await PostService(db).list_feed(
        identity, post_type=post_type, limit=limit, offset=offset,
    )


@router.post(
    "", response_model=PostOut, status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await PostService(db).create_post(
        identity,
        body.type,
        title=body.title,
        content=body.content,
        media_url=body.media_url,
        media_type=body.media_type,
        media_size_bytes=body.media_size_bytes,
    )


@router.get("/{post_id}", response_model=PostDetailOut)
async def get_post(
    post_id: UUID,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await PostService(db).get_post_detail(identity, PostId(post_id))


@router.post("/{post_id}/like", response_model=LikeOut)
async def toggle_like(
    post_id: UUID,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await PostService(db).toggle_like(identity, PostId(post_id))


@router.post(
    "/{post_id}/comments", response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: UUID,
    body: CommentCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await PostService(db).add_comment(
        identity, PostId(post_id), body.content,
    )


@router.get("/{post_id}/comments", response_model=list[CommentOut])
async def list_comments(
    post_id: UUID,
    limit: int = Query(100, ge=1, le=200),
    offset: int = Query(0, ge=0),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    service = PostService(db)
    await service.get_post_or_404(PostId(post_id))
    return await service.list_comments(PostId(post_id), limit, offset)

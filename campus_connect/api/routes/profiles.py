"""Profile Routes — the caller's own profile, provisioned on first access.

Invariants:
    - GET /profiles/me never guesses a college: NOT_FOUND leaves profile=None
    - LOOKUP_FAILED surfaces as a 503 with Retry-After (caller may retry)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_connect.api.dependencies import get_identity
from campus_connect.config import get_settings
from campus_connect.core.domain_types import Identity, ResolutionStatus
from campus_connect.core.errors import AffiliationLookupError
from campus_connect.infrastructure.database import get_db
from campus_connect.infrastructure.repositories import (
    SqlInstitutionRepository, SqlProfileRepository,
)
from campus_connect.schemas.affiliation import ProfileStatusOut, ResolutionOut
from campus_connect.services.profile_provisioning import ensure_profile

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileStatusOut)
async def get_my_profile(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    result = await ensure_profile(
        identity, SqlProfileRepository(db), SqlInstitutionRepository(db),
    )
    resolution = result.resolution
    if resolution and resolution.status is ResolutionStatus.LOOKUP_FAILED:
        raise AffiliationLookupError(
            resolution.domain, resolution.reason or "unknown",
            retry_after_ms=get_settings().lookup_retry_after_ms,
        )
    return ProfileStatusOut(
        profile=result.profile,
        affiliated=result.affiliated,
        created=result.created,
        resolution=(
            ResolutionOut.from_resolution(resolution) if resolution else None
        ),
    )

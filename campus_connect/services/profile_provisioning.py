"""Profile Provisioning — creates a missing profile from the caller's email domain
or, when the domain matches nothing, from the college picked at signup.

Invariants:
    - Existing profile is returned untouched (affiliation is never re-derived)
    - RESOLVED -> profile created with that college and is_verified=True
    - NOT_FOUND + a signup-selected college that exists -> profile at that college
      with is_verified=False (explicit choice, not a domain match)
    - NOT_FOUND without a usable selection / MALFORMED_EMAIL -> no profile,
      user stays unaffiliated (never guessed)
    - LOOKUP_FAILED -> no profile; require_affiliation() raises a retryable 503
    - Identity is an explicit parameter; nothing here reads ambient session state

Design Decisions:
    - Concurrent first requests may both try to insert: the loser's DatabaseError
      is absorbed by re-reading the row the winner wrote
"""

import logging
from dataclasses import dataclass

from campus_connect.core.affiliation import Resolution, default_display_name
from campus_connect.core.domain_types import CollegeId, Identity, ResolutionStatus
from campus_connect.core.errors import (
    AffiliationLookupError, DatabaseError, ErrorContext, NotAffiliatedError,
)
from campus_connect.core.repository_protocols import (
    InstitutionLookup, ProfileRepository,
)
from campus_connect.services.affiliation_resolver import resolve_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisioningResult:
    profile: dict | None
    resolution: Resolution | None = None
    created: bool = False

    @property
    def college_id(self) -> CollegeId | None:
        if not self.profile:
            return None
        return self.profile.get("college_id")

    @property
    def affiliated(self) -> bool:
        return self.college_id is not None


async def ensure_profile(
    identity: Identity,
    profiles: ProfileRepository,
    lookup: InstitutionLookup,
) -> ProvisioningResult:
    """Return the caller's profile, provisioning it from the email domain or the signup choice."""
    existing = await profiles.get(identity.user_id)
    if existing:
        return ProvisioningResult(profile=existing)

    resolution = await resolve_email(identity.email, lookup)
    college_id, is_verified = None, False
    if resolution.is_resolved:
        college_id, is_verified = resolution.institution.id, True
    elif (
        resolution.status is ResolutionStatus.NOT_FOUND
        and identity.college_id is not None
    ):
        selected = await lookup.get_by_id(identity.college_id)
        if selected is not None:
            college_id = selected.id

    if college_id is None:
        logger.info(
            "Profile not provisioned",
            extra={
                "user_id": identity.user_id,
                "domain": resolution.domain,
                "resolution": resolution.status.value,
            },
        )
        return ProvisioningResult(profile=None, resolution=resolution)

    try:
        profile = await profiles.create(
            user_id=identity.user_id,
            email=identity.email,
            display_name=default_display_name(
                identity.email, identity.display_name,
            ),
            college_id=college_id,
            is_verified=is_verified,
        )
    except DatabaseError:
        profile = await profiles.get(identity.user_id)
        if profile is None:
            raise
        return ProvisioningResult(profile=profile, resolution=resolution)
    return ProvisioningResult(profile=profile, resolution=resolution, created=True)


def require_affiliation(
    result: ProvisioningResult, retry_after_ms: int | None = None,
) -> dict:
    """Profile of an affiliated user, or the error the caller must surface."""
    resolution = result.resolution
    if resolution and resolution.status is ResolutionStatus.LOOKUP_FAILED:
        raise AffiliationLookupError(
            resolution.domain, resolution.reason or "unknown",
            retry_after_ms=retry_after_ms,
        )
    if not result.affiliated:
        user_id = result.profile["id"] if result.profile else None
        raise NotAffiliatedError(
            ErrorContext(user_id=str(user_id) if user_id else None),
        )
    return result.profile

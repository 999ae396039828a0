"""API Dependencies — explicit per-request collaborators for route handlers.

Invariants:
    - Identity is built ONLY from headers asserted by the upstream auth provider
      (X-User-Id, X-User-Email, optional X-User-Name and X-User-College-Id);
      missing/invalid -> 401
    - Handlers receive Identity as a parameter and pass it down explicitly;
      no module-level "current user"

Design Decisions:
    - Token verification belongs to the auth provider / gateway in front of this
      service; this layer only parses the asserted claims
"""

from uuid import UUID

from fastapi import Header

from campus_connect.core.affiliation import is_valid_email_format
from campus_connect.core.domain_types import CollegeId, Identity, UserId
from campus_connect.core.errors import UnauthenticatedError


async def get_identity(
    x_user_id: str | None = Header(None),
    x_user_email: str | None = Header(None),
    x_user_name: str | None = Header(None),
    x_user_college_id: str | None = Header(None),
) -> Identity:
    """FastAPI dependency: the authenticated caller, or 401."""
    if not x_user_id or not x_user_email:
        raise UnauthenticatedError()
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise UnauthenticatedError("Invalid user id")
    if not is_valid_email_format(x_user_email):
        raise UnauthenticatedError("Invalid user email")
    college_id = None
    if x_user_college_id:
        try:
            college_id = CollegeId(UUID(x_user_college_id))
        except ValueError:
            raise UnauthenticatedError("Invalid college claim")
    return Identity(
        user_id=UserId(user_id),
        email=x_user_email,
        display_name=x_user_name,
        college_id=college_id,
    )

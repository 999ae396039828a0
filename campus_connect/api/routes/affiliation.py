"""Affiliation Routes — domain resolution and signup pre-checks.

Invariants:
    - Both endpoints are public (used before an account exists)
    - Outcomes are returned as values with status 200: MALFORMED_EMAIL, NOT_FOUND
      and LOOKUP_FAILED are distinguishable by `status`, never by HTTP error
    - The signup check never assigns a college; it only validates the selection
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campus_connect.core.domain_types import CollegeId
from campus_connect.core.signup_rules import check_signup
from campus_connect.infrastructure.database import get_db
from campus_connect.infrastructure.repositories import SqlInstitutionRepository
from campus_connect.schemas.affiliation import (
    ResolutionOut, SignupCheckOut, SignupCheckRequest,
)
from campus_connect.services.affiliation_resolver import resolve_email

router = APIRouter(prefix="/api/v1", tags=["affiliation"])


@router.get("/affiliation/resolve", response_model=ResolutionOut)
async def resolve_affiliation(
    email: str = Query(..., max_length=320),
    db: AsyncSession = Depends(get_db),
):
    """Map an email to its college by domain."""
    resolution = await resolve_email(email, SqlInstitutionRepository(db))
    return ResolutionOut.from_resolution(resolution)


@router.post("/signup/validate", response_model=SignupCheckOut)
async def validate_signup(
    body: SignupCheckRequest, db: AsyncSession = Depends(get_db),
):
    """Check a signup form before handing it to the auth provider."""
    college = None
    if body.college_id is not None:
        college = await SqlInstitutionRepository(db).get_by_id(
            CollegeId(body.college_id),
        )
    return check_signup(
        body.email, body.display_name,
        college_selected=body.college_id is not None,
        college=college,
    )

"""Affiliation Schemas — resolution, signup check and profile responses.

Invariants:
    - ResolutionOut.status is one of ResolutionStatus; institution set iff resolved
    - SignupCheck responses are always 200: business failures are in `errors`
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from campus_connect.core.affiliation import Resolution, describe_resolution
from campus_connect.core.domain_types import ResolutionStatus


class InstitutionOut(BaseModel):
    id: UUID
    name: str
    domain: str


class ResolutionOut(BaseModel):
    status: ResolutionStatus
    domain: str
    institution: InstitutionOut | None = None
    message: str | None = None
    retryable: bool = False

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> "ResolutionOut":
        inst = resolution.institution
        return cls(
            status=resolution.status,
            domain=resolution.domain,
            institution=(
                InstitutionOut(id=inst.id, name=inst.name, domain=inst.domain)
                if inst else None
            ),
            message=describe_resolution(resolution),
            retryable=resolution.is_retryable,
        )


class SignupCheckRequest(BaseModel):
    """Signup form submission, checked before the auth provider is called."""
    email: str = Field(max_length=320)
    display_name: str = Field("", max_length=200)
    college_id: UUID | None = None


class SignupCheckOut(BaseModel):
    valid: bool
    email_valid: bool
    domain: str
    college_found: bool
    domain_matches_college: bool
    errors: list[str]


class ProfileOut(BaseModel):
    id: UUID
    email: str
    display_name: str
    avatar_url: str | None = None
    college_id: UUID | None = None
    is_verified: bool
    created_at: datetime


class ProfileStatusOut(BaseModel):
    """Caller's profile after provisioning; profile is None when unaffiliated."""
    profile: ProfileOut | None
    affiliated: bool
    created: bool = False
    resolution: ResolutionOut | None = None

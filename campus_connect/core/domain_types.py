"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CollegeId, PostId wrap UUIDs — never use bare UUID in domain logic
    - Domain is always lowercase (produced by core/affiliation.extract_domain)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
CollegeId = NewType("CollegeId", UUID)
PostId = NewType("PostId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Domain = NewType("Domain", str)   # lowercase, "" = no domain

NO_DOMAIN = Domain("")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, passed explicitly into every service call.

    Built at the API boundary from claims asserted by the auth provider.
    college_id is the college the user picked at signup, if any; it is only
    consulted when the email domain matches no college.
    """
    user_id: UserId
    email: str
    display_name: str | None = None
    college_id: CollegeId | None = None


@dataclass(frozen=True)
class Institution:
    """Read-only view of a college row, as returned by an InstitutionLookup."""
    id: CollegeId
    name: str
    domain: Domain


# ─── Enums ───────────────────────────────────────────────────────

class PostType(str, Enum):
    """The three post variants — each has its own content rule (core/post_rules.py)."""
    ARTICLE = "article"
    PHOTO = "photo"
    VIDEO = "video"


class ResolutionStatus(str, Enum):
    """Outcome tags of institution resolution. Returned as values, never raised."""
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    MALFORMED_EMAIL = "malformed_email"
    LOOKUP_FAILED = "lookup_failed"


class ToggleState(str, Enum):
    """Two-phase like toggle lifecycle."""
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"

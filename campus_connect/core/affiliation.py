"""Affiliation — pure email-domain parsing and resolution outcome types.

Invariants:
    - extract_domain is total: every string maps to a lowercase domain, possibly ""
    - "" is the no-domain sentinel (zero or 2+ "@"), never an exception
    - is_valid_email_format is a permissive UI gate, not a security boundary
    - Resolution carries exactly one ResolutionStatus; institution is set iff RESOLVED
    - No IO here — the async lookup lives in services/affiliation_resolver.py

Design Decisions:
    - Outcomes as values (Resolution) over exceptions: call sites branch on status
      to pick a UI message, so a raise would only be caught and re-mapped
      (ADR: signup/upload flows must degrade, not crash)
    - No TLD check, no DNS: institutions are matched by exact domain equality
"""

import re
from dataclasses import dataclass

from campus_connect.core.domain_types import (
    Domain, NO_DOMAIN, Institution, ResolutionStatus,
)

_EMAIL_FORMAT = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

_FALLBACK_DISPLAY_NAME = "User"


@dataclass(frozen=True)
class EmailParts:
    local_part: str
    domain: Domain


def split_email(email: str) -> EmailParts | None:
    """Split into local part and normalized domain. None unless exactly one "@"."""
    parts = email.split("@")
    if len(parts) != 2:
        return None
    return EmailParts(local_part=parts[0], domain=Domain(parts[1].lower()))


def extract_domain(email: str) -> Domain:
    """Lowercased substring after "@", or "" when there is not exactly one "@"."""
    parts = split_email(email)
    return parts.domain if parts else NO_DOMAIN


def is_valid_email_format(email: str) -> bool:
    return _EMAIL_FORMAT.fullmatch(email) is not None


def default_display_name(email: str, metadata_name: str | None = None) -> str:
    """Provider-supplied name, else the email local part, else "User"."""
    if metadata_name and metadata_name.strip():
        return metadata_name.strip()
    local = email.split("@")[0] if email else ""
    return local or _FALLBACK_DISPLAY_NAME


@dataclass(frozen=True)
class Resolution:
    """Tagged outcome of mapping a domain to an institution."""
    status: ResolutionStatus
    domain: Domain
    institution: Institution | None = None
    reason: str | None = None

    @classmethod
    def found(cls, domain: Domain, institution: Institution) -> "Resolution":
        return cls(ResolutionStatus.RESOLVED, domain, institution)

    @classmethod
    def not_found(cls, domain: Domain) -> "Resolution":
        return cls(ResolutionStatus.NOT_FOUND, domain)

    @classmethod
    def malformed(cls) -> "Resolution":
        return cls(ResolutionStatus.MALFORMED_EMAIL, NO_DOMAIN)

    @classmethod
    def failed(cls, domain: Domain, reason: str) -> "Resolution":
        return cls(ResolutionStatus.LOOKUP_FAILED, domain, reason=reason)

    @property
    def is_resolved(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED

    @property
    def is_retryable(self) -> bool:
        return self.status is ResolutionStatus.LOOKUP_FAILED


_MESSAGES: dict[ResolutionStatus, str] = {
    ResolutionStatus.MALFORMED_EMAIL: "Please enter a valid email address.",
    ResolutionStatus.NOT_FOUND: (
        "We couldn't match your email domain to a college. "
        "Please select your college manually."
    ),
    ResolutionStatus.LOOKUP_FAILED: (
        "We could not check your college right now. Please try again."
    ),
}


def describe_resolution(resolution: Resolution) -> str | None:
    """User-facing message for a non-resolved outcome; None when resolved."""
    return _MESSAGES.get(resolution.status)

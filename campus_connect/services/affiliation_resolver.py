"""Affiliation Resolver — maps a domain (or email) to at most one college.

Invariants:
    - Stateless: no cache, no memory between calls, never mutates colleges
    - Exactly one awaited lookup per call; no retry, no timeout of its own
    - Lookup exceptions become LOOKUP_FAILED — never reported as NOT_FOUND
    - Empty domain short-circuits without touching the lookup
    - Outcomes are returned as Resolution values, never raised

Design Decisions:
    - Shell side of core/affiliation.py: the pure parsing lives in core, the one
      awaited call lives here (ADR: functional core, imperative shell)
    - Broad except around the lookup: any transport failure, whatever the driver
      raises, must stay distinguishable from "no such college"
"""

import logging

from campus_connect.core.affiliation import Resolution, extract_domain
from campus_connect.core.domain_types import Domain, NO_DOMAIN
from campus_connect.core.repository_protocols import InstitutionLookup

logger = logging.getLogger(__name__)


async def resolve_institution(
    domain: Domain, lookup: InstitutionLookup,
) -> Resolution:
    """Look up the single college whose domain equals `domain`."""
    domain = Domain(domain.lower())
    if domain == NO_DOMAIN:
        return Resolution.not_found(domain)

    try:
        institution = await lookup.get_by_domain(domain)
    except Exception as e:
        logger.warning(
            f"Institution lookup failed: {e}",
            extra={"domain": domain, "resolution": "lookup_failed"},
        )
        return Resolution.failed(domain, str(e))

    if institution is None:
        logger.info(
            "No institution for domain",
            extra={"domain": domain, "resolution": "not_found"},
        )
        return Resolution.not_found(domain)
    return Resolution.found(domain, institution)


async def resolve_email(email: str, lookup: InstitutionLookup) -> Resolution:
    """extract_domain + resolve_institution; MALFORMED_EMAIL when there is no domain."""
    domain = extract_domain(email)
    if domain == NO_DOMAIN:
        return Resolution.malformed()
    return await resolve_institution(domain, lookup)

"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
      (infrastructure/repositories.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Async in Protocol: implementations do IO; the pure functions in core never await
    - InstitutionLookup is single-key equality on domain; it returns at most one row
      because colleges.domain is unique in the store (not deduplicated here)
"""

from typing import Protocol

from campus_connect.core.domain_types import (
    CollegeId, Domain, Institution, PostId, UserId,
)


class InstitutionLookup(Protocol):
    """Contract for finding a college by domain or by id — implemented by shell.

    Raises on transport failure; returns None when no college has the domain.
    """
    async def get_by_domain(self, domain: Domain) -> Institution | None: ...
    async def get_by_id(self, college_id: CollegeId) -> Institution | None: ...


class ProfileRepository(Protocol):
    """Contract for profile persistence — implemented by shell."""
    async def get(self, user_id: UserId) -> dict | None: ...
    async def create(
        self,
        user_id: UserId,
        email: str,
        display_name: str,
        college_id: CollegeId | None,
        is_verified: bool,
    ) -> dict: ...


class LikeRepository(Protocol):
    """Contract for like persistence — implemented by shell."""
    async def exists(self, post_id: PostId, user_id: UserId) -> bool: ...
    async def count(self, post_id: PostId) -> int: ...
    async def add(self, post_id: PostId, user_id: UserId) -> None: ...
    async def remove(self, post_id: PostId, user_id: UserId) -> None: ...

"""Like Toggle — two-phase optimistic like/unlike with rollback.

Invariants:
    - Legal transitions: IDLE -> PENDING -> COMMITTED | ROLLED_BACK (nothing else)
    - begin() flips liked and moves like_count by one; count never goes below 0
    - rollback() restores exactly the values captured at begin()
    - Illegal transitions raise InvalidTransitionError

Design Decisions:
    - Pure dataclass, no IO: the shell performs the remote write between
      begin() and commit()/rollback() (ADR: functional core, imperative shell)
"""

from dataclasses import dataclass, field

from campus_connect.core.domain_types import ToggleState
from campus_connect.core.errors import InvalidTransitionError


@dataclass
class LikeToggle:
    """Local like state for one (post, user) pair."""

    liked: bool
    like_count: int
    state: ToggleState = ToggleState.IDLE
    _previous: tuple[bool, int] | None = field(default=None, init=False, repr=False)

    def begin(self) -> bool:
        """Apply the optimistic flip. Returns the target liked value to write."""
        if self.state is not ToggleState.IDLE:
            raise InvalidTransitionError(self.state.value, "begin")
        self._previous = (self.liked, self.like_count)
        self.liked = not self.liked
        delta = 1 if self.liked else -1
        self.like_count = max(0, self.like_count + delta)
        self.state = ToggleState.PENDING
        return self.liked

    def commit(self) -> None:
        if self.state is not ToggleState.PENDING:
            raise InvalidTransitionError(self.state.value, "commit")
        self.state = ToggleState.COMMITTED

    def rollback(self) -> None:
        """Invert the optimistic flip after a failed remote write."""
        if self.state is not ToggleState.PENDING or self._previous is None:
            raise InvalidTransitionError(self.state.value, "rollback")
        self.liked, self.like_count = self._previous
        self.state = ToggleState.ROLLED_BACK

    def to_dict(self) -> dict:
        return {
            "liked": self.liked,
            "like_count": self.like_count,
            "status": self.state.value,
        }

"""Like Toggle — optimistic flip, commit, rollback, illegal transitions."""

import pytest

from campus_connect.core.domain_types import ToggleState
from campus_connect.core.errors import InvalidTransitionError
from campus_connect.core.like_toggle import LikeToggle


def test_begin_like_increments_and_targets_liked():
    toggle = LikeToggle(liked=False, like_count=3)
    assert toggle.begin() is True
    assert toggle.liked is True
    assert toggle.like_count == 4
    assert toggle.state is ToggleState.PENDING


def test_begin_unlike_decrements():
    toggle = LikeToggle(liked=True, like_count=3)
    assert toggle.begin() is False
    assert toggle.like_count == 2


def test_count_never_negative():
    toggle = LikeToggle(liked=True, like_count=0)
    toggle.begin()
    assert toggle.like_count == 0


def test_commit_keeps_optimistic_values():
    toggle = LikeToggle(liked=False, like_count=0)
    toggle.begin()
    toggle.commit()
    assert toggle.to_dict() == {"liked": True, "like_count": 1, "status": "committed"}


def test_rollback_restores_previous_values():
    toggle = LikeToggle(liked=True, like_count=7)
    toggle.begin()
    toggle.rollback()
    assert toggle.liked is True
    assert toggle.like_count == 7
    assert toggle.state is ToggleState.ROLLED_BACK


def test_commit_before_begin_raises():
    with pytest.raises(InvalidTransitionError):
        LikeToggle(liked=False, like_count=0).commit()


def test_rollback_before_begin_raises():
    with pytest.raises(InvalidTransitionError):
        LikeToggle(liked=False, like_count=0).rollback()


def test_double_begin_raises():
    toggle = LikeToggle(liked=False, like_count=0)
    toggle.begin()
    with pytest.raises(InvalidTransitionError):
        toggle.begin()


def test_terminal_states_reject_further_transitions():
    toggle = LikeToggle(liked=False, like_count=0)
    toggle.begin()
    toggle.commit()
    with pytest.raises(InvalidTransitionError) as exc:
        toggle.rollback()
    assert exc.value.current == "committed"
    assert exc.value.attempted == "rollback"

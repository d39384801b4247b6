"""Tests for the vote state machine."""

import pytest

from app.config import VoteValue
from app.core.exceptions import InvalidInput
from app.services.votes import VoteTransition, _validate_value, resolve_transition


@pytest.mark.unit
class TestResolveTransition:
    """Every (current state, requested value) pair."""

    @pytest.mark.parametrize(
        ("current", "value", "expected"),
        [
            (None, VoteValue.UP, VoteTransition(new_value=1, delta=1)),
            (None, VoteValue.DOWN, VoteTransition(new_value=-1, delta=-1)),
            (VoteValue.UP, VoteValue.UP, VoteTransition(new_value=None, delta=-1)),
            (VoteValue.DOWN, VoteValue.DOWN, VoteTransition(new_value=None, delta=1)),
            (VoteValue.DOWN, VoteValue.UP, VoteTransition(new_value=1, delta=2)),
            (VoteValue.UP, VoteValue.DOWN, VoteTransition(new_value=-1, delta=-2)),
        ],
    )
    def test_transition_table(self, current, value, expected) -> None:
        assert resolve_transition(current, value) == expected

    @pytest.mark.parametrize("value", VoteValue.ALL)
    def test_repeat_cancels_out(self, value: int) -> None:
        """Casting the same value twice nets to zero."""
        first = resolve_transition(None, value)
        second = resolve_transition(first.new_value, value)

        assert first.delta + second.delta == 0
        assert second.new_value is None

    def test_delta_always_moves_counter_to_new_state(self) -> None:
        """delta == new contribution - old contribution."""
        for current in (None, *VoteValue.ALL):
            for value in VoteValue.ALL:
                transition = resolve_transition(current, value)
                assert transition.delta == (transition.new_value or 0) - (current or 0)


@pytest.mark.unit
class TestValidateValue:
    @pytest.mark.parametrize("value", VoteValue.ALL)
    def test_accepts_polarities(self, value: int) -> None:
        assert _validate_value(value) == value

    @pytest.mark.parametrize("value", [0, 2, -2, True, False, 1.0, "1", None])
    def test_rejects_everything_else(self, value) -> None:
        with pytest.raises(InvalidInput):
            _validate_value(value)

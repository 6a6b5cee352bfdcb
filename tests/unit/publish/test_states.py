"""Unit tests for the publish state machine."""

import pytest

from oci_publish.publish.states import PublishState, StateMachine, StateTransition


class TestStateMachine:
    """Tests for StateMachine transitions."""

    def test_starts_in_init(self) -> None:
        """A new machine is in init with init recorded."""
        machine = StateMachine()

        assert machine.current is PublishState.INIT
        assert machine.history == [StateTransition(PublishState.INIT)]

    def test_walks_every_state_in_order(self) -> None:
        """Advancing one state at a time reaches done."""
        machine = StateMachine()
        for state in list(PublishState)[1:]:
            machine.advance(state)

        assert machine.current is PublishState.DONE
        assert [t.state for t in machine.history] == list(PublishState)

    def test_cannot_jump_ahead(self) -> None:
        """Skipping over a state without recording it is rejected."""
        machine = StateMachine()

        with pytest.raises(RuntimeError, match="init -> args-resolved"):
            machine.advance(PublishState.ARGS_RESOLVED)

    def test_cannot_go_back(self) -> None:
        """Transitions only move forward."""
        machine = StateMachine()
        machine.advance(PublishState.VERSION_RESOLVED)

        with pytest.raises(RuntimeError):
            machine.advance(PublishState.INIT)

    def test_cannot_repeat_state(self) -> None:
        """Each state is entered once."""
        machine = StateMachine()
        machine.advance(PublishState.VERSION_RESOLVED)

        with pytest.raises(RuntimeError):
            machine.advance(PublishState.VERSION_RESOLVED)

    def test_skipped_states_are_recorded(self) -> None:
        """A skipped state is still part of the history."""
        machine = StateMachine()
        machine.advance(PublishState.VERSION_RESOLVED)
        machine.advance(PublishState.ARGS_RESOLVED)
        transition = machine.advance(
            PublishState.IMAGE_PUBLISHED, skipped=True, reason="dry run"
        )

        assert transition.reason == "dry run"
        assert machine.skipped_states == [PublishState.IMAGE_PUBLISHED]


def test_state_order_matches_definition() -> None:
    """Order follows enum definition order."""
    assert PublishState.INIT.order == 0
    assert PublishState.DONE.order == len(PublishState) - 1

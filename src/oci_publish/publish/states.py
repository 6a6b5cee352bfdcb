"""Publish state machine states and the run history they produce."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PublishState(Enum):
    """Publish states in their only allowed order."""

    INIT = "init"
    VERSION_RESOLVED = "version-resolved"
    ARGS_RESOLVED = "args-resolved"
    IMAGE_PUBLISHED = "image-published"
    CHARTS_DISCOVERED = "charts-discovered"
    CHARTS_PUBLISHED = "charts-published"
    VISIBILITY_APPLIED = "visibility-applied"
    DONE = "done"

    @property
    def order(self) -> int:
        return _ORDER[self]


_ORDER = {state: index for index, state in enumerate(PublishState)}


@dataclass(frozen=True)
class StateTransition:
    """One entry of the run history."""

    state: PublishState
    skipped: bool = False
    reason: str = ""


@dataclass
class StateMachine:
    """Forward-only state tracker.

    Skipping a state still records it, so every state appears in the
    history exactly once.
    """

    current: PublishState = PublishState.INIT
    history: list[StateTransition] = field(
        default_factory=lambda: [StateTransition(PublishState.INIT)]
    )

    def advance(
        self, state: PublishState, *, skipped: bool = False, reason: str = ""
    ) -> StateTransition:
        """Move to ``state``.

        Raises:
            RuntimeError: If ``state`` is not the one directly after the
                          current state
        """
        if state.order != self.current.order + 1:
            raise RuntimeError(
                f"Illegal transition {self.current.value} -> {state.value}"
            )
        transition = StateTransition(state=state, skipped=skipped, reason=reason)
        self.current = state
        self.history.append(transition)
        return transition

    @property
    def skipped_states(self) -> list[PublishState]:
        return [t.state for t in self.history if t.skipped]

"""Scope lifecycle state machine implementation."""

from enum import Enum, auto
from typing import ClassVar

from scopeconf.errors import ScopeconfError


class ScopeState(Enum):
    """Scope lifecycle states.

    State transitions:
        UNLOADED -> LOADED: Merged configuration attached to the scope
        LOADED: Terminal, the scope is immutable from here on
    """

    UNLOADED = auto()
    LOADED = auto()


class ScopeStateError(ScopeconfError):
    """Raised when an invalid state transition is attempted."""

    kind = "scope_state_error"

    def __init__(self, from_state: ScopeState, to_state: ScopeState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid scope state transition: {from_state.name} -> {to_state.name}"
        )


class ScopeStateMachine:
    """State machine for the scope lifecycle.

    Enforces that a scope is loaded at most once.
    """

    VALID_TRANSITIONS: ClassVar[dict[ScopeState, set[ScopeState]]] = {
        ScopeState.UNLOADED: {ScopeState.LOADED},
        ScopeState.LOADED: set(),
    }

    def __init__(self) -> None:
        """Initialize the state machine in UNLOADED state."""
        self._state = ScopeState.UNLOADED

    @property
    def state(self) -> ScopeState:
        """Get the current state."""
        return self._state

    def can_transition(self, to_state: ScopeState) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            to_state: The target state.

        Returns:
            True if the transition is valid, False otherwise.
        """
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: ScopeState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            ScopeStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            raise ScopeStateError(self._state, to_state)
        self._state = to_state

    def is_loaded(self) -> bool:
        """Check if the scope holds configuration."""
        return self._state == ScopeState.LOADED

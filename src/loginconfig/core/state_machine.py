"""
LoginConfig State Machine Base

Abstract base class for login attempt state machines with:
- Explicit transition tables
- Complete transition history for diagnostics
- JSON trace export

Design Principles:
1. Pure transition functions (no side effects in handlers)
2. All state changes through explicit transitions
3. Complete transition history for replay/diagnostics
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Tuple,
    TypeVar,
)
import json
import structlog

import attrs
from returns.result import Failure, Result, Success

logger = structlog.get_logger()


S = TypeVar("S", bound=Enum)  # State type
E = TypeVar("E")  # Event type
C = TypeVar("C")  # Context type


@attrs.define(frozen=True, slots=True)
class Transition(Generic[S, E]):
    """Immutable record of a state transition."""

    from_state: S
    event_type: str
    to_state: S
    timestamp: datetime
    event_data: Dict[str, Any] = attrs.Factory(dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "from_state": self.from_state.name,
            "event_type": self.event_type,
            "to_state": self.to_state.name,
            "timestamp": self.timestamp.isoformat(),
            "event_data": self.event_data,
        }


# Type alias for transition table entry
TransitionEntry = Tuple[S, Callable[[Any, Any], Any]]


@attrs.define
class StateMachineBase(ABC, Generic[S, E, C]):
    """
    Base state machine with transition history.

    Usage:
        class AttemptMachine(StateMachineBase[AttemptState, object, AttemptContext]):
            def initial_state(self) -> AttemptState:
                return AttemptState.INITIAL

            def transition_table(self):
                return {
                    (AttemptState.INITIAL, Resolved): (
                        AttemptState.RESOLVED,
                        self._handle_resolved,
                    ),
                }
    """

    _state: S = attrs.field(alias="_state")
    _context: C = attrs.field(alias="_context")
    _history: List[Transition[S, E]] = attrs.field(factory=list, alias="_history")
    _logger: Any = attrs.field(factory=lambda: structlog.get_logger(), alias="_logger")

    @abstractmethod
    def initial_state(self) -> S:
        """Return the initial state for this state machine."""
        ...

    @abstractmethod
    def transition_table(
        self,
    ) -> Dict[Tuple[S, type], TransitionEntry]:
        """
        Return the transition table.

        Maps (current_state, event_type) to (next_state, context_updater).
        The context_updater is a pure function of (event, context).
        """
        ...

    @property
    def state(self) -> S:
        """Current state (read-only)."""
        return self._state

    @property
    def context(self) -> C:
        """Current context (read-only)."""
        return self._context

    def process_event(self, event: E) -> Result[S, str]:
        """
        Process an event and transition to the next state.

        Returns:
            Success(new_state) if transition succeeded
            Failure(error_message) if no transition is defined
        """
        event_type = type(event)
        key = (self._state, event_type)

        table = self.transition_table()
        if key not in table:
            self._logger.warning(
                "invalid_transition",
                current_state=self._state.name,
                event_type=event_type.__name__,
            )
            return Failure(
                f"No transition for state {self._state.name} with event {event_type.__name__}"
            )

        next_state, context_updater = table[key]
        new_context = context_updater(event, self._context)

        self._history.append(
            Transition(
                from_state=self._state,
                event_type=event_type.__name__,
                to_state=next_state,
                timestamp=datetime.now(timezone.utc),
                event_data=self._snapshot_event(event),
            )
        )

        self._logger.debug(
            "state_transition",
            from_state=self._state.name,
            to_state=next_state.name,
            event_type=event_type.__name__,
        )

        self._state = next_state
        self._context = new_context

        return Success(next_state)

    def get_trace(self) -> List[Transition[S, E]]:
        """Return a copy of the transition history."""
        return list(self._history)

    def export_trace_json(self) -> str:
        """Export trace as JSON string."""
        return json.dumps(
            {
                "initial_state": self.initial_state().name,
                "final_state": self._state.name,
                "transitions": [t.to_dict() for t in self._history],
            },
            indent=2,
        )

    def _snapshot_event(self, event: E) -> Dict[str, Any]:
        """Create a serializable snapshot of the event."""
        if attrs.has(type(event)):
            return attrs.asdict(
                event,
                recurse=False,
                filter=lambda attr, value: not attr.name.startswith("_"),
                value_serializer=self._serialize_value,
            )
        return {"type": type(event).__name__}

    @staticmethod
    def _serialize_value(
        inst: type, field: attrs.Attribute, value: Any  # noqa: ARG004
    ) -> Any:
        """Serialize values for JSON export."""
        if isinstance(value, Enum):
            return value.name
        if isinstance(value, BaseException):
            return str(value)
        if isinstance(value, tuple):
            return [str(item) for item in value]
        if attrs.has(type(value)):
            return f"<{type(value).__name__}>"
        return value

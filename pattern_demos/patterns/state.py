"""
State pattern demo.

A :class:`Context` delegates ``request1``/``request2`` to its current state,
and a state may move its context to another state while handling a request.

The context owns its current state. A state only keeps a weak reference back
to the context that activated it, which it uses to request transitions.
"""

# pylint: disable=too-few-public-methods

import weakref
from typing import Dict, List, Mapping, Optional, Protocol

from pattern_demos.observability.hooks import (
    DemoEvent,
    EventHookRegistry,
    default_hook_registry,
)
from pattern_demos.observability.logging import get_logger
from pattern_demos.patterns.base import PatternDemo

_logger = get_logger("state", demo_name="state")

REQUESTS = ("request1", "request2")


class StateNotBoundError(RuntimeError):
    """A state needed its context but has none (never activated, or gone)."""


class State(Protocol):
    """What a :class:`Context` needs from its current state."""

    @property
    def name(self) -> str:
        """Name used in transition messages."""

    def bind(self, context: "Context") -> None:
        """Remember ``context`` as the owner of this state."""

    def handle1(self) -> None:
        """Handle ``request1``."""

    def handle2(self) -> None:
        """Handle ``request2``."""


class BoundState:
    """Holds the non-owning back-reference from a state to its context."""

    def __init__(self) -> None:
        self._context_ref: Optional["weakref.ReferenceType[Context]"] = None

    @property
    def name(self) -> str:
        """Class name of the state."""
        return type(self).__name__

    @property
    def context(self) -> "Context":
        """The context this state is active in.

        Raises:
            StateNotBoundError: If the state was never activated or its
                context no longer exists
        """
        context = self._context_ref() if self._context_ref is not None else None
        if context is None:
            raise StateNotBoundError(f"{self.name} is not bound to a context")
        return context

    def bind(self, context: "Context") -> None:
        """Point this state at ``context`` without keeping it alive."""
        self._context_ref = weakref.ref(context)


class Context:
    """Holds exactly one current state and forwards requests to it.

    Usage:
        context = Context(ConcreteStateA())
        context.request1()  # A handles it and moves the context to B
        context.request2()  # B handles it and moves the context back to A
    """

    def __init__(
        self,
        state: State,
        hook_registry: Optional[EventHookRegistry] = None,
    ) -> None:
        """Initialize the context and activate ``state``.

        Args:
            state: Initial state
            hook_registry: Event hook registry (defaults to global registry)
        """
        self._hooks = hook_registry or default_hook_registry
        self.history: List[str] = []
        self._state: Optional[State] = None
        self.transition_to(state)

    @property
    def state(self) -> State:
        """The current state.

        Raises:
            RuntimeError: If the context was never given a state
        """
        if self._state is None:
            raise RuntimeError("Context has no current state")
        return self._state

    def transition_to(self, state: State) -> None:
        """Make ``state`` current. No handler is run as part of a transition."""
        previous = self._state.name if self._state is not None else None
        print(f"Context: Transition to {state.name}.")
        self._state = state
        state.bind(self)
        self.history.append(state.name)

        _logger.debug(
            f"Transition {previous} -> {state.name}", step=len(self.history)
        )
        self._hooks.trigger(
            DemoEvent.STATE_TRANSITION,
            demo_name="state",
            from_state=previous,
            to_state=state.name,
        )

    def request1(self) -> None:
        """Forward ``request1`` to the current state."""
        self.state.handle1()

    def request2(self) -> None:
        """Forward ``request2`` to the current state."""
        self.state.handle2()


class ConcreteStateA(BoundState):
    """Moves the context to B on ``request1``."""

    def handle1(self) -> None:
        """Handle request1 and move the context to B."""
        print("ConcreteStateA handles request1.")
        print("ConcreteStateA wants to change the state of the context.")
        self.context.transition_to(ConcreteStateB())

    def handle2(self) -> None:
        """Handle request2 without a transition."""
        print("ConcreteStateA handles request2.")


class ConcreteStateB(BoundState):
    """Moves the context back to A on ``request2``."""

    def handle1(self) -> None:
        """Handle request1 without a transition."""
        print("ConcreteStateB handles request1.")

    def handle2(self) -> None:
        """Handle request2 and move the context back to A."""
        print("ConcreteStateB handles request2.")
        print("ConcreteStateB wants to change the state of the context.")
        self.context.transition_to(ConcreteStateA())


class TableState(BoundState):
    """A state whose transitions come from a :class:`StateTable`."""

    def __init__(
        self,
        name: str,
        transitions: Mapping[str, Optional[str]],
        table: "StateTable",
    ) -> None:
        super().__init__()
        self._name = name
        self._transitions = dict(transitions)
        self._table = table

    @property
    def name(self) -> str:
        """Name of the state in its table."""
        return self._name

    def handle1(self) -> None:
        """Handle request1 as the table says."""
        self._handle("request1")

    def handle2(self) -> None:
        """Handle request2 as the table says."""
        self._handle("request2")

    def _handle(self, request: str) -> None:
        print(f"{self._name} handles {request}.")
        target = self._transitions.get(request)
        if target is None:
            return
        print(f"{self._name} wants to change the state of the context.")
        self.context.transition_to(self._table.create(target))


class StateTable:
    """Transition table for states built at runtime.

    Each state maps a request name to the state it moves to, or to ``None``
    to stay put. Missing requests also stay put.

    Usage:
        table = StateTable({
            "Idle": {"request1": "Running"},
            "Running": {"request1": "Paused", "request2": "Idle"},
            "Paused": {"request2": "Running"},
        })
        context = Context(table.create("Idle"))
    """

    def __init__(self, table: Mapping[str, Mapping[str, Optional[str]]]) -> None:
        """Validate and store the table.

        Raises:
            ValueError: If the table is empty, names an unknown request, or
                targets a state it does not define
        """
        if not table:
            raise ValueError("State table must define at least one state")

        for state_name, transitions in table.items():
            for request, target in transitions.items():
                if request not in REQUESTS:
                    raise ValueError(
                        f"Unknown request '{request}' in state '{state_name}'"
                    )
                if target is not None and target not in table:
                    raise ValueError(
                        f"State '{state_name}' transitions to unknown state '{target}'"
                    )

        self._table: Dict[str, Dict[str, Optional[str]]] = {
            name: dict(transitions) for name, transitions in table.items()
        }

    @property
    def state_names(self) -> List[str]:
        """Names of the states in the table, in definition order."""
        return list(self._table)

    def create(self, name: str) -> TableState:
        """Create a fresh state called ``name``.

        Raises:
            ValueError: If the table has no such state
        """
        if name not in self._table:
            raise ValueError(f"Unknown state: {name}")
        return TableState(name, self._table[name], self)


def build_state_table(table: Mapping[str, Mapping[str, Optional[str]]]) -> StateTable:
    """Build a :class:`StateTable` from a plain mapping."""
    return StateTable(table)


class StateDemo(PatternDemo):
    """Bounce a context between two states."""

    name = "state"
    title = "State - a context switching between two states"

    def run(self) -> None:
        context = Context(ConcreteStateA(), hook_registry=self.hooks)
        context.request1()
        context.request2()

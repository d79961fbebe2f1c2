"""
Lifecycle event hooks for the pattern demos.

Components fire events here at their interesting moments (an observer
attached, a state transition, a strategy swap) so that external code can
watch a demo run without touching its printed output. Hooks are isolated
from the demos: a hook that raises is logged and skipped.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from pattern_demos.observability.logging import get_logger

_logger = get_logger("hooks")


class DemoEvent(Enum):
    """Everything a hook can subscribe to."""

    # Runner lifecycle
    DEMO_START = "demo_start"
    DEMO_END = "demo_end"
    DEMO_ERROR = "demo_error"

    # Observer
    OBSERVER_ATTACHED = "observer_attached"
    OBSERVER_DETACHED = "observer_detached"
    OBSERVERS_NOTIFIED = "observers_notified"

    # State
    STATE_TRANSITION = "state_transition"

    # Strategy
    STRATEGY_SWAPPED = "strategy_swapped"

    # Decorator
    CONDIMENT_ADDED = "condiment_added"

    CUSTOM = "custom"


@dataclass(frozen=True)
class EventData:
    """What a hook receives.

    Attributes:
        event: The event that fired
        demo_name: Demo the event came from, when known
        error: Exception raised by the demo (DEMO_ERROR only)
        duration_ms: How long the demo ran (DEMO_END only)
        data: Event-specific values such as ``to_state`` or ``condiment``
        timestamp: When the event fired
    """

    event: DemoEvent
    demo_name: Optional[str] = None
    error: Optional[Exception] = None
    duration_ms: Optional[float] = None
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_kwargs(cls, event: DemoEvent, **kwargs: Any) -> "EventData":
        """Build a payload, sending keywords that are not fields into ``data``."""
        named = {f.name for f in fields(cls)} - {"event", "data", "timestamp"}
        known = {k: v for k, v in kwargs.items() if k in named}
        extra = {k: v for k, v in kwargs.items() if k not in named}
        return cls(event, data=extra, **known)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the payload, leaving out unset fields."""
        result: Dict[str, Any] = {
            "event": self.event.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.demo_name:
            result["demo_name"] = self.demo_name
        if self.error is not None:
            result["error"] = str(self.error)
        if self.duration_ms is not None:
            result["duration_ms"] = self.duration_ms
        if self.data:
            result["data"] = dict(self.data)
        return result


HookCallback = Callable[[EventData], None]


class EventHookRegistry:
    """Callbacks keyed by event. The ``None`` key holds hooks for every event.

    Usage:
        hooks = EventHookRegistry()
        hooks.on(DemoEvent.STATE_TRANSITION, print_transition)
        hooks.on_all(recorder)
        hooks.trigger(DemoEvent.STATE_TRANSITION, demo_name="state", to_state="B")
        with hooks.paused():
            run_quietly()
    """

    def __init__(self) -> None:
        self._callbacks: Dict[Optional[DemoEvent], List[HookCallback]] = {}
        self._paused = 0

    def on(self, event: Optional[DemoEvent], callback: HookCallback) -> None:
        """Call ``callback`` whenever ``event`` fires (every event if None).

        Registering the same callback twice for one event has no effect.
        """
        callbacks = self._callbacks.setdefault(event, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def on_all(self, callback: HookCallback) -> None:
        self.on(None, callback)

    def off(self, event: Optional[DemoEvent], callback: HookCallback) -> None:
        """Stop calling ``callback`` for ``event``. Unknown callbacks are ignored."""
        callbacks = self._callbacks.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def clear(self) -> None:
        self._callbacks.clear()

    def count(self, event: Optional[DemoEvent] = None) -> int:
        """Number of callbacks registered for ``event`` (global ones if None)."""
        return len(self._callbacks.get(event, []))

    @property
    def is_paused(self) -> bool:
        return self._paused > 0

    @contextmanager
    def paused(self) -> Iterator["EventHookRegistry"]:
        """Suppress every event fired inside the ``with`` block. Nests."""
        self._paused += 1
        try:
            yield self
        finally:
            self._paused -= 1

    def trigger(self, event: DemoEvent, **kwargs: Any) -> None:
        """Fire ``event``, passing ``kwargs`` through :meth:`EventData.from_kwargs`.

        Event-specific hooks run first, then global ones, each in
        registration order.
        """
        if self.is_paused:
            return

        data = EventData.from_kwargs(event, **kwargs)
        for callback in [*self._callbacks.get(event, []), *self._callbacks.get(None, [])]:
            try:
                callback(data)
            except (TypeError, ValueError, RuntimeError, AttributeError, LookupError) as e:
                _logger.warning(
                    f"Hook {getattr(callback, '__name__', callback)!r} failed "
                    f"on {event.value}: {e}",
                    demo_name=data.demo_name,
                )


default_hook_registry = EventHookRegistry()

"""
Observer pattern demo.

A weather station keeps a list of displays and pushes every change of its
reading to all of them. Displays pull the reading back from the station they
were handed, and only rely on it exposing a ``state`` shaped like a
:class:`WeatherReading`.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from pattern_demos.observability.hooks import (
    DemoEvent,
    EventHookRegistry,
    default_hook_registry,
)
from pattern_demos.observability.logging import get_logger
from pattern_demos.patterns.base import PatternDemo

_logger = get_logger("observer", demo_name="observer")


@dataclass(frozen=True)
class WeatherReading:
    """The three values a station publishes."""

    a: float
    b: float
    c: float

    def __str__(self) -> str:
        return f"a={self.a}, b={self.b}, c={self.c}"


class Reading(Protocol):
    """Anything carrying the three published values."""

    # pylint: disable=too-few-public-methods

    a: float
    b: float
    c: float


READING_FIELDS = ("a", "b", "c")


class ReadingSource(Protocol):
    """Anything that exposes a current weather reading."""

    # pylint: disable=too-few-public-methods

    state: Optional[Reading]


class WeatherObserver(Protocol):
    """Receives the subject whenever it changes."""

    # pylint: disable=too-few-public-methods

    def update(self, subject: object) -> None:
        """React to a change of ``subject``."""


class WeatherStation:
    """Observable subject holding the latest reading.

    Observers are kept in registration order and never twice. Duplicate
    registration and removal of an unknown observer are reported on stdout
    and otherwise ignored.
    """

    def __init__(self, hook_registry: Optional[EventHookRegistry] = None) -> None:
        self.state: Optional[WeatherReading] = None
        self._observers: List[WeatherObserver] = []
        self._hooks = hook_registry or default_hook_registry

    @property
    def observers(self) -> Tuple[WeatherObserver, ...]:
        """Registered observers in registration order."""
        return tuple(self._observers)

    def _index_of(self, observer: WeatherObserver) -> Optional[int]:
        # identity, not equality: equal observers are still distinct
        for index, registered in enumerate(self._observers):
            if registered is observer:
                return index
        return None

    def register(self, observer: WeatherObserver) -> bool:
        """Attach an observer.

        Returns:
            True if the observer was added, False if it was already attached
        """
        if self._index_of(observer) is not None:
            print("Subject: Observer has been attached already.")
            return False

        self._observers.append(observer)
        print("Subject: Attached an observer.")
        self._hooks.trigger(
            DemoEvent.OBSERVER_ATTACHED,
            demo_name="observer",
            observer=type(observer).__name__,
            count=len(self._observers),
        )
        return True

    def remove(self, observer: WeatherObserver) -> bool:
        """Detach an observer.

        Returns:
            True if the observer was removed, False if it was not attached
        """
        index = self._index_of(observer)
        if index is None:
            print("Subject: Nonexistent observer.")
            return False

        del self._observers[index]
        print("Subject: Detached an observer.")
        self._hooks.trigger(
            DemoEvent.OBSERVER_DETACHED,
            demo_name="observer",
            observer=type(observer).__name__,
            count=len(self._observers),
        )
        return True

    def notify_all(self) -> None:
        """Call ``update`` on every observer, in registration order.

        An exception raised by an observer propagates and the remaining
        observers are not notified.
        """
        print("Subject: Notifying observers...")
        for observer in list(self._observers):
            observer.update(self)
        self._hooks.trigger(
            DemoEvent.OBSERVERS_NOTIFIED,
            demo_name="observer",
            count=len(self._observers),
        )

    def compute_state(self, a: float = 1, b: float = 2, c: float = 3) -> None:
        """Replace the reading, then notify every observer."""
        self.state = WeatherReading(a, b, c)
        print(f"Subject: My state has just changed to: {self.state}")
        _logger.debug("Reading replaced", extra={"a": a, "b": b, "c": c})
        self.notify_all()


class _WeatherDisplay:
    """Prints the reading of any :class:`ReadingSource` it is notified by."""

    label = ""

    def __init__(self) -> None:
        self.last_reading: Optional[Reading] = None

    def update(self, subject: object) -> None:
        """Print the subject's reading, or do nothing if it has none."""
        reading = getattr(subject, "state", None)
        if reading is None or not all(
            hasattr(reading, name) for name in READING_FIELDS
        ):
            _logger.debug(f"{self.label} ignored a subject without a reading")
            return

        self.last_reading = reading
        print(f"{self.label}: {reading.a}, {reading.b}, {reading.c}")


class MobileWeatherDisplay(_WeatherDisplay):
    """Display shown on mobile devices."""

    label = "MobileWeatherDisplay"


class WebWeatherDisplay(_WeatherDisplay):
    """Display shown on the web site."""

    label = "WebWeatherDisplay"


class ObserverDemo(PatternDemo):
    """Attach two displays to a station and change its reading."""

    name = "observer"
    title = "Observer - weather station pushes readings to displays"

    def run(self) -> None:
        station = WeatherStation(hook_registry=self.hooks)
        mobile = MobileWeatherDisplay()
        web = WebWeatherDisplay()

        station.register(mobile)
        station.register(web)
        station.register(mobile)

        station.compute_state()
        station.compute_state(5, 6, 7)

        station.remove(web)
        station.remove(web)

        station.compute_state(8, 9, 10)

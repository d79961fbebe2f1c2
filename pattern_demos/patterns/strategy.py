"""
Strategy pattern demo.

A :class:`Duck` is composed of one strategy per behavior (flying, quacking,
sleeping, swimming). Strategies are interchangeable, stateless, and can be
swapped for good by passing a new one when performing the behavior.
"""

# pylint: disable=too-few-public-methods

from typing import Dict, Optional, Protocol

from pattern_demos.observability.hooks import (
    DemoEvent,
    EventHookRegistry,
    default_hook_registry,
)
from pattern_demos.observability.logging import get_logger
from pattern_demos.patterns.base import PatternDemo

_logger = get_logger("strategy", demo_name="strategy")

SLOTS = ("fly", "quack", "sleep", "swim")


class UnsetStrategyError(LookupError):
    """A duck was asked to perform a behavior it has no strategy for."""

    def __init__(self, duck_name: str, slot: str) -> None:
        super().__init__(f"{duck_name} has no {slot} strategy")
        self.duck_name = duck_name
        self.slot = slot


class FlyStrategy(Protocol):
    """How a duck flies."""

    def fly(self, name: str) -> str: ...


class QuackStrategy(Protocol):
    """How a duck quacks."""

    def quack(self, name: str) -> str: ...


class SleepStrategy(Protocol):
    """How a duck sleeps."""

    def sleep(self, name: str) -> str: ...


class SwimStrategy(Protocol):
    """How a duck swims."""

    def swim(self, name: str) -> str: ...


class ConcreteFly:
    """Flies."""

    def fly(self, name: str) -> str:
        return f"{name} is flying"


class ConcreteNoFly:
    """Cannot fly."""

    def fly(self, name: str) -> str:
        return f"{name} can't fly"


class ConcreteQuack:
    """Quacks."""

    def quack(self, name: str) -> str:
        return f"{name}, Quacks"


class ConcreteNoQuack:
    """Stays silent."""

    def quack(self, name: str) -> str:
        return f"{name}, No Quack"


class ConcreteSleep:
    """Sleeps."""

    def sleep(self, name: str) -> str:
        return f"{name} is sleeping"


class ConcreteSwim:
    """Swims."""

    def swim(self, name: str) -> str:
        return f"{name} is swimming"


class ConcreteNoSwim:
    """Cannot swim."""

    def swim(self, name: str) -> str:
        return f"{name} can't swim"


class Duck:
    """A named duck with optional behavior strategies.

    Usage:
        duck = Duck("City Duck", fly=ConcreteFly(), quack=ConcreteQuack())
        duck.perform_fly()
        duck.perform_quack(ConcreteNoQuack())  # replaces the quack strategy
        duck.perform_sleep()  # raises UnsetStrategyError
    """

    # pylint: disable=too-many-arguments

    def __init__(
        self,
        name: str,
        fly: Optional[FlyStrategy] = None,
        quack: Optional[QuackStrategy] = None,
        sleep: Optional[SleepStrategy] = None,
        swim: Optional[SwimStrategy] = None,
        hook_registry: Optional[EventHookRegistry] = None,
    ) -> None:
        self.name = name
        self._strategies: Dict[str, Optional[object]] = {
            "fly": fly,
            "quack": quack,
            "sleep": sleep,
            "swim": swim,
        }
        self._hooks = hook_registry or default_hook_registry

    def has_strategy(self, slot: str) -> bool:
        """Whether a strategy is assigned to ``slot``.

        Raises:
            ValueError: If ``slot`` is not a known behavior
        """
        if slot not in self._strategies:
            raise ValueError(f"Unknown strategy slot: {slot}")
        return self._strategies[slot] is not None

    def strategy(self, slot: str) -> object:
        """Return the strategy assigned to ``slot``.

        Raises:
            ValueError: If ``slot`` is not a known behavior
            UnsetStrategyError: If nothing was ever assigned to ``slot``
        """
        if not self.has_strategy(slot):
            raise UnsetStrategyError(self.name, slot)
        return self._strategies[slot]

    def _swap(self, slot: str, strategy: Optional[object]) -> None:
        if strategy is None:
            return
        previous = self._strategies[slot]
        self._strategies[slot] = strategy
        _logger.debug(f"{self.name}: {slot} strategy set to {type(strategy).__name__}")
        self._hooks.trigger(
            DemoEvent.STRATEGY_SWAPPED,
            demo_name="strategy",
            duck=self.name,
            slot=slot,
            previous=type(previous).__name__ if previous is not None else None,
            current=type(strategy).__name__,
        )

    def perform_fly(self, strategy: Optional[FlyStrategy] = None) -> str:
        """Print and return the fly line, replacing the strategy if one is given.

        Raises:
            UnsetStrategyError: If no fly strategy was ever assigned
        """
        self._swap("fly", strategy)
        fly: FlyStrategy = self.strategy("fly")  # type: ignore[assignment]
        line = fly.fly(self.name)
        print(line)
        return line

    def perform_quack(self, strategy: Optional[QuackStrategy] = None) -> str:
        """Like :meth:`perform_fly`, for the quack slot."""
        self._swap("quack", strategy)
        quack: QuackStrategy = self.strategy("quack")  # type: ignore[assignment]
        line = quack.quack(self.name)
        print(line)
        return line

    def perform_sleep(self, strategy: Optional[SleepStrategy] = None) -> str:
        """Like :meth:`perform_fly`, for the sleep slot."""
        self._swap("sleep", strategy)
        sleep: SleepStrategy = self.strategy("sleep")  # type: ignore[assignment]
        line = sleep.sleep(self.name)
        print(line)
        return line

    def perform_swim(self, strategy: Optional[SwimStrategy] = None) -> str:
        """Like :meth:`perform_fly`, for the swim slot."""
        self._swap("swim", strategy)
        swim: SwimStrategy = self.strategy("swim")  # type: ignore[assignment]
        line = swim.swim(self.name)
        print(line)
        return line

    def __repr__(self) -> str:
        assigned = [slot for slot in SLOTS if self._strategies[slot] is not None]
        return f"Duck(name={self.name!r}, strategies={assigned})"


class StrategyDemo(PatternDemo):
    """Two ducks composed from different strategies."""

    name = "strategy"
    title = "Strategy - ducks composed from swappable behaviors"

    def run(self) -> None:
        city_duck = Duck(
            "City Duck",
            fly=ConcreteFly(),
            quack=ConcreteQuack(),
            hook_registry=self.hooks,
        )
        city_duck.perform_fly()
        city_duck.perform_quack()
        city_duck.perform_quack(ConcreteNoQuack())

        rubber_duck = Duck(
            "Rubber Duck",
            fly=ConcreteNoFly(),
            quack=ConcreteNoQuack(),
            hook_registry=self.hooks,
        )
        rubber_duck.perform_fly()
        rubber_duck.perform_fly(ConcreteFly())
        rubber_duck.perform_quack()

        try:
            rubber_duck.perform_sleep()
        except UnsetStrategyError as e:
            print(f"Error: {e}")

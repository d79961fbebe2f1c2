"""
Decorator pattern demo.

Beverages are wrapped in condiments. Every condiment wraps exactly one
beverage (plain or already decorated), appends its label to the description
and adds its price to the cost. Nothing is ever mutated: wrapping returns a
new object and leaves the wrapped one as it was.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from pattern_demos.observability.hooks import (
    DemoEvent,
    EventHookRegistry,
    default_hook_registry,
)
from pattern_demos.patterns.base import PatternDemo


class Beverage(Protocol):
    """Contract shared by plain beverages and condiments."""

    def description(self) -> str: ...

    def cost(self) -> float: ...

    def size(self) -> int: ...


class BeverageKind(Enum):
    """Stock beverages: (description, cost, size)."""

    ESPRESSO = ("Espresso", 1.99, 1)
    HOUSE_BLEND = ("House Blend Coffee", 2.50, 1)

    def __init__(self, label: str, price: float, cup_size: int) -> None:
        self.label = label
        self.price = price
        self.cup_size = cup_size


class CondimentKind(Enum):
    """Stock condiments: (label, price increment)."""

    MOCHA = ("Mocha", 0.20)
    SOY = ("Soy", 0.15)

    def __init__(self, label: str, increment: float) -> None:
        self.label = label
        self.increment = increment


@dataclass(frozen=True)
class BaseBeverage:
    """An undecorated beverage."""

    kind: BeverageKind

    def description(self) -> str:
        return self.kind.label

    def cost(self) -> float:
        return self.kind.price

    def size(self) -> int:
        return self.kind.cup_size


@dataclass(frozen=True)
class Condiment:
    """A condiment wrapped around another beverage."""

    wrapped: Beverage
    kind: CondimentKind

    def description(self) -> str:
        return f"{self.wrapped.description()}, {self.kind.label}"

    def cost(self) -> float:
        return self.wrapped.cost() + self.kind.increment

    def size(self) -> int:
        return self.wrapped.size()


def Espresso() -> BaseBeverage:  # pylint: disable=invalid-name
    """A plain espresso."""
    return BaseBeverage(BeverageKind.ESPRESSO)


def HouseBlend() -> BaseBeverage:  # pylint: disable=invalid-name
    """A plain house blend."""
    return BaseBeverage(BeverageKind.HOUSE_BLEND)


def Mocha(beverage: Beverage) -> Condiment:  # pylint: disable=invalid-name
    """Wrap ``beverage`` in mocha."""
    return Condiment(beverage, CondimentKind.MOCHA)


def Soy(beverage: Beverage) -> Condiment:  # pylint: disable=invalid-name
    """Wrap ``beverage`` in soy."""
    return Condiment(beverage, CondimentKind.SOY)


def decorate(
    beverage: Beverage,
    *kinds: CondimentKind,
    hook_registry: Optional[EventHookRegistry] = None,
) -> Beverage:
    """Wrap ``beverage`` in each condiment of ``kinds``, first one innermost.

    With no kinds the beverage is returned as is.
    """
    hooks = hook_registry or default_hook_registry
    for kind in kinds:
        beverage = Condiment(beverage, kind)
        hooks.trigger(
            DemoEvent.CONDIMENT_ADDED,
            demo_name="decorator",
            condiment=kind.label,
            cost=beverage.cost(),
        )
    return beverage


class DecoratorDemo(PatternDemo):
    """Price a plain espresso and a decorated house blend."""

    name = "decorator"
    title = "Decorator - condiments wrapped around beverages"

    def run(self) -> None:
        espresso = Espresso()
        print("Client: I've got a Espresso component:")
        print(f"Description: {espresso.description()}")
        print(f"Size: {espresso.size()}")
        print(f"Cost: {espresso.cost():.2f}")
        print("")

        drink = decorate(
            HouseBlend(),
            CondimentKind.MOCHA,
            CondimentKind.SOY,
            hook_registry=self.hooks,
        )
        print("Client: Now I've got a decorated component:")
        print(f"Description: {drink.description()}")
        print(f"Cost: {drink.cost():.2f}")

"""
Pattern demos.

Each module holds one design pattern and a runnable demo for it. Demos share
the :class:`PatternDemo` interface so the runner can pick them by name.
"""

from pattern_demos.patterns.base import PatternDemo
from pattern_demos.patterns.decorator import DecoratorDemo
from pattern_demos.patterns.observer import ObserverDemo
from pattern_demos.patterns.state import StateDemo
from pattern_demos.patterns.strategy import StrategyDemo

__all__ = [
    "PatternDemo",
    "ObserverDemo",
    "StateDemo",
    "StrategyDemo",
    "DecoratorDemo",
]

"""
Runner for the pattern demos.

The runner keeps the demos by name and runs one or several of them in order,
firing lifecycle hooks and logging around each run.
"""

import time
from typing import Dict, Iterable, List, Optional, Type

from pattern_demos.observability.hooks import (
    DemoEvent,
    EventHookRegistry,
    default_hook_registry,
)
from pattern_demos.observability.logging import DemoLogger, get_logger
from pattern_demos.patterns.base import PatternDemo
from pattern_demos.patterns.decorator import DecoratorDemo
from pattern_demos.patterns.observer import ObserverDemo
from pattern_demos.patterns.state import StateDemo
from pattern_demos.patterns.strategy import StrategyDemo

DEFAULT_DEMOS: List[Type[PatternDemo]] = [
    ObserverDemo,
    StateDemo,
    StrategyDemo,
    DecoratorDemo,
]

DEMO_NAMES: List[str] = [demo.name for demo in DEFAULT_DEMOS]


class DemoRunner:
    """Runs pattern demos by name.

    Usage:
        runner = DemoRunner()
        runner.run("state")
        runner.run_many(["observer", "decorator"])
        runner.run_all()
    """

    def __init__(self, hook_registry: Optional[EventHookRegistry] = None) -> None:
        """Initialize the runner with the stock demos.

        Args:
            hook_registry: Event hook registry handed to every demo
        """
        self._hooks = hook_registry or default_hook_registry
        self._demos: Dict[str, PatternDemo] = {}
        self._logger: DemoLogger = get_logger("runner")

        for demo_cls in DEFAULT_DEMOS:
            self.add_demo(demo_cls(hook_registry=self._hooks))

    def add_demo(self, demo: PatternDemo) -> None:
        """Register a demo, replacing any demo with the same name.

        Raises:
            ValueError: If the demo has no name
        """
        if not demo.name:
            raise ValueError(f"{type(demo).__name__} has no name")
        self._demos[demo.name] = demo
        self._logger.debug(f"Registered demo: {demo.name}", demo_name=demo.name)

    def get_demo(self, name: str) -> PatternDemo:
        """Look a demo up by name.

        Raises:
            ValueError: If no demo has that name
        """
        if name not in self._demos:
            raise ValueError(
                f"Unknown demo: {name}. Available: {', '.join(self._demos)}"
            )
        return self._demos[name]

    def list_demos(self) -> List[str]:
        """Names of the registered demos, in registration order."""
        return list(self._demos)

    def run(self, name: str) -> None:
        """Run a single demo.

        Errors raised by the demo are logged, reported as DEMO_ERROR and
        re-raised.
        """
        demo = self.get_demo(name)

        self._hooks.trigger(DemoEvent.DEMO_START, demo_name=name)
        self._logger.info(f"Running demo: {demo.title or name}", demo_name=name)
        start = time.perf_counter()

        try:
            demo.run()
        except Exception as e:  # pylint: disable=broad-exception-caught
            self._hooks.trigger(DemoEvent.DEMO_ERROR, demo_name=name, error=e)
            self._logger.error(f"Demo failed: {e}", demo_name=name, exc_info=True)
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        self._hooks.trigger(
            DemoEvent.DEMO_END, demo_name=name, duration_ms=duration_ms
        )
        self._logger.info(
            "Demo finished", demo_name=name, duration_ms=duration_ms
        )

    def run_many(self, names: Iterable[str], separator: bool = True) -> None:
        """Run several demos in the given order.

        All names are checked before anything runs.

        Args:
            names: Demo names
            separator: Whether to print a header line before each demo
        """
        demos = [self.get_demo(name) for name in names]
        for demo in demos:
            if separator:
                print(f"\n=== {demo.title or demo.name} ===")
            self.run(demo.name)

    def run_all(self, separator: bool = True) -> None:
        """Run every registered demo in registration order."""
        self.run_many(self.list_demos(), separator=separator)

"""
Base class for runnable pattern demos.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pattern_demos.observability.hooks import EventHookRegistry, default_hook_registry


class PatternDemo(ABC):
    """Abstract base class for a pattern demo.

    A demo builds its objects, runs a fixed script against them and prints
    what happens. The runner looks demos up by ``name``.
    """

    # pylint: disable=too-few-public-methods

    name: str = ""
    title: str = ""

    def __init__(self, hook_registry: Optional[EventHookRegistry] = None) -> None:
        """Initialize the demo.

        Args:
            hook_registry: Event hook registry (defaults to global registry)
        """
        self.hooks = hook_registry or default_hook_registry

    @abstractmethod
    def run(self) -> None:
        """Run the demo script, printing its output to stdout."""

"""
Pattern demos.

Small, self-contained demonstrations of the Observer, State, Strategy and
Decorator design patterns, plus a runner to play them back.
"""

from pattern_demos.config import DemoConfig
from pattern_demos.observability import (
    DemoEvent,
    DemoLogger,
    EventHookRegistry,
    configure_logging,
    default_hook_registry,
    get_logger,
)
from pattern_demos.runner import DEMO_NAMES, DemoRunner

__all__ = [
    # Runner
    "DemoConfig",
    "DemoRunner",
    "DEMO_NAMES",
    # Observability
    "DemoEvent",
    "DemoLogger",
    "EventHookRegistry",
    "configure_logging",
    "default_hook_registry",
    "get_logger",
]

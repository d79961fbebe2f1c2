"""
Observability for the pattern demos.

Structured logging and lifecycle event hooks.
"""

from .hooks import (
    DemoEvent,
    EventData,
    EventHookRegistry,
    default_hook_registry,
)
from .logging import DemoLogger, configure_logging, get_logger

__all__ = [
    # Logging
    "DemoLogger",
    "configure_logging",
    "get_logger",
    # Hooks
    "DemoEvent",
    "EventData",
    "EventHookRegistry",
    "default_hook_registry",
]

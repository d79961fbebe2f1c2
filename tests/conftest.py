"""Shared fixtures for the pattern demo tests."""

import logging
from typing import List

import pytest

from pattern_demos.observability.hooks import (
    EventData,
    EventHookRegistry,
    default_hook_registry,
)
from pattern_demos.observability.logging import ROOT_LOGGER_NAME


class EventRecorder:
    """Hook callback that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: List[EventData] = []

    def __call__(self, data: EventData) -> None:
        self.events.append(data)

    def of(self, event):
        return [e for e in self.events if e.event == event]


@pytest.fixture(autouse=True)
def reset_default_hooks():
    yield
    default_hook_registry.clear()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def hooks():
    return EventHookRegistry()


@pytest.fixture
def recorder(hooks):
    rec = EventRecorder()
    hooks.on_all(rec)
    return rec

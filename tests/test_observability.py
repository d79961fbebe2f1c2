import json
import logging

import pytest

from pattern_demos.observability.hooks import (
    DemoEvent,
    EventData,
    EventHookRegistry,
    default_hook_registry,
)
from pattern_demos.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    configure_logging,
    get_logger,
)
from pattern_demos.patterns.state import StateDemo


def test_trigger_builds_event_data_from_kwargs(hooks, recorder):
    hooks.trigger(DemoEvent.CUSTOM, demo_name="state", duration_ms=1.5, answer=42)

    event = recorder.events[0]
    assert event.event is DemoEvent.CUSTOM
    assert event.demo_name == "state"
    assert event.duration_ms == 1.5
    assert event.data == {"answer": 42}
    assert event.to_dict()["data"] == {"answer": 42}
    assert "error" not in event.to_dict()


def test_specific_hooks_only_see_their_event(hooks):
    seen = []
    hooks.on(DemoEvent.DEMO_START, seen.append)
    hooks.on(DemoEvent.DEMO_START, seen.append)

    hooks.trigger(DemoEvent.DEMO_END)
    hooks.trigger(DemoEvent.DEMO_START)

    assert [e.event for e in seen] == [DemoEvent.DEMO_START]
    assert hooks.count(DemoEvent.DEMO_START) == 1
    assert hooks.count() == 0


def test_off_and_paused(hooks):
    seen = []
    hooks.on(DemoEvent.CUSTOM, seen.append)
    with hooks.paused():
        with hooks.paused():
            hooks.trigger(DemoEvent.CUSTOM)
        assert hooks.is_paused
        hooks.trigger(DemoEvent.CUSTOM)
    assert not hooks.is_paused

    hooks.off(DemoEvent.CUSTOM, seen.append)
    hooks.off(DemoEvent.CUSTOM, seen.append)
    hooks.trigger(DemoEvent.CUSTOM)

    assert seen == []


def test_event_specific_hooks_run_before_global_ones(hooks):
    order = []
    hooks.on_all(lambda data: order.append("global"))
    hooks.on(DemoEvent.CUSTOM, lambda data: order.append("custom"))

    hooks.trigger(DemoEvent.CUSTOM)

    assert order == ["custom", "global"]


def test_failing_hook_does_not_stop_others(hooks, caplog):
    seen = []

    def broken(data: EventData) -> None:
        raise ValueError("bad hook")

    hooks.on(DemoEvent.CUSTOM, broken)
    hooks.on_all(seen.append)

    with caplog.at_level(logging.WARNING, logger="pattern_demos.hooks"):
        hooks.trigger(DemoEvent.CUSTOM)

    assert len(seen) == 1
    assert "bad hook" in caplog.text


def test_clear_removes_everything():
    registry = EventHookRegistry()
    registry.on(DemoEvent.CUSTOM, print)
    registry.on_all(print)
    registry.clear()
    assert registry.count(DemoEvent.CUSTOM) == 0
    assert registry.count() == 0


def test_components_fall_back_to_default_registry(capsys):
    seen = []
    default_hook_registry.on(DemoEvent.STATE_TRANSITION, seen.append)

    StateDemo().run()

    assert [e.data["to_state"] for e in seen] == [
        "ConcreteStateA",
        "ConcreteStateB",
        "ConcreteStateA",
    ]


def _record(**extra):
    record = logging.LogRecord("pattern_demos.x", logging.INFO, __file__, 1, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context():
    entry = json.loads(
        JsonFormatter().format(_record(demo_name="state", step=2, extra_data={"to": "B"}))
    )
    assert entry.pop("time")
    assert entry == {
        "level": "INFO",
        "logger": "pattern_demos.x",
        "message": "hello",
        "demo": "state",
        "step": 2,
        "data": {"to": "B"},
    }


def test_json_formatter_skips_unset_context():
    entry = json.loads(JsonFormatter().format(_record(demo_name=None, step=None)))
    assert "demo" not in entry
    assert "step" not in entry
    assert "data" not in entry


def test_console_formatter_without_colors():
    line = ConsoleFormatter(use_colors=False).format(
        _record(demo_name="state", duration_ms=3.0)
    )
    assert line.endswith("| INFO     | [demo=state, duration=3.0ms] hello")
    assert "\033[" not in line


def test_console_formatter_colors_the_level():
    line = ConsoleFormatter(use_colors=True).format(_record())
    assert "\033[32mINFO    \033[0m" in line
    assert line.endswith("| hello")


def test_demo_logger_injects_demo_name(caplog):
    logger = get_logger("runner", demo_name="observer")
    with caplog.at_level(logging.INFO, logger="pattern_demos"):
        logger.info("started", step=1, duration_ms=1.23456)

    record = caplog.records[-1]
    assert record.name == "pattern_demos.runner"
    assert record.demo_name == "observer"
    assert record.step == 1
    assert record.duration_ms == 1.23


def test_demo_name_argument_overrides_logger_default(caplog):
    logger = get_logger("runner", demo_name="observer")
    with caplog.at_level(logging.INFO, logger="pattern_demos"):
        logger.info("started", demo_name="state")

    assert caplog.records[-1].demo_name == "state"


def test_state_transitions_are_logged_with_step(caplog):
    with caplog.at_level(logging.DEBUG, logger="pattern_demos"):
        StateDemo().run()

    steps = [r.step for r in caplog.records if r.name == "pattern_demos.state"]
    assert steps == [1, 2, 3]


def test_configure_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "demo.log"
    configure_logging(level="info", log_file=log_file, use_colors=False)

    get_logger("test").info("to file", demo_name="decorator")
    for handler in logging.getLogger("pattern_demos").handlers:
        handler.flush()

    entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert entry["message"] == "to file"
    assert entry["demo"] == "decorator"


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging(level="chatty")

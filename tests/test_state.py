import gc

import pytest

from pattern_demos.observability.hooks import DemoEvent
from pattern_demos.patterns.state import (
    ConcreteStateA,
    ConcreteStateB,
    Context,
    StateDemo,
    StateNotBoundError,
    StateTable,
    build_state_table,
)


def test_context_activates_initial_state(capsys):
    state = ConcreteStateA()
    context = Context(state)

    assert context.state is state
    assert state.context is context
    assert context.history == ["ConcreteStateA"]
    assert capsys.readouterr().out == "Context: Transition to ConcreteStateA.\n"


def test_request1_then_request2_cycles_a_b_a():
    context = Context(ConcreteStateA())

    context.request1()
    assert isinstance(context.state, ConcreteStateB)

    context.request2()
    assert isinstance(context.state, ConcreteStateA)
    assert context.history == ["ConcreteStateA", "ConcreteStateB", "ConcreteStateA"]


def test_repeated_request1_is_handled_by_b_without_transition(capsys):
    context = Context(ConcreteStateA())
    context.request1()
    capsys.readouterr()

    context.request1()

    assert isinstance(context.state, ConcreteStateB)
    assert capsys.readouterr().out == "ConcreteStateB handles request1.\n"


def test_request2_on_a_does_not_transition():
    context = Context(ConcreteStateA())
    context.request2()
    assert isinstance(context.state, ConcreteStateA)
    assert context.history == ["ConcreteStateA"]


def test_transition_replaces_state_before_any_handler_runs():
    seen = []

    class Watcher(ConcreteStateB):
        def handle1(self):
            seen.append(self.context.state is self)

    context = Context(ConcreteStateA())
    context.transition_to(Watcher())
    assert seen == []

    context.request1()
    assert seen == [True]


def test_unbound_state_has_no_context():
    with pytest.raises(StateNotBoundError):
        ConcreteStateA().handle1()


def test_state_does_not_keep_its_context_alive():
    state = ConcreteStateA()
    context = Context(state)
    del context
    gc.collect()

    with pytest.raises(StateNotBoundError):
        _ = state.context


def test_transition_fires_hook(hooks, recorder):
    context = Context(ConcreteStateA(), hook_registry=hooks)
    context.request1()

    transitions = recorder.of(DemoEvent.STATE_TRANSITION)
    assert [(e.data.get("from_state"), e.data["to_state"]) for e in transitions] == [
        (None, "ConcreteStateA"),
        ("ConcreteStateA", "ConcreteStateB"),
    ]


def test_state_table_drives_arbitrary_graph(capsys):
    table = build_state_table(
        {
            "Idle": {"request1": "Running"},
            "Running": {"request1": "Paused", "request2": "Idle"},
            "Paused": {"request2": "Running"},
        }
    )
    context = Context(table.create("Idle"))

    context.request1()
    context.request1()
    context.request1()
    context.request2()
    context.request2()

    assert context.history == ["Idle", "Running", "Paused", "Running", "Idle"]
    out = capsys.readouterr().out
    assert "Paused handles request1." in out
    assert "Context: Transition to Paused." in out


def test_state_table_rejects_bad_tables():
    with pytest.raises(ValueError, match="at least one state"):
        StateTable({})
    with pytest.raises(ValueError, match="unknown state 'Nowhere'"):
        StateTable({"Idle": {"request1": "Nowhere"}})
    with pytest.raises(ValueError, match="Unknown request 'request3'"):
        StateTable({"Idle": {"request3": None}})


def test_state_table_create_unknown_state():
    table = StateTable({"Idle": {}})
    assert table.state_names == ["Idle"]
    with pytest.raises(ValueError, match="Unknown state: Busy"):
        table.create("Busy")


def test_state_demo_output(capsys, hooks):
    StateDemo(hook_registry=hooks).run()

    assert capsys.readouterr().out.splitlines() == [
        "Context: Transition to ConcreteStateA.",
        "ConcreteStateA handles request1.",
        "ConcreteStateA wants to change the state of the context.",
        "Context: Transition to ConcreteStateB.",
        "ConcreteStateB handles request2.",
        "ConcreteStateB wants to change the state of the context.",
        "Context: Transition to ConcreteStateA.",
    ]


def test_context_without_state_raises():
    context = Context.__new__(Context)
    context._state = None

    with pytest.raises(RuntimeError, match="Context has no current state"):
        context.request1()
    with pytest.raises(RuntimeError, match="Context has no current state"):
        _ = context.state

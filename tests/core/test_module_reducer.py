from types import SimpleNamespace

import pytest

from reduxmod import Module


@pytest.fixture()
def app():
    app = Module("app")
    app.create("foo")
    app.create("bar", "a")
    app.create("baz", ["b"])
    app.create("quux", lambda state, action: "NEW_STATE")
    return app


def test_type_without_handler_returns_same_state(app):
    reducer = app.reducer()
    state = {"z": 0}
    result = reducer(state, app.creators["foo"]())
    assert result is state
    assert result == {"z": 0}


def test_creator_args_without_handler_are_ignored(app):
    reducer = app.reducer()
    state = {"a": 0}
    result = reducer(state, app.creators["bar"](999))
    assert result is state
    assert result == {"a": 0}


def test_shorthand_sets_state(app):
    reducer = app.reducer()
    state = {"b": 0}
    result = reducer(state, app.creators["baz"](999))
    assert result is not state
    assert result == {"b": 999}


def test_explicit_handler_may_return_any_shape(app):
    reducer = app.reducer()
    state = {"a": 0, "b": 1, "c": 2}
    result = reducer(state, app.creators["quux"]())
    assert result is not state
    assert result == "NEW_STATE"


def test_unknown_type_is_identity_twice(app):
    reducer = app.reducer()
    state = {"z": 1}
    action = {"type": "other/thing"}
    first = reducer(state, action)
    second = reducer(first, action)
    assert first is state
    assert second is state


@pytest.mark.parametrize(
    "descriptor",
    [None, {}, {"type": None}, {"type": ["unhashable"]}, object()],
)
def test_odd_descriptors_are_noops(app, descriptor):
    reducer = app.reducer()
    state = {"z": 1}
    assert reducer(state, descriptor) is state


def test_initial_state_used_when_state_missing(app):
    initial = {"b": 0, "other": 1}
    reducer = app.reducer(initial)
    assert reducer(None, {"type": "nope"}) is initial
    assert reducer(None, app.creators["baz"](5)) == {"b": 5, "other": 1}
    assert initial == {"b": 0, "other": 1}


def test_default_initial_state_is_empty_dict(app):
    reducer = app.reducer()
    assert reducer() == {}
    # same object for the lifetime of this reducer
    assert reducer() is reducer()
    assert app.reducer()() is not reducer()


def test_attribute_descriptor_dispatches(app):
    reducer = app.reducer()
    action = SimpleNamespace(type="app/baz", b=7)
    assert reducer({}, action) == {"b": 7}


def test_late_registration_is_visible_to_existing_reducer():
    app = Module("app")
    reducer = app.reducer()
    late = app.create("late", ["v"])
    state = {"v": 0}
    assert reducer(state, late(1)) == {"v": 1}


def test_snapshot_reducer_ignores_late_registration():
    app = Module("app")
    early = app.create("early", ["v"])
    reducer = app.reducer(snapshot=True)
    late = app.create("late", ["v"])
    state = {"v": 0}
    assert reducer(state, early(1)) == {"v": 1}
    assert reducer(state, late(2)) is state


def test_snapshot_default_from_config(monkeypatch):
    from reduxmod.config import clear_config_cache

    monkeypatch.setenv("REDUXMOD__REDUCER__SNAPSHOT", "true")
    clear_config_cache()
    app = Module("app")
    reducer = app.reducer()
    late = app.create("late", ["v"])
    state = {"v": 0}
    assert reducer(state, late(2)) is state
    # explicit argument wins over config
    live = app.reducer(snapshot=False)
    later = app.create("later", ["v"])
    assert live(state, later(3)) == {"v": 3}


def test_child_module_reducer_only_handles_own_types():
    app = Module("app")
    sub = app.module("sub")
    set_a = sub.create("set", ["a"])
    app_set = app.create("set", ["a"])
    sub_reducer = sub.reducer()
    state = {"a": 0}
    assert sub_reducer(state, app_set(1)) is state
    assert sub_reducer(state, set_a(2)) == {"a": 2}

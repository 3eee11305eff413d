import logging

from reduxmod import Module


def _inspect(m: Module) -> dict:
    return {
        "name": m.name,
        "types": m.types,
        "creators": m.creators,
        "handlers": m.handlers,
    }


def test_new_module_is_empty():
    app = Module("app")
    assert _inspect(app) == {
        "name": "app",
        "types": {},
        "creators": {},
        "handlers": {},
    }


def test_child_module_is_namespaced_and_empty():
    app = Module("app")
    app.create("foo", ["a"])
    sub = app.module("sub")
    assert _inspect(sub) == {
        "name": "app/sub",
        "types": {},
        "creators": {},
        "handlers": {},
    }


def test_child_registries_are_independent():
    app = Module("app")
    sub = app.module("sub")
    sub.create("foo", ["a"])
    app.create("bar")
    assert list(app.types) == ["bar"]
    assert list(sub.types) == ["foo"]
    assert sub.types["foo"] == "app/sub/foo"
    assert "app/sub/foo" not in app.handlers
    assert app.handlers == {}


def test_nested_children_and_duplicate_siblings():
    app = Module("app")
    deep = app.module("a").module("b")
    assert deep.name == "app/a/b"
    first = app.module("dup")
    second = app.module("dup")
    assert first.name == second.name == "app/dup"
    assert first is not second
    first.create("x")
    assert second.types == {}


def test_child_inherits_strict_flag():
    assert Module("app", strict=True).module("sub").strict is True
    assert Module("app", strict=False).module("sub").strict is False


def _assert_lenient_and_empty(app):
    assert app.strict is False
    assert (app.types, app.creators, app.handlers) == ({}, {}, {})
    reducer = app.reducer()
    late = app.create("late", ["v"])
    assert reducer({"v": 0}, late(1)) == {"v": 1}


def test_foreign_config_in_working_dir_is_ignored(monkeypatch, tmp_path, caplog):
    from reduxmod.config import clear_config_cache

    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "base.yaml").write_text(
        "database: {url: x}\n", encoding="utf-8"
    )
    monkeypatch.delenv("REDUXMOD_CONFIG_DIR")
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    with caplog.at_level(logging.WARNING, logger="reduxmod"):
        app = Module("app")
    _assert_lenient_and_empty(app)
    assert any("config unavailable" in r.getMessage() for r in caplog.records)


def test_stray_env_override_is_ignored(monkeypatch):
    from reduxmod.config import clear_config_cache

    monkeypatch.setenv("REDUXMOD__FOO", "1")
    clear_config_cache()
    _assert_lenient_and_empty(Module("app"))

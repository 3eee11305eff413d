"""Module: namespaced registry of operations and their transitions.

A Module owns three maps:
 - types:    short name → "<module name>/<short name>"
 - creators: short name → Creator (builds descriptor dicts)
 - handlers: namespaced type → transition(state, descriptor)

Registration is lenient by default: re-registering a short name overwrites
it, and odd call shapes are resolved best-effort (see
``reduxmod.operations``). ``strict=True`` opts into validation.

Reducers read ``handlers`` at dispatch time, so operations registered after
``reducer()`` was called are still dispatched. Pass ``snapshot=True`` to
freeze the handler table instead.

Modules never touch logging handlers; call ``reduxmod.configure_logging()``
from the application to apply the ``logging`` config section.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, Sequence

from reduxmod import log, metrics
from reduxmod.config import get_config
from reduxmod.errors import ConfigError, RegistrationError
from reduxmod.operations import (
    Operation,
    Transition,
    field_key,
    resolve_operation,
)

Reducer = Callable[..., Any]

_log = log.get_logger("module")


class Creator:
    """Descriptor factory bound to one namespaced type.

    Values bind to ``fields`` by position; extra values are ignored and
    missing ones leave their key out.
    """

    __slots__ = ("type", "fields")

    def __init__(self, type: str, fields: Sequence[Any] = ()) -> None:
        self.type = type
        self.fields = tuple(field_key(f) for f in fields)

    def __call__(self, *values: Any) -> Dict[Any, Any]:
        descriptor: Dict[Any, Any] = {"type": self.type}
        for name, value in zip(self.fields, values):
            descriptor[name] = value
        return descriptor

    def __str__(self) -> str:
        return self.type

    def __repr__(self) -> str:
        return f"Creator({self.type!r}, fields={list(self.fields)!r})"


def _descriptor_type(descriptor: Any) -> Any:
    if isinstance(descriptor, Mapping):
        return descriptor.get("type")
    return getattr(descriptor, "type", None)


def _lookup(handlers: Mapping, descriptor: Any) -> Transition | None:
    try:
        return handlers.get(_descriptor_type(descriptor))
    except TypeError:  # unhashable type value
        return None


def _config_default(section: str, key: str) -> bool:
    """Read an opt-in flag from config; unreadable config means False."""
    try:
        return bool(getattr(getattr(get_config(), section), key))
    except ConfigError as e:
        _log.warning(
            "config unavailable, using %s.%s=false: %s", section, key, e
        )
        return False


class Module:
    def __init__(self, name: str, *, strict: bool | None = None) -> None:
        if strict is None:
            strict = _config_default("registry", "strict")
        self.name = name
        self.strict = strict
        self.types: Dict[Any, str] = {}
        self.creators: Dict[Any, Creator] = {}
        self.handlers: Dict[str, Transition] = {}

    def __repr__(self) -> str:
        return f"Module({self.name!r}, types={len(self.types)})"

    def _prefix(self, name: Any) -> str:
        return f"{self.name}/{name}"

    def module(self, name: str) -> "Module":
        """Derive a child module named ``<self.name>/<name>``."""
        return Module(self._prefix(name), strict=self.strict)

    # --- registration -----------------------------------------------------
    def create(self, type: str, *rest: Any) -> Creator:
        """Register ``type`` from a loose call shape.

        create("foo")                    fields: none, no transition
        create("foo", "a", "b")          fields a, b, no transition
        create("foo", ["a", "b"])        fields a, b, merge setter
        create("foo", "a", fn)           field a, transition fn
        """
        if (
            self.strict
            and len(rest) > 1
            and isinstance(rest[0], (list, tuple))
            and callable(rest[-1])
        ):
            self._reject(
                "handler-shadowed",
                f"{self._prefix(type)}: field list given, trailing "
                "transition would be ignored",
            )
        return self.register(type, resolve_operation(rest))

    def register(self, type: str, operation: Operation) -> Creator:
        """Register ``type`` from an explicit operation variant."""
        prefixed_type = self._prefix(type)
        if self.strict:
            self._validate(type, prefixed_type, operation)
        if type in self.types:
            metrics.inc_overwritten(self.name)
            _log.debug("overwriting type=%s", prefixed_type)

        self.types[type] = prefixed_type
        transition = operation.transition()
        if transition is not None:
            self.handlers[prefixed_type] = transition
        creator = Creator(prefixed_type, operation.names)
        self.creators[type] = creator

        metrics.inc_registered(self.name, operation.mode)
        _log.debug(
            "registered type=%s mode=%s fields=%s",
            prefixed_type,
            operation.mode,
            list(operation.names),
        )
        return creator

    def _validate(
        self, type: str, prefixed_type: str, operation: Operation
    ) -> None:
        if type in self.types:
            self._reject("duplicate-type", f"{prefixed_type} already registered")
        names = operation.names
        if not all(isinstance(n, str) for n in names):
            self._reject(
                "invalid-fields",
                f"{prefixed_type}: field names must be strings, got {names!r}",
            )
        if len(set(names)) != len(names):
            self._reject(
                "invalid-fields",
                f"{prefixed_type}: repeated field names {names!r}",
            )

    def _reject(self, code: str, message: str) -> None:
        metrics.inc_strict_rejection(code)
        _log.warning("strict registration rejected code=%s %s", code, message)
        raise RegistrationError(code, message)

    # --- dispatch -----------------------------------------------------------
    def reducer(
        self, initial_state: Any = None, *, snapshot: bool | None = None
    ) -> Reducer:
        """Build ``reduce(state=None, descriptor=None)`` over this module.

        ``state=None`` falls back to ``initial_state`` (a fresh ``{}`` per
        ``reducer()`` call when omitted). Unknown types return ``state``
        itself.
        """
        if initial_state is None:
            initial_state = {}
        if snapshot is None:
            snapshot = _config_default("reducer", "snapshot")
        handlers = dict(self.handlers) if snapshot else self.handlers

        def reduce(state: Any = None, descriptor: Any = None) -> Any:
            if state is None:
                state = initial_state
            handler = _lookup(handlers, descriptor)
            metrics.inc_dispatch(handler is not None)
            if handler is None:
                return state
            return handler(state, descriptor)

        reduce.__qualname__ = f"reducer[{self.name}]"
        return reduce


__all__ = ["Module", "Creator", "Reducer"]

"""Operation variants and the call-shape adapter.

``Module.register`` takes one of three explicit variants:

    FieldList(names)      payload fields + auto-generated merge setter
    Handler(fn, names)    payload fields + caller supplied transition
    Fields(names)         payload fields only, no transition

``resolve_operation`` maps the loose ``create(short_name, *rest)`` call
shapes onto those variants. Resolution order:

    1. rest is a single variant instance → used as-is
    2. first item is a list/tuple        → FieldList(first); later items ignored
    3. last item is callable              → Handler(last, rest[:-1])
    4. anything else                      → Fields(rest)

Nothing here validates names; see ``Module(strict=True)`` for that.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Sequence, Tuple, Union

Transition = Callable[[Any, Any], Any]


def field_key(name: Any) -> Any:
    """Return ``name`` usable as a dict key.

    Hashable names pass through; others become strings, sequences joined
    with commas.
    """
    try:
        hash(name)
    except TypeError:
        if isinstance(name, (list, tuple)):
            return ",".join(map(str, name))
        return str(name)
    return name


def _payload_value(descriptor: Any, name: Any) -> Any:
    if isinstance(descriptor, Mapping):
        return descriptor.get(name)
    return getattr(descriptor, name, None) if isinstance(name, str) else None


def make_setter(names: Sequence[Any]) -> Transition:
    """Build a shallow merge setter over ``names``.

    Each field is applied as its own copy-and-set step, in order. The start
    value is a copy of ``state`` when it is a mapping, else an empty dict,
    so the result is always a new dict.
    """
    names = tuple(field_key(n) for n in names)

    def setter(state: Any, descriptor: Any) -> dict:
        next_state = dict(state) if isinstance(state, Mapping) else {}
        for name in names:
            next_state = {**next_state, name: _payload_value(descriptor, name)}
        return next_state

    setter.__qualname__ = f"setter[{', '.join(map(str, names))}]"
    return setter


@dataclass(frozen=True, slots=True)
class FieldList:
    """Shorthand-set mode."""

    names: Tuple[Any, ...] = ()
    mode: ClassVar[str] = "field_list"

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(self.names))

    def transition(self) -> Transition | None:
        return make_setter(self.names)


@dataclass(frozen=True, slots=True)
class Handler:
    """Explicit-handler mode: ``fn(state, descriptor)`` is registered as-is."""

    fn: Transition
    names: Tuple[Any, ...] = ()
    mode: ClassVar[str] = "handler"

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(self.names))

    def transition(self) -> Transition | None:
        return self.fn


@dataclass(frozen=True, slots=True)
class Fields:
    """Positional-fields mode: creator fields, no transition."""

    names: Tuple[Any, ...] = ()
    mode: ClassVar[str] = "fields"

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(self.names))

    def transition(self) -> Transition | None:
        return None


Operation = Union[FieldList, Handler, Fields]
OPERATION_TYPES = (FieldList, Handler, Fields)


def resolve_operation(rest: Sequence[Any]) -> Operation:
    rest = tuple(rest)
    if len(rest) == 1 and isinstance(rest[0], OPERATION_TYPES):
        return rest[0]
    if rest and isinstance(rest[0], (list, tuple)):
        return FieldList(rest[0])
    if rest and callable(rest[-1]):
        return Handler(rest[-1], rest[:-1])
    return Fields(rest)


__all__ = [
    "FieldList",
    "Handler",
    "Fields",
    "Operation",
    "Transition",
    "make_setter",
    "field_key",
    "resolve_operation",
]

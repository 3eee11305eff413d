"""Combine per-key reducers into one reducer over a dict state."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict

Reducer = Callable[..., Any]


def combine_reducers(reducers: Mapping[str, Reducer]) -> Reducer:
    """Reduce each ``state[key]`` with ``reducers[key]``.

    Every slice reducer sees the same descriptor. The input state is returned
    when no slice changed identity and it holds no extra keys; otherwise a
    new dict with exactly the reducer keys is built. A missing (or
    non-mapping) state hands ``None`` to every slice so each falls back to
    its initial state.
    """
    reducers = dict(reducers)

    def reduce(state: Any = None, descriptor: Any = None) -> Any:
        prev: Mapping = state if isinstance(state, Mapping) else {}
        changed = not isinstance(state, Mapping) or len(prev) != len(reducers)
        next_state: Dict[str, Any] = {}
        for key, slice_reducer in reducers.items():
            before = prev.get(key)
            after = slice_reducer(before, descriptor)
            next_state[key] = after
            changed = changed or after is not before
        return next_state if changed else state

    return reduce


__all__ = ["combine_reducers"]

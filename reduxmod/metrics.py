"""Minimal in-memory metrics collector.

Purpose:
    - Counters for registration and dispatch activity of reducer modules.
    - Zero external deps; can be swapped by an exporter later.

Core API (intentionally tiny):
    inc(name, labels=None, value=1)
    snapshot() -> dict (copy for safe reading)

Thread-safety: coarse RLock; the store is process-global even though the
module registries themselves are not locked.

Metric names (documented for discoverability):
    - operations_registered_total{module,mode}
    - operations_overwritten_total{module}
    - dispatch_total{handled}
    - strict_rejections_total{code}
    - env_override_total{path}
"""
from __future__ import annotations

from threading import RLock
from time import time
from typing import Dict, Tuple, Any

_COUNTERS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float] = {}
_LOCK = RLock()


def _norm_labels(labels: dict[str, Any] | None) -> Tuple[Tuple[str, str], ...]:
    if not labels:
        return tuple()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


def _label_str(labels: Tuple[Tuple[str, str], ...]) -> str:
    if not labels:
        return ""
    return "{" + ",".join(f"{k}={v}" for k, v in labels) + "}"


def inc(
    name: str,
    labels: dict[str, Any] | None = None,
    value: float = 1.0,
) -> None:
    key = (name, _norm_labels(labels))
    with _LOCK:
        _COUNTERS[key] = _COUNTERS.get(key, 0.0) + value


def snapshot() -> dict[str, Any]:
    with _LOCK:
        counters = {
            name + _label_str(labels): v
            for (name, labels), v in _COUNTERS.items()
        }
        return {
            "ts": time(),
            "counters": counters,
        }


def reset_for_tests() -> None:  # pragma: no cover
    with _LOCK:
        _COUNTERS.clear()


__all__ = [
    "inc",
    "snapshot",
    "reset_for_tests",
]


# ------------------- Helper wrappers -------------------

def inc_registered(module: str, mode: str) -> None:
    """Increment registration counter.

    mode: field_list | handler | fields
    """
    inc("operations_registered_total", {"module": module, "mode": mode})


def inc_overwritten(module: str) -> None:
    """Count a short name re-registered on the same module."""
    inc("operations_overwritten_total", {"module": module})


def inc_dispatch(handled: bool) -> None:
    inc("dispatch_total", {"handled": str(handled).lower()})


def inc_strict_rejection(code: str) -> None:
    if code:
        inc("strict_rejections_total", {"code": code})


__all__ += [
    "inc_registered",
    "inc_overwritten",
    "inc_dispatch",
    "inc_strict_rejection",
]

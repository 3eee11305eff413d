"""reduxmod: namespaced action creators and reducers.

    app = Module("app")
    set_user = app.create("set_user", ["user"])
    reduce = app.reducer({"user": None})
    reduce(None, set_user("ann"))  # {"user": "ann"}

Exports:
 - Module / Creator: registry and descriptor factories
 - FieldList / Handler / Fields: explicit operation variants
 - combine_reducers: per-key reducer composition
 - configure_logging: attach the package log handler (application opt-in)
"""
from __future__ import annotations

from .combine import combine_reducers  # noqa: F401
from .errors import ReduxModuleError, RegistrationError  # noqa: F401
from .log import configure as configure_logging  # noqa: F401
from .module import Creator, Module  # noqa: F401
from .operations import (  # noqa: F401
    FieldList,
    Fields,
    Handler,
    resolve_operation,
)

__version__ = "0.1.0"

__all__ = [
    "Module",
    "Creator",
    "FieldList",
    "Handler",
    "Fields",
    "resolve_operation",
    "combine_reducers",
    "configure_logging",
    "ReduxModuleError",
    "RegistrationError",
]

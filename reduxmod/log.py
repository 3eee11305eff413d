"""Package logging helpers.

All loggers live under the ``reduxmod`` root. The root gets one stream
handler (text or json) and its level from the ``logging`` config section the
first time :func:`configure` runs; an application that already attached its
own handlers keeps them.
"""
from __future__ import annotations

import json
import logging
from typing import Any

ROOT_LOGGER = "reduxmod"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
_configured = False
_handler: logging.Handler | None = None


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        data: dict[str, Any] = {
            "ts": record.created,
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure(settings: Any | None = None, force: bool = False) -> logging.Logger:
    """Apply a LoggingConfig to the package root logger (once).

    ``settings`` defaults to ``get_config().logging``; ``force`` re-applies
    level and formatter (used after a config reload).
    """
    global _configured, _handler
    root = logging.getLogger(ROOT_LOGGER)
    if _configured and not force:
        return root
    if settings is None:
        from reduxmod.config import get_config  # local import

        settings = get_config().logging
    if not root.handlers:
        _handler = logging.StreamHandler()
        root.addHandler(_handler)
    if _handler is not None:
        if settings.format == "json":
            _handler.setFormatter(JsonFormatter())
        else:
            _handler.setFormatter(
                logging.Formatter("[REDUXMOD] %(levelname)s %(name)s: %(message)s")
            )
    root.setLevel(_LEVELS[settings.level])
    _configured = True
    return root


def reset_for_tests() -> None:  # pragma: no cover
    global _configured
    _configured = False


__all__ = ["get_logger", "configure", "JsonFormatter", "reset_for_tests"]

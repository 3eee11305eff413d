"""Config subsystem public API.

Provides:
    get_config() -> AggregatedConfig (schema_version + section models)
    as_dict()    -> dict representation
    ConfigError  -> raised on validation / unknown key
"""

from reduxmod.errors import ConfigError  # noqa: F401

from .loader import (  # noqa: F401
    get_config,
    as_dict,
    clear_config_cache,
)


__all__ = [
    "get_config",
    "as_dict",
    "ConfigError",
    "clear_config_cache",
]

"""Configuration loading & validation.

Precedence (last wins): base.yaml → overrides.local.yaml → ENV (REDUXMOD__*).

- Missing `schema_version` → assume 1, warn.
- Every known section is validated by its pydantic schema; absent sections
  get schema defaults.
- Unknown top-level or section keys are rejected.
"""
from __future__ import annotations

import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict, Type

import yaml
from pydantic import BaseModel, ConfigDict

from reduxmod import metrics
from reduxmod.errors import ConfigError, validate_error_type
from reduxmod.log import get_logger

from .schemas.registry import RegistryConfig, ReducerConfig
from .schemas.observability import LoggingConfig


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    # Sub-schemas (validated separately, attached after)
    registry: Any | None = None
    reducer: Any | None = None
    logging: Any | None = None

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
CONFIG_DIR_ENV = "REDUXMOD_CONFIG_DIR"
ENV_PREFIX = "REDUXMOD__"
SUPPORTED_SCHEMA_VERSION = 1

SUB_SCHEMA_CLASSES: Dict[str, Type[BaseModel]] = {
    "registry": RegistryConfig,
    "reducer": ReducerConfig,
    "logging": LoggingConfig,
}

_log = get_logger("config")


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        metrics.inc(
            "config_validation_errors_total",
            {"path": path.name, "code": "config-invalid"},
        )
        raise ConfigError(
            f"{path.name}: unreadable ({validate_error_type('config-invalid')}): {e}"
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            f"{path.name}: top level must be a mapping "
            f"({validate_error_type('config-invalid')})"
        )
    return data


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _cast_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        target[path_parts[-1]] = _cast_env_value(value)
        dotted_path = ".".join(path_parts)
        metrics.inc("env_override_total", {"path": dotted_path})
        _log.info(
            "config-env-override path=%s value=*** source=env", dotted_path
        )


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR))


def _migrate_legacy(data: Dict[str, Any]) -> Dict[str, Any]:
    if "schema_version" not in data:
        _log.warning("config-migration schema_version missing → assuming 1")
        data["schema_version"] = 1
    return data


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Check shape and bounds before schema validation.

    Validations (error → raise):
      - schema_version is an int not above the supported version
      - every known section, when present, is a mapping (null → defaults)
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)
    version = raw.get("schema_version")
    if not isinstance(version, int) or isinstance(version, bool):
        errors.append(("schema_version", "config-invalid", "int required"))
    elif not 1 <= version <= SUPPORTED_SCHEMA_VERSION:
        errors.append(
            (
                "schema_version",
                "config-out-of-range",
                f"1..{SUPPORTED_SCHEMA_VERSION} supported",
            )
        )
    for name in SUB_SCHEMA_CLASSES:
        if raw.get(name) is None:
            raw.pop(name, None)
        elif not isinstance(raw[name], dict):
            errors.append((name, "config-invalid", "mapping required"))

    if errors:
        for path, code, _ in errors:
            validate_error_type(code)
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        raise ConfigError(f"config validation failed: {details}")


def _validate_sub_schemas(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Validate each known section via its schema class.

    Returns dict of validated objects to be attached to AggregatedConfig.
    """
    validated: Dict[str, Any] = {}
    for name, cls in SUB_SCHEMA_CLASSES.items():
        try:
            validated[name] = cls.model_validate(raw.get(name, {}))
        except Exception as e:  # noqa: BLE001
            raise ConfigError(
                f"Validation failed for section '{name}': {e}"
            ) from e
    return validated


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        _apply_env(merged)
        migrated = _migrate_legacy(merged)
        _normalize_and_validate(migrated)
        validated_sub = _validate_sub_schemas(migrated)
        try:
            agg = AggregatedConfig.model_validate(migrated)
        except Exception as e:  # noqa: BLE001
            raise ConfigError(str(e)) from e
        for k, v in validated_sub.items():
            setattr(agg, k, v)
        return agg


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()


def as_dict() -> Dict[str, Any]:
    return get_config().model_dump()

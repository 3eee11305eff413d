"""Central error taxonomy.

Lenient registration never raises; the codes below are used by the opt-in
strict mode and by the config loader.
"""
from __future__ import annotations

_ALLOWED_ERROR_TYPES = {
    # registration (strict mode only)
    "duplicate-type",
    "invalid-fields",
    "handler-shadowed",
    # config
    "config-invalid",
    "config-out-of-range",
}


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


class ReduxModuleError(Exception):
    """Base package exception."""


class RegistrationError(ReduxModuleError):
    """Raised by strict modules when an operation registration is rejected.

    ``code`` is one of the registration entries of the taxonomy.
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = validate_error_type(code)
        super().__init__(f"[{code}] {message}")


class ConfigError(ReduxModuleError):
    pass


__all__ = [
    "validate_error_type",
    "ReduxModuleError",
    "RegistrationError",
    "ConfigError",
]

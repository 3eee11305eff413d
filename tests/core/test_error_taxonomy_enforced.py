import pytest

from reduxmod.errors import (
    ConfigError,
    RegistrationError,
    ReduxModuleError,
    validate_error_type,
)


def test_error_taxonomy_known():
    assert validate_error_type("duplicate-type") == "duplicate-type"
    assert validate_error_type("config-out-of-range") == "config-out-of-range"
    assert validate_error_type("config-invalid") == "config-invalid"


def test_error_taxonomy_unknown():
    with pytest.raises(AssertionError):
        validate_error_type("not-a-code")


def test_registration_error_carries_code():
    err = RegistrationError("invalid-fields", "bad")
    assert err.code == "invalid-fields"
    assert "invalid-fields" in str(err)
    assert isinstance(err, ReduxModuleError)
    assert issubclass(ConfigError, ReduxModuleError)

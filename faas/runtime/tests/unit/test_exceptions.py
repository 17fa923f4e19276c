import pytest

from faas.runtime.core.exceptions import (
    ClientError,
    ErrorKind,
    ProcessorError,
    ServerError,
    UnsupportedPlatformError,
    ValidationError,
    classify_error,
    error_status_code,
)


class _WithStatus(Exception):
    def __init__(self, status_code):
        super().__init__("with status")
        self.status_code = status_code


@pytest.mark.parametrize(
    "error, expected",
    [
        (ValidationError("x"), ErrorKind.VALIDATION),
        (ClientError("x", 409), ErrorKind.CLIENT),
        (ServerError("x"), ErrorKind.SERVER),
        (ProcessorError("x"), ErrorKind.SERVER),
        (_WithStatus(404), ErrorKind.CLIENT),
        (_WithStatus(500), ErrorKind.SERVER),
        (_WithStatus(0), ErrorKind.SERVER),
        (_WithStatus(-1), ErrorKind.SERVER),
        (_WithStatus(True), ErrorKind.SERVER),
        (ProcessorError("x", ErrorKind.CLIENT, 503), ErrorKind.SERVER),
        (ProcessorError("x", ErrorKind.CLIENT), ErrorKind.SERVER),
        (ProcessorError("x", ErrorKind.CLIENT, 409), ErrorKind.CLIENT),
        (_WithStatus("404"), ErrorKind.SERVER),
        (ValueError("x"), ErrorKind.SERVER),
    ],
)
def test_classify_error(error, expected):
    assert classify_error(error) is expected


def test_validation_error_carries_400():
    error = ValidationError("name is required")

    assert error.status_code == 400
    assert str(error) == "name is required"


@pytest.mark.parametrize("status_code", [503, 0, 99])
def test_client_error_rejects_non_client_status(status_code):
    with pytest.raises(ValueError):
        ClientError("nope", status_code)


@pytest.mark.parametrize(
    "error, expected",
    [
        (_WithStatus(404), 404),
        (_WithStatus(0), None),
        (_WithStatus(502), None),
        (ValueError("x"), None),
    ],
)
def test_error_status_code_only_returns_client_statuses(error, expected):
    assert error_status_code(error) == expected


def test_unsupported_platform_message():
    assert str(UnsupportedPlatformError("gcp")) == "Unsupported platform: gcp"

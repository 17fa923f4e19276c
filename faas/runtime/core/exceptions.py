"""
Custom exception classes.

Processor errors carry an explicit kind so the lifecycle can map them to an
HTTP status without inspecting arbitrary attributes. Loader and adapter
errors are never mapped by the lifecycle; entry points treat them as fatal.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CLIENT = "client"
    SERVER = "server"


class ProcessorError(Exception):
    """Base exception class for errors raised by processors."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.SERVER, status_code: int = 500):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ProcessorError):
    """Raised when the caller supplied invalid input."""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.VALIDATION, 400)


class ClientError(ProcessorError):
    """Raised for caller or downstream defects surfaced with a 4xx status."""

    def __init__(self, message: str, status_code: int = 400):
        if not 100 <= status_code < 500:
            raise ValueError(f"ClientError status_code must be 100-499, got {status_code}")
        super().__init__(message, ErrorKind.CLIENT, status_code)


class ServerError(ProcessorError):
    """Raised for failures whose detail must not reach the caller."""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.SERVER, 500)


def error_status_code(exc: BaseException) -> Optional[int]:
    """Return the client status (100-499) an error carries, if any."""
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and not isinstance(status_code, bool) and 100 <= status_code < 500:
        return status_code
    return None


def classify_error(exc: BaseException) -> ErrorKind:
    """
    Classify an error raised from validate_input or process.

    Processor errors are classified by their kind, except that a CLIENT kind
    without a 1xx-4xx status is a server error. Foreign exceptions carrying
    such a status are client errors; everything else is a server error.
    """
    if isinstance(exc, ProcessorError):
        if exc.kind is ErrorKind.CLIENT and error_status_code(exc) is None:
            return ErrorKind.SERVER
        return exc.kind

    if error_status_code(exc) is not None:
        return ErrorKind.CLIENT
    return ErrorKind.SERVER


# ===========================================
# Invocation wiring errors
# ===========================================


class UnsupportedPlatformError(ValueError):
    """Raised when no adapter is registered for a platform identifier."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class ProcessorNotFoundError(LookupError):
    """Raised when no module matches the processor naming convention."""

    def __init__(self, processor_name: str, module_path: str):
        self.processor_name = processor_name
        self.module_path = module_path
        super().__init__(f"Processor not found: {module_path}")


class ProcessorLoadError(RuntimeError):
    """Raised when a processor module exists but cannot be loaded."""

    def __init__(self, processor_name: str, cause: BaseException):
        self.processor_name = processor_name
        self.cause = cause
        super().__init__(f"Failed to load processor {processor_name}: {cause}")

"""
Core logic package.

Provides the processor lifecycle, error taxonomy and response helpers.
"""

from .context import Context
from .exceptions import (
    ClientError,
    ErrorKind,
    ProcessorError,
    ServerError,
    ValidationError,
    classify_error,
)
from .lifecycle import BaseProcessor, run_lifecycle
from .response_builder import ResponseBuilder

__all__ = [
    "BaseProcessor",
    "ClientError",
    "Context",
    "ErrorKind",
    "ProcessorError",
    "ResponseBuilder",
    "ServerError",
    "ValidationError",
    "classify_error",
    "run_lifecycle",
]

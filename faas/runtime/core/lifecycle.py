"""
Processor base lifecycle.

Every processor supplies validate_input and process; run_lifecycle sequences
them with logging, timing and error classification so all processors behave
the same regardless of which runtime invoked them.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from faas.runtime.core.context import Context
from faas.runtime.core.exceptions import (
    ErrorKind,
    ValidationError,
    classify_error,
    error_status_code,
)
from faas.runtime.core.response_builder import ResponseBuilder
from faas.runtime.models.http import Request, Response

logger = logging.getLogger("faas.lifecycle")

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _is_valid_required_value(value: Any) -> bool:
    return value is not None and value != ""


class BaseProcessor(ABC):
    """
    Base class for processors.

    One instance serves exactly one invocation. Subclasses set ``name`` to a
    stable identity used to tag their log lines.
    """

    name: Optional[str] = None

    def __init__(self, context: Context):
        self.context = context
        self.start_time = time.monotonic()

    @property
    def identity(self) -> str:
        return self.name or type(self).__name__

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)

    @abstractmethod
    async def validate_input(self, request: Request) -> None:
        pass

    @abstractmethod
    async def process(self, request: Request) -> Response:
        pass

    async def execute(self, request: Request) -> Response:
        return await run_lifecycle(self, request)

    # ---- logging ----

    def _emit(self, method: str, message: str) -> None:
        # Sink failures must not change the response.
        try:
            getattr(self.context, method)(f"[{self.identity}] {message}")
        except Exception:
            logger.debug(f"Context {method} failed for {self.identity}", exc_info=True)

    def log_info(self, message: str) -> None:
        self._emit("log", message)

    def log_error(self, error: Any) -> None:
        self._emit("log_error", str(error))

    def log_warning(self, message: str) -> None:
        self._emit("log_warning", message)

    # ---- validation helpers ----

    def validate_required(self, value: Any, field_name: str) -> None:
        if not _is_valid_required_value(value):
            raise ValidationError(f"{field_name} is required")

    def validate_request_body_required(self, request: Request) -> None:
        if not _is_valid_required_value(request.body):
            raise ValidationError("Request body is required")

    def validate_request_query_param_required(self, request: Request, query_param_name: str) -> None:
        query = request.query or {}
        if not _is_valid_required_value(query.get(query_param_name)):
            raise ValidationError(f"Request query param: {query_param_name} is required")

    # ---- error mapping ----

    def handle_error(self, error: BaseException) -> Response:
        duration = self.elapsed_ms()
        kind = classify_error(error)

        if kind is ErrorKind.VALIDATION:
            self.log_warning(f"Validation error after {duration}ms: {error}")
            return ResponseBuilder.bad_request(str(error))

        if kind is ErrorKind.CLIENT:
            self.log_warning(f"Client error after {duration}ms: {error}")
            return ResponseBuilder.error(str(error), error_status_code(error))

        self.log_error(f"Server error after {duration}ms: {error!r}")
        return ResponseBuilder.error(INTERNAL_ERROR_MESSAGE)


async def run_lifecycle(processor: BaseProcessor, request: Request) -> Response:
    """
    Run one invocation: validate, process, then map any failure to a Response.

    A successful Response is returned as-is.
    """
    try:
        processor.log_info(f"Processing started for {processor.identity}")
        processor.log_info(f"Request method: {request.method}, path: {request.path}")

        await processor.validate_input(request)

        result = await processor.process(request)
        processor.log_info(f"Processing completed successfully in {processor.elapsed_ms()}ms")

        return result
    except Exception as e:
        return processor.handle_error(e)

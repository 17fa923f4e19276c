"""
Azure Functions adapter.

Accepts the Python worker's ``azure.functions.HttpRequest`` / ``Context`` as
well as Node-style mappings (``body``, ``query``, ``headers``, ``params``,
``method``, ``url``) and contexts exposing ``log`` with ``error``/``warn``
channels.
"""

import logging
from collections.abc import Mapping
from typing import Any, Union

from faas.runtime.adapters.base import PlatformAdapter, as_dict, decode_body, native_field
from faas.runtime.core.context import Context
from faas.runtime.models.http import Request

logger = logging.getLogger("faas.adapters.azure")


class AzureContextAdapter(Context):
    def __init__(self, azure_context: Any, sink: logging.Logger = logger):
        self.azure_context = azure_context
        self.sink = sink
        self.invocation_id = getattr(azure_context, "invocation_id", None)

        native_log = getattr(azure_context, "log", None)
        self._native_log = native_log if callable(native_log) else None

    def _extra(self):
        return {"invocation_id": self.invocation_id} if self.invocation_id else {}

    def log(self, message: str) -> None:
        if self._native_log is not None:
            self._native_log(message)
        else:
            self.sink.info(message, extra=self._extra())

    def log_error(self, error: Union[BaseException, str]) -> None:
        if self._native_log is not None and callable(getattr(self._native_log, "error", None)):
            self._native_log.error(error)
        else:
            self.sink.error(str(error), extra=self._extra())

    def log_warning(self, message: str) -> None:
        if self._native_log is not None and callable(getattr(self._native_log, "warn", None)):
            self._native_log.warn(message)
        else:
            self.sink.warning(message, extra=self._extra())


def _azure_body(azure_request: Any) -> Any:
    if isinstance(azure_request, Mapping):
        return azure_request.get("body")
    get_body = getattr(azure_request, "get_body", None)
    if callable(get_body):
        return decode_body(get_body())
    return getattr(azure_request, "body", None)


class AzureAdapter(PlatformAdapter):
    """Structural mapping only; values are passed through untouched."""

    def create_context(self, native_context: Any) -> Context:
        return AzureContextAdapter(native_context)

    def create_request(self, native_request: Any) -> Request:
        # The Python worker names the query mapping ``params`` and path
        # parameters ``route_params``; the Node shape uses ``query``/``params``.
        if isinstance(native_request, Mapping):
            query = native_field(native_request, "query", {})
            path_parameters = native_field(native_request, "params", {})
        else:
            query = native_field(native_request, "params", {})
            path_parameters = native_field(native_request, "route_params", {})

        return Request(
            body=_azure_body(native_request),
            query=as_dict(query),
            headers=as_dict(native_field(native_request, "headers", {})),
            path_parameters=as_dict(path_parameters),
            method=native_field(native_request, "method"),
            path=native_field(native_request, "url"),
        )

"""
AWS Lambda adapter for API Gateway v1 proxy events.
"""

import base64
import logging
from typing import Any, Union

from faas.runtime.adapters.base import PlatformAdapter, as_dict, decode_body
from faas.runtime.core.context import Context
from faas.runtime.models.aws_v1 import APIGatewayProxyEvent
from faas.runtime.models.http import Request

logger = logging.getLogger("faas.adapters.aws")


class LambdaContextAdapter(Context):
    def __init__(self, lambda_context: Any, sink: logging.Logger = logger):
        self.lambda_context = lambda_context
        self.sink = sink
        self.aws_request_id = getattr(lambda_context, "aws_request_id", None)

    def _extra(self):
        return {"aws_request_id": self.aws_request_id} if self.aws_request_id else {}

    def log(self, message: str) -> None:
        self.sink.info(message, extra=self._extra())

    def log_error(self, error: Union[BaseException, str]) -> None:
        self.sink.error(str(error), extra=self._extra())

    def log_warning(self, message: str) -> None:
        self.sink.warning(message, extra=self._extra())


class AwsLambdaAdapter(PlatformAdapter):
    def create_context(self, native_context: Any) -> Context:
        return LambdaContextAdapter(native_context)

    def create_request(self, native_request: Any) -> Request:
        event = APIGatewayProxyEvent.model_validate(native_request or {})

        body: Any = event.body
        if body is not None and event.isBase64Encoded:
            body = base64.b64decode(body)

        return Request(
            body=decode_body(body),
            query=as_dict(event.queryStringParameters),
            headers=as_dict(event.headers),
            path_parameters=as_dict(event.pathParameters),
            method=event.httpMethod,
            path=event.path,
        )

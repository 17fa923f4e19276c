"""
AWS Lambda entry point for API Gateway v1 proxy integrations.
"""

import asyncio
import base64
from typing import Any, Dict

from faas.common.core.invocation_context import clear_invocation_id, set_invocation_id
from faas.runtime.handlers.invocation import (
    configure_logging_once,
    handle_invocation,
    serialize_body,
)
from faas.runtime.models.http import Response

PLATFORM = "aws"


def to_proxy_response(response: Response) -> Dict[str, Any]:
    body = serialize_body(response.body)
    result: Dict[str, Any] = {
        "statusCode": response.status_code,
        "headers": response.headers or {},
        "isBase64Encoded": False,
    }
    if isinstance(body, bytes):
        result["body"] = base64.b64encode(body).decode("ascii")
        result["isBase64Encoded"] = True
    else:
        result["body"] = body
    return result


def lambda_handler(event, context):
    configure_logging_once()
    set_invocation_id(getattr(context, "aws_request_id", None))
    try:
        response = asyncio.run(handle_invocation(PLATFORM, context, event))
        return to_proxy_response(response)
    finally:
        clear_invocation_id()

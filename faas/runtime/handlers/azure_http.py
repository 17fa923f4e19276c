"""
Azure Functions HTTP trigger entry point.

function.json points its scriptFile at this module; DEPLOY_PROCESSOR selects
the processor.
"""

import azure.functions as func

from faas.common.core.invocation_context import clear_invocation_id, set_invocation_id
from faas.runtime.handlers.invocation import (
    configure_logging_once,
    handle_invocation,
    serialize_body,
)
from faas.runtime.models.http import Response

PLATFORM = "azure"


def to_http_response(response: Response) -> func.HttpResponse:
    return func.HttpResponse(
        body=serialize_body(response.body),
        status_code=response.status_code,
        headers=response.headers or {},
    )


async def main(req: func.HttpRequest, context: func.Context) -> func.HttpResponse:
    configure_logging_once()
    set_invocation_id(getattr(context, "invocation_id", None))
    try:
        response = await handle_invocation(PLATFORM, context, req)
        return to_http_response(response)
    finally:
        clear_invocation_id()

"""
Shared invocation wiring for runtime entry points.

Adapter factory -> processor loader -> lifecycle. Failures before the
lifecycle starts are fatal for the invocation and become a generic 500.
"""

import json
import logging
from typing import Any, Optional, Union

from faas.common.core.logging_config import setup_logging
from faas.runtime.adapters.factory import AdapterFactory, adapter_factory
from faas.runtime.config import config
from faas.runtime.core.lifecycle import INTERNAL_ERROR_MESSAGE
from faas.runtime.core.response_builder import ResponseBuilder
from faas.runtime.models.http import Response
from faas.runtime.services.loader import ProcessorLoader, default_loader

logger = logging.getLogger("faas.handlers")

_logging_configured = False


def configure_logging_once() -> None:
    global _logging_configured
    if _logging_configured:
        return
    setup_logging(config.LOGGING_CONFIG_PATH, config.LOG_LEVEL)
    _logging_configured = True


async def handle_invocation(
    platform: str,
    native_context: Any,
    native_request: Any,
    processor_name: Optional[str] = None,
    factory: AdapterFactory = adapter_factory,
    loader: ProcessorLoader = default_loader,
) -> Response:
    processor_name = processor_name if processor_name is not None else config.DEPLOY_PROCESSOR

    try:
        context = factory.create_context(platform, native_context)
        request = factory.create_request(platform, native_request)
        processor = loader.instantiate(processor_name, context)
    except Exception as e:
        logger.exception(
            f"Invocation setup failed: {e}",
            extra={"platform": platform, "processor": processor_name},
        )
        return ResponseBuilder.error(INTERNAL_ERROR_MESSAGE)

    return await processor.execute(request)


def serialize_body(body: Any) -> Union[str, bytes]:
    if body is None:
        return ""
    if isinstance(body, (str, bytes)):
        return body
    return json.dumps(body, ensure_ascii=False, default=str)

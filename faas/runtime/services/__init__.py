"""
Service package.

Processor loading and the outbound collaborators processors use.
"""

from .http_service import FormDataField, HttpRequestConfig, HttpResponse, HttpService
from .input_casting import CastOptions, CastResult, InputCastingService
from .loader import ProcessorLoader, get_processor, load_processor_class, register_processor
from .pod_service import PodCriteriaBuilder, PodCriteriaService, PodService

__all__ = [
    "CastOptions",
    "CastResult",
    "FormDataField",
    "HttpRequestConfig",
    "HttpResponse",
    "HttpService",
    "InputCastingService",
    "PodCriteriaBuilder",
    "PodCriteriaService",
    "PodService",
    "ProcessorLoader",
    "get_processor",
    "load_processor_class",
    "register_processor",
]

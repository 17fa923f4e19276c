"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .aws_v1 import APIGatewayProxyEvent
from .http import Request, Response

__all__ = [
    "APIGatewayProxyEvent",
    "Request",
    "Response",
]

"""
Response builder helpers.

Pure functions of their inputs; every Response gets a JSON content type
unless the caller overrides it.
"""

from typing import Any, Dict, Optional

from faas.runtime.models.http import Response

DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ResponseBuilder:
    @staticmethod
    def create(
        status_code: int, body: Any, headers: Optional[Dict[str, str]] = None
    ) -> Response:
        merged = dict(DEFAULT_HEADERS)
        if headers:
            merged.update(headers)
        return Response(status_code=status_code, headers=merged, body=body)

    @classmethod
    def success(cls, data: Any, headers: Optional[Dict[str, str]] = None) -> Response:
        return cls.create(200, data, headers)

    @classmethod
    def error(
        cls, message: str, status_code: int = 500, headers: Optional[Dict[str, str]] = None
    ) -> Response:
        return cls.create(status_code, {"error": message}, headers)

    @classmethod
    def bad_request(cls, message: str) -> Response:
        return cls.error(message, 400)

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> Response:
        return cls.error(message, 404)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> Response:
        return cls.error(message, 401)

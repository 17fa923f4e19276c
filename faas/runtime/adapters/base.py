"""
Platform adapter interface.

An adapter translates one runtime's native invocation objects into the
neutral Context and Request.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Dict

from faas.runtime.core.context import Context
from faas.runtime.models.http import Request


class PlatformAdapter(ABC):
    @abstractmethod
    def create_context(self, native_context: Any) -> Context:
        pass

    @abstractmethod
    def create_request(self, native_request: Any) -> Request:
        pass


def native_field(native: Any, name: str, default: Any = None) -> Any:
    """Read a field from either a mapping or an attribute-style native object."""
    if isinstance(native, Mapping):
        value = native.get(name, default)
    else:
        value = getattr(native, name, default)
    return default if value is None else value


def as_dict(value: Any) -> Dict[str, Any]:
    """Copy a mapping-like native value into a plain dict; None becomes empty."""
    if not value:
        return {}
    return dict(value)


def decode_body(raw: Any) -> Any:
    """
    Turn a raw wire body into the value processors receive.

    JSON is parsed, other text is returned as str, undecodable bytes are kept
    as bytes, and an empty body becomes None.
    """
    if raw is None or raw == b"" or raw == "":
        return None
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError:
            return bytes(raw)
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw
    return raw

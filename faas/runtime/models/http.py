"""
Neutral HTTP contract models.

Request and Response shapes shared by every platform adapter and processor,
independent of the runtime that delivered the invocation.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Request(BaseModel):
    """
    Invocation request as seen by a processor.

    Frozen: adapters build it once and processors only read it.
    """

    body: Any = None
    query: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, Any] = Field(default_factory=dict)
    path_parameters: Dict[str, Any] = Field(default_factory=dict)
    method: Optional[str] = None
    path: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Response(BaseModel):
    """Invocation result handed back to the runtime entry point."""

    status_code: int
    headers: Optional[Dict[str, str]] = None
    body: Any = None

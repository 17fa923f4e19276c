"""
Runtime entry points.

Platform modules (``azure_http``, ``aws_lambda``) import their runtime SDKs,
so they are not imported here.
"""

from .invocation import handle_invocation, serialize_body

__all__ = ["handle_invocation", "serialize_body"]

"""
InvocationContext management.
Use ContextVar so concurrent invocations keep their own invocation id.
"""

import uuid
from contextvars import ContextVar
from typing import Optional


_invocation_id_var: ContextVar[Optional[str]] = ContextVar("invocation_id", default=None)


def get_invocation_id() -> Optional[str]:
    """Get the current invocation id."""
    return _invocation_id_var.get()


def set_invocation_id(invocation_id: Optional[str] = None) -> str:
    """
    Bind an invocation id to the current context.

    Args:
        invocation_id: id supplied by the host runtime; a UUID is generated when missing

    Returns:
        The id that was set
    """
    value = invocation_id or str(uuid.uuid4())
    _invocation_id_var.set(value)
    return value


def clear_invocation_id() -> None:
    """Clear the invocation id context."""
    _invocation_id_var.set(None)

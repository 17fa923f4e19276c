"""
Invocation logging context.

The capability set a processor uses to write to its host runtime's log sink.
"""

from abc import ABC, abstractmethod
from typing import Union


class Context(ABC):
    @abstractmethod
    def log(self, message: str) -> None:
        """Write an informational message."""

    @abstractmethod
    def log_error(self, error: Union[BaseException, str]) -> None:
        """Write to the runtime's error channel."""

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Write to the runtime's warning channel."""

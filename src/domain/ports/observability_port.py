"""
Port (interface) for observability / tracing handlers.
See docs/CleanArchitecture.md — Phase 2 for the architectural rationale.
Infrastructure adapters (e.g. LangfuseObservabilityHandler) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IObservabilityHandler(ABC):
    @abstractmethod
    def callbacks(self) -> list[Any]:
        """Return the framework-native callbacks to attach to one model call (may be empty)."""
        ...

    @abstractmethod
    def trace_metadata(
        self,
        user_id: Optional[str],
        session_id: Optional[str],
        tags: list[str],
    ) -> dict:
        """Translate tracing context into the backend's run-metadata keys."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered telemetry data to the remote backend."""
        ...

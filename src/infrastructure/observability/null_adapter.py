"""
No-op IObservabilityHandler, wired when LANGFUSE_PUBLIC_KEY is not set.
See docs/CleanArchitecture.md — Phase 5 for the architectural rationale.
"""

from typing import Any, Optional

from src.domain.ports.observability_port import IObservabilityHandler


class NullObservabilityHandler(IObservabilityHandler):
    def callbacks(self) -> list[Any]:
        return []

    def trace_metadata(
        self,
        user_id: Optional[str],
        session_id: Optional[str],
        tags: list[str],
    ) -> dict:
        metadata: dict = {"tags": list(tags)}
        if user_id:
            metadata["user_id"] = user_id
        if session_id:
            metadata["session_id"] = session_id
        return metadata

    def flush(self) -> None:
        pass

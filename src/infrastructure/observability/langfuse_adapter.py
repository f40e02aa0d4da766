"""
Infrastructure adapter: Langfuse → IObservabilityHandler.
See docs/CleanArchitecture.md — Phase 5 for the architectural rationale.

Langfuse is imported lazily inside the methods so the module can be loaded
even when LANGFUSE_* environment variables are not yet set (e.g. during testing).
The SecretsManagerAdapter.load_into_env() call in the AgentCore entrypoint must
run before this adapter is first used.
"""

from typing import Any, Optional

from src.domain.ports.observability_port import IObservabilityHandler


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Wraps the Langfuse LangChain CallbackHandler."""

    def __init__(self) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()

    def callbacks(self) -> list[Any]:
        return [self._handler]

    def trace_metadata(
        self,
        user_id: Optional[str],
        session_id: Optional[str],
        tags: list[str],
    ) -> dict:
        return {
            "langfuse_user_id": user_id,
            "langfuse_session_id": session_id,
            "langfuse_tags": list(tags),
        }

    def flush(self) -> None:
        """Flush pending traces to the Langfuse backend before the process exits."""
        from langfuse import get_client
        get_client().flush()

"""
Tests for the observability adapters.
"""

from unittest.mock import MagicMock, patch

from src.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler
from src.infrastructure.observability.null_adapter import NullObservabilityHandler


class TestNullObservabilityHandler:
    def test_no_callbacks(self):
        assert NullObservabilityHandler().callbacks() == []

    def test_metadata_omits_missing_ids(self):
        metadata = NullObservabilityHandler().trace_metadata(None, "s-1", ["llm-node", "chat"])
        assert metadata == {"tags": ["llm-node", "chat"], "session_id": "s-1"}


class TestLangfuseObservabilityHandler:
    def test_callback_and_metadata(self):
        handler_instance = MagicMock()
        with patch("langfuse.langchain.CallbackHandler", return_value=handler_instance):
            handler = LangfuseObservabilityHandler()

        assert handler.callbacks() == [handler_instance]
        assert handler.trace_metadata("u-1", "s-1", ["llm-node", "code"]) == {
            "langfuse_user_id": "u-1",
            "langfuse_session_id": "s-1",
            "langfuse_tags": ["llm-node", "code"],
        }

    def test_flush_uses_client(self):
        client = MagicMock()
        with patch("langfuse.langchain.CallbackHandler"):
            handler = LangfuseObservabilityHandler()
        with patch("langfuse.get_client", return_value=client):
            handler.flush()
        client.flush.assert_called_once()

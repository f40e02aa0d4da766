"""
Selects the ILanguageModelProvider named in NodeConfig.
See docs/CleanArchitecture.md — Phase 4 for the architectural rationale.
"""

from src.domain.ports.llm_port import ILanguageModelProvider
from src.infrastructure.config.settings import NodeConfig


def create_provider(config: NodeConfig) -> ILanguageModelProvider:
    """Raises ValueError for a provider name this node does not ship."""
    if config.provider == "openai":
        from src.infrastructure.llm.openai_adapter import OpenAIProvider

        return OpenAIProvider(
            chat_model_id=config.chat_model_id,
            code_model_id=config.code_model_id,
            timeout=config.timeout_seconds,
        )
    if config.provider == "bedrock":
        from src.infrastructure.llm.bedrock_adapter import BedrockProvider

        return BedrockProvider(
            region=config.aws_region,
            chat_model_id=config.chat_model_id,
            code_model_id=config.code_model_id,
            timeout=config.timeout_seconds,
        )
    raise ValueError(f"Unsupported LLM provider: {config.provider!r}")

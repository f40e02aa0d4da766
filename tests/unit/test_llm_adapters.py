"""
Tests for the OpenAI and Bedrock provider adapters and the provider registry.
"""

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from src.domain.entities.generation import GenerationMode
from src.infrastructure.config.settings import NodeConfig
from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter, BedrockProvider
from src.infrastructure.llm.openai_adapter import OpenAIChatAdapter, OpenAIProvider
from src.infrastructure.llm.provider_registry import create_provider

MESSAGES = [SystemMessage(content="sys"), HumanMessage(content="hi")]


class TestOpenAIProvider:
    def test_default_profiles_differ_per_mode(self):
        provider = OpenAIProvider()
        chat = provider.profile_for(GenerationMode.CHAT)
        code = provider.profile_for(GenerationMode.CODE)

        assert chat.model_id == "gpt-4o-mini"
        assert code.model_id == "gpt-4.1"
        assert chat.default_system_instruction != code.default_system_instruction

    def test_profile_for_accepts_literal(self):
        assert OpenAIProvider().profile_for("code").mode is GenerationMode.CODE

    def test_model_ids_overridable(self):
        provider = OpenAIProvider(chat_model_id="gpt-4o", code_model_id="gpt-5-codex")
        assert provider.profile_for(GenerationMode.CHAT).model_id == "gpt-4o"
        assert provider.profile_for(GenerationMode.CODE).model_id == "gpt-5-codex"

    @pytest.mark.parametrize("credential", [{}, {"api_key": ""}, {"api_key": "  "}, {"token": "x"}])
    def test_missing_api_key_rejected(self, credential):
        with pytest.raises(ValueError, match="api_key"):
            OpenAIProvider().create_model("gpt-4o-mini", 0.5, credential)

    def test_create_model_configures_single_attempt(self):
        adapter = OpenAIProvider(timeout=12).create_model("gpt-4.1", 0.2, {"api_key": "sk-test"})

        assert isinstance(adapter, OpenAIChatAdapter)
        assert adapter._llm.model_name == "gpt-4.1"
        assert adapter._llm.temperature == 0.2
        assert adapter._llm.max_retries == 0
        assert adapter._llm.request_timeout == 12


class TestOpenAIChatAdapter:
    async def test_ainvoke_delegates_to_runnable(self):
        adapter = OpenAIChatAdapter(_runnable=FakeListChatModel(responses=["pong"]))
        reply = await adapter.ainvoke(MESSAGES, config={"metadata": {"tags": ["t"]}})
        assert reply.content == "pong"


class TestBedrockProvider:
    def test_default_profiles(self):
        provider = BedrockProvider()
        assert provider.profile_for(GenerationMode.CHAT).model_id == BedrockProvider.CHAT_MODEL_ID
        assert provider.profile_for(GenerationMode.CODE).model_id == BedrockProvider.CODE_MODEL_ID

    def test_half_aws_key_pair_rejected(self):
        with pytest.raises(ValueError, match="aws_secret_access_key"):
            BedrockChatAdapter(
                model_id=BedrockProvider.CHAT_MODEL_ID,
                credential={"aws_access_key_id": "AKIA..."},
            )

    async def test_ainvoke_delegates_to_runnable(self):
        adapter = BedrockChatAdapter(_runnable=FakeListChatModel(responses=["from bedrock"]))
        reply = await adapter.ainvoke(MESSAGES)
        assert reply.content == "from bedrock"


class TestProviderRegistry:
    def test_openai_selected(self):
        provider = create_provider(NodeConfig(provider="openai", chat_model_id="gpt-4o"))
        assert provider.name == "openai"
        assert provider.profile_for(GenerationMode.CHAT).model_id == "gpt-4o"

    def test_bedrock_selected(self):
        provider = create_provider(NodeConfig(provider="bedrock"))
        assert provider.name == "bedrock"

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported"):
            create_provider(NodeConfig(provider="cohere"))

"""Pytest configuration and shared fakes for the generation node."""

import sys
from pathlib import Path
from typing import Any, Optional

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.application.generation.prompts import DEFAULT_SYSTEM_INSTRUCTIONS  # noqa: E402
from src.application.use_cases.generate_text import GenerateTextUseCase  # noqa: E402
from src.domain.entities.generation import GenerationMode, ModelProfile  # noqa: E402
from src.domain.ports.llm_port import ILanguageModel, ILanguageModelProvider  # noqa: E402
from src.domain.ports.secret_store_port import ISecretStore  # noqa: E402
from src.infrastructure.llm.openai_adapter import OpenAIChatAdapter  # noqa: E402
from src.infrastructure.observability.null_adapter import NullObservabilityHandler  # noqa: E402

CHAT_MODEL = "fake-chat-model"
CODE_MODEL = "fake-code-model"


class RecordingModel(ILanguageModel):
    """ILanguageModel fake that records each call and replays a canned reply."""

    def __init__(self, reply: Any = "ok", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[list, Optional[dict]]] = []

    async def ainvoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        self.calls.append((messages, config))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeProvider(ILanguageModelProvider):
    """Provider whose model per model id is chosen by the test."""

    name = "fake"

    def __init__(self, models: Optional[dict[str, ILanguageModel]] = None) -> None:
        self.models = models or {}
        self.created: list[tuple[str, float, dict]] = []
        self._profiles = {
            GenerationMode.CHAT: ModelProfile(
                GenerationMode.CHAT, CHAT_MODEL, DEFAULT_SYSTEM_INSTRUCTIONS[GenerationMode.CHAT]
            ),
            GenerationMode.CODE: ModelProfile(
                GenerationMode.CODE, CODE_MODEL, DEFAULT_SYSTEM_INSTRUCTIONS[GenerationMode.CODE]
            ),
        }

    def profile_for(self, mode: GenerationMode) -> ModelProfile:
        return self._profiles[mode]

    def create_model(self, model_id: str, temperature: float, credential: dict) -> ILanguageModel:
        if not credential.get("api_key"):
            raise ValueError("fake credential has no api_key")
        self.created.append((model_id, temperature, credential))
        return self.models[model_id]


class DictSecretStore(ISecretStore):
    def __init__(self, secrets: dict[str, dict]) -> None:
        self._secrets = secrets

    def get_secret(self, handle: str) -> dict:
        if not handle:
            raise ValueError("credential handle is empty")
        try:
            return self._secrets[handle]
        except KeyError:
            raise ValueError(f"no secret found for credential handle {handle!r}") from None


@pytest.fixture
def chat_model() -> RecordingModel:
    return RecordingModel(reply="The charter sets out three goals.")


@pytest.fixture
def code_model() -> RecordingModel:
    return RecordingModel(reply="def stub():\n    raise NotImplementedError")


@pytest.fixture
def provider(chat_model, code_model) -> FakeProvider:
    return FakeProvider({CHAT_MODEL: chat_model, CODE_MODEL: code_model})


@pytest.fixture
def secret_store() -> DictSecretStore:
    return DictSecretStore(
        {
            "OPENAI_API_KEY": {"api_key": "sk-test"},
            "EMPTY_SECRET": {},
        }
    )


@pytest.fixture
def use_case(provider, secret_store) -> GenerateTextUseCase:
    return GenerateTextUseCase(provider, secret_store, NullObservabilityHandler())


@pytest.fixture
def fake_openai_adapter():
    """Factory for OpenAIChatAdapters backed by LangChain's FakeListChatModel."""

    def _build(*responses: str) -> OpenAIChatAdapter:
        return OpenAIChatAdapter(_runnable=FakeListChatModel(responses=list(responses)))

    return _build

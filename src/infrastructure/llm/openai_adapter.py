"""
Infrastructure adapter: OpenAI (ChatOpenAI) → ILanguageModel / ILanguageModelProvider.
See docs/CleanArchitecture.md — Phase 4 for the architectural rationale.

All ChatOpenAI / langchain_openai details are confined here.
max_retries is pinned to 0 so one node invocation issues exactly one request;
a 429 from OpenAI surfaces as an error like any other failure.
"""

from typing import Any, Optional

from langchain_openai import ChatOpenAI

from src.application.generation.prompts import DEFAULT_SYSTEM_INSTRUCTIONS
from src.domain.entities.generation import GenerationMode, ModelProfile
from src.domain.ports.llm_port import ILanguageModel, ILanguageModelProvider


class OpenAIChatAdapter(ILanguageModel):
    """Wraps ChatOpenAI and exposes the ILanguageModel interface."""

    def __init__(
        self,
        model_id: str = "",
        temperature: float = 0.0,
        api_key: str = "",
        timeout: float = 60.0,
        _runnable: Any = None,
    ) -> None:
        """
        Args:
            _runnable: Optional pre-configured Runnable (used by tests to wrap a fake
                       chat model without constructing ChatOpenAI).
        """
        if _runnable is not None:
            self._llm = _runnable
        else:
            self._llm = ChatOpenAI(
                model=model_id,
                temperature=temperature,
                api_key=api_key,
                timeout=timeout,
                max_retries=0,
                use_responses_api=False,
            )

    async def ainvoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        return await self._llm.ainvoke(messages, config=config)


class OpenAIProvider(ILanguageModelProvider):
    name = "openai"

    CHAT_MODEL_ID = "gpt-4o-mini"
    CODE_MODEL_ID = "gpt-4.1"

    def __init__(
        self,
        chat_model_id: Optional[str] = None,
        code_model_id: Optional[str] = None,
        timeout: float = 60.0,
    ) -> None:
        self._timeout = timeout
        self._profiles = {
            GenerationMode.CHAT: ModelProfile(
                GenerationMode.CHAT,
                chat_model_id or self.CHAT_MODEL_ID,
                DEFAULT_SYSTEM_INSTRUCTIONS[GenerationMode.CHAT],
            ),
            GenerationMode.CODE: ModelProfile(
                GenerationMode.CODE,
                code_model_id or self.CODE_MODEL_ID,
                DEFAULT_SYSTEM_INSTRUCTIONS[GenerationMode.CODE],
            ),
        }

    def profile_for(self, mode: GenerationMode) -> ModelProfile:
        return self._profiles[GenerationMode(mode)]

    def create_model(self, model_id: str, temperature: float, credential: dict) -> OpenAIChatAdapter:
        """Raises ValueError if the resolved credential has no api_key."""
        api_key = (credential or {}).get("api_key", "")
        if not str(api_key).strip():
            raise ValueError("OpenAI credential has no api_key")
        return OpenAIChatAdapter(
            model_id=model_id,
            temperature=temperature,
            api_key=str(api_key).strip(),
            timeout=self._timeout,
        )

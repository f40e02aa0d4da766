"""
Ports (interfaces) for language model providers.
See docs/CleanArchitecture.md — Phase 2 for the architectural rationale.
Infrastructure adapters (e.g. OpenAIProvider, BedrockProvider) must implement these interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.domain.entities.generation import GenerationMode, ModelProfile


class ILanguageModel(ABC):
    @abstractmethod
    async def ainvoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        """Invoke the model once and return its response message."""
        ...


class ILanguageModelProvider(ABC):
    name: str

    @abstractmethod
    def profile_for(self, mode: GenerationMode) -> ModelProfile:
        """Return the model profile serving *mode*."""
        ...

    @abstractmethod
    def create_model(
        self,
        model_id: str,
        temperature: float,
        credential: dict,
    ) -> ILanguageModel:
        """Build a model bound to *model_id* authenticated with the resolved *credential*.

        Raises:
            ValueError: if *credential* lacks the key material this provider needs.
        """
        ...

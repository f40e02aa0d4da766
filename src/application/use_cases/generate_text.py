"""
Use-case: run one text-generation request and map the outcome onto the node outputs.
See docs/CleanArchitecture.md — Phase 3 for the architectural rationale.
Depends only on Domain ports and entities plus langchain_core message types.

Every failure (credential resolution, provider auth, network, rate limiting,
provider-side validation) is caught at the single boundary in execute() and
reported as GenerationResult.failure(); nothing escapes to the caller.
"""

import logging
from typing import Any

from src.application.generation.prompts import build_messages
from src.domain.entities.generation import GenerationRequest, GenerationResult
from src.domain.ports.llm_port import ILanguageModelProvider
from src.domain.ports.observability_port import IObservabilityHandler
from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)

TRACE_TAGS = ["llm-node"]


def extract_text(message: Any) -> str:
    """Return the text of a chat model reply.

    Handles plain string content and the list-of-blocks content some
    providers return (only "text" blocks are kept).
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts).strip()
    return str(content).strip()


def describe_error(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or exc.__class__.__name__


class GenerateTextUseCase:
    def __init__(
        self,
        provider: ILanguageModelProvider,
        secret_store: ISecretStore,
        observability: IObservabilityHandler,
    ) -> None:
        """
        Args:
            provider:      ILanguageModelProvider implementation (e.g. OpenAIProvider).
            secret_store:  ISecretStore resolving credential handles (e.g. EnvSecretStore).
            observability: IObservabilityHandler implementation (e.g. Langfuse adapter).
        """
        self._provider = provider
        self._secret_store = secret_store
        self._observability = observability

    @property
    def provider_name(self) -> str:
        return self._provider.name

    def flush(self) -> None:
        """Flush traces buffered by the observability handler."""
        self._observability.flush()

    async def execute(self, request: GenerationRequest) -> GenerationResult:
        """Issue one model call for *request* and return exactly one output.

        No retries are attempted; rate limiting is reported like any other failure.
        """
        model_id = None
        try:
            if not request.user_instruction.strip():
                raise ValueError("user_instruction must be a non-empty string")
            profile = self._provider.profile_for(request.mode)
            model_id = profile.model_id
            secret = self._secret_store.get_secret(request.credential)
            model = self._provider.create_model(model_id, request.temperature, secret)
            messages = build_messages(
                request.system_instruction.strip() or profile.default_system_instruction,
                request.user_instruction,
            )
            config = {
                "callbacks": self._observability.callbacks(),
                "metadata": self._observability.trace_metadata(
                    request.user_id,
                    request.session_id,
                    TRACE_TAGS + [request.mode.value],
                ),
            }
            reply = await model.ainvoke(messages, config=config)
            text = extract_text(reply)
        except Exception as exc:
            logger.warning(
                "Generation failed (provider=%s, mode=%s, model=%s): %s",
                self._provider.name,
                getattr(request.mode, "value", request.mode),
                model_id,
                exc.__class__.__name__,
            )
            return GenerationResult.failure(describe_error(exc))

        if not text:
            logger.warning(
                "Empty reply (provider=%s, mode=%s, model=%s)",
                self._provider.name,
                request.mode.value,
                model_id,
            )
            return GenerationResult.failure("model returned an empty response")

        logger.info(
            "Generation succeeded (provider=%s, mode=%s, model=%s, chars=%d)",
            self._provider.name,
            request.mode.value,
            model_id,
            len(text),
        )
        return GenerationResult.success(text)

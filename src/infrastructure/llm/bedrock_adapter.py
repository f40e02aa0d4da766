"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) → ILanguageModel / ILanguageModelProvider.
See docs/CleanArchitecture.md — Phase 4 for the architectural rationale.

All ChatBedrock / langchain_aws details are confined here.
The resolved credential may carry explicit AWS keys; without them boto3's
default credential chain (role, profile, env) is used.
"""

from typing import Any, Optional

from botocore.config import Config
from langchain_aws import ChatBedrock

from src.application.generation.prompts import DEFAULT_SYSTEM_INSTRUCTIONS
from src.domain.entities.generation import GenerationMode, ModelProfile
from src.domain.ports.llm_port import ILanguageModel, ILanguageModelProvider

AWS_CREDENTIAL_KEYS = ("aws_access_key_id", "aws_secret_access_key", "aws_session_token")


class BedrockChatAdapter(ILanguageModel):
    """Wraps ChatBedrock and exposes the ILanguageModel interface."""

    def __init__(
        self,
        model_id: str = "",
        temperature: float = 0.0,
        region: str = "us-east-1",
        credential: Optional[dict] = None,
        timeout: float = 60.0,
        _runnable: Any = None,
    ) -> None:
        """
        Args:
            _runnable: Optional pre-configured Runnable (used by tests to wrap a fake
                       chat model without constructing ChatBedrock).
        """
        if _runnable is not None:
            self._llm = _runnable
            return

        aws_kwargs = {
            key: credential[key]
            for key in AWS_CREDENTIAL_KEYS
            if credential and credential.get(key)
        }
        if ("aws_access_key_id" in aws_kwargs) != ("aws_secret_access_key" in aws_kwargs):
            raise ValueError(
                "Bedrock credential must contain both aws_access_key_id and aws_secret_access_key"
            )
        self._llm = ChatBedrock(
            model=model_id,
            model_kwargs={"temperature": temperature},
            region_name=region,
            config=Config(read_timeout=timeout, retries={"max_attempts": 1}),
            **aws_kwargs,
        )

    async def ainvoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        return await self._llm.ainvoke(messages, config=config)


class BedrockProvider(ILanguageModelProvider):
    name = "bedrock"

    CHAT_MODEL_ID = "us.amazon.nova-pro-v1:0"
    CODE_MODEL_ID = "us.anthropic.claude-3-5-sonnet-20241022-v2:0"

    def __init__(
        self,
        region: str = "us-east-1",
        chat_model_id: Optional[str] = None,
        code_model_id: Optional[str] = None,
        timeout: float = 60.0,
    ) -> None:
        self._region = region
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

    def create_model(self, model_id: str, temperature: float, credential: dict) -> BedrockChatAdapter:
        return BedrockChatAdapter(
            model_id=model_id,
            temperature=temperature,
            region=self._region,
            credential=credential,
            timeout=self._timeout,
        )

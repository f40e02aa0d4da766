"""
Composition Root helpers shared by the FastAPI and AgentCore entrypoints.
See docs/CleanArchitecture.md — Phase 6 for the architectural rationale.

Only this module (and the entrypoints calling it) knows which concrete adapter
backs each port; the application layer receives them by injection.
"""

import logging
from typing import Optional

from src.application.use_cases.generate_text import GenerateTextUseCase
from src.domain.ports.observability_port import IObservabilityHandler
from src.domain.ports.secret_store_port import ISecretStore
from src.domain.ports.token_validator_port import ITokenValidator
from src.infrastructure.config.settings import NodeConfig
from src.infrastructure.llm.provider_registry import create_provider

logger = logging.getLogger(__name__)


def build_secret_store(config: NodeConfig) -> ISecretStore:
    if config.secret_store == "secretsmanager":
        from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

        return SecretsManagerAdapter(region=config.aws_region)
    from src.infrastructure.secrets.env_secret_store import EnvSecretStore

    return EnvSecretStore(prefix=config.secret_env_prefix)


def build_observability(config: NodeConfig) -> IObservabilityHandler:
    if config.langfuse_enabled:
        from src.infrastructure.observability.langfuse_adapter import LangfuseObservabilityHandler

        return LangfuseObservabilityHandler()
    from src.infrastructure.observability.null_adapter import NullObservabilityHandler

    return NullObservabilityHandler()


def build_token_validator(config: NodeConfig) -> Optional[ITokenValidator]:
    if not config.auth_enabled:
        logger.warning("Cognito is not configured; /generate accepts unauthenticated calls.")
        return None
    from src.infrastructure.auth.cognito_validator import CognitoTokenValidator

    return CognitoTokenValidator(
        user_pool_id=config.cognito_user_pool_id,
        client_id=config.cognito_client_id,
        region=config.cognito_region,
    )


def build_use_case(config: NodeConfig) -> GenerateTextUseCase:
    provider = create_provider(config)
    logger.info(
        "Wiring generation node (provider=%s, secret_store=%s, langfuse=%s)",
        provider.name,
        config.secret_store,
        config.langfuse_enabled,
    )
    return GenerateTextUseCase(
        provider=provider,
        secret_store=build_secret_store(config),
        observability=build_observability(config),
    )

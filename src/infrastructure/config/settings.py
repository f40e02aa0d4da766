"""
Environment-driven configuration for the generation node.
See docs/CleanArchitecture.md — Phase 6 for the architectural rationale.

Entrypoints call load_dotenv() before NodeConfig.from_env() so a local .env
file can stand in for real environment variables.
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.infrastructure.secrets.env_secret_store import DEFAULT_PREFIX

PROVIDERS = ("openai", "bedrock")
SECRET_STORES = ("env", "secretsmanager")


@dataclass(frozen=True)
class NodeConfig:
    provider: str = "openai"
    chat_model_id: Optional[str] = None
    code_model_id: Optional[str] = None
    timeout_seconds: float = 60.0
    secret_store: str = "env"
    secret_env_prefix: str = DEFAULT_PREFIX
    aws_region: str = "us-east-1"
    cognito_user_pool_id: Optional[str] = None
    cognito_client_id: Optional[str] = None
    cognito_region: str = "us-east-1"
    langfuse_enabled: bool = False
    log_level: str = "INFO"

    @property
    def auth_enabled(self) -> bool:
        return bool(self.cognito_user_pool_id and self.cognito_client_id)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NodeConfig":
        """Build a NodeConfig from *environ* (defaults to os.environ).

        Raises:
            ValueError: on an unknown provider or secret store, or a timeout
                        that is not a positive finite number.
        """
        env = os.environ if environ is None else environ

        provider = env.get("LLM_PROVIDER", "openai").strip().lower()
        if provider not in PROVIDERS:
            raise ValueError(f"LLM_PROVIDER must be one of {PROVIDERS}, got {provider!r}")

        secret_store = env.get("SECRET_STORE", "env").strip().lower()
        if secret_store not in SECRET_STORES:
            raise ValueError(
                f"SECRET_STORE must be one of {SECRET_STORES}, got {secret_store!r}"
            )

        raw_timeout = env.get("LLM_TIMEOUT_SECONDS", "60")
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ValueError(f"LLM_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from exc
        if not math.isfinite(timeout) or timeout <= 0:
            raise ValueError("LLM_TIMEOUT_SECONDS must be a positive finite number")

        region = env.get("AWS_DEFAULT_REGION", "us-east-1")
        return cls(
            provider=provider,
            chat_model_id=env.get("CHAT_MODEL_ID") or None,
            code_model_id=env.get("CODE_MODEL_ID") or None,
            timeout_seconds=timeout,
            secret_store=secret_store,
            secret_env_prefix=env.get("SECRET_ENV_PREFIX") or DEFAULT_PREFIX,
            aws_region=region,
            cognito_user_pool_id=env.get("COGNITO_USER_POOL_ID") or None,
            cognito_client_id=env.get("COGNITO_CLIENT_ID") or None,
            cognito_region=env.get("COGNITO_REGION", region),
            langfuse_enabled=bool(env.get("LANGFUSE_PUBLIC_KEY")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.
See docs/CleanArchitecture.md — Phase 6 for the architectural rationale.

Credential handles are secret ARNs or names. JSON secrets are returned as-is;
a plain-string secret is treated as a bare API key.

load_into_env() is called once at AgentCore container startup (before any SDK
that reads LANGFUSE_* env vars is imported) so secrets are available process-wide.
"""

import json
import os
from typing import Any, Optional

import boto3

from src.domain.ports.secret_store_port import ISecretStore


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: Optional[str] = None, client: Any = None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, handle: str) -> dict:
        """Fetch a secret by ARN or name.

        Raises:
            ValueError: if *handle* is blank or the secret has no string value.
            botocore ClientError: propagated for unknown secrets or denied access.
        """
        if not handle or not handle.strip():
            raise ValueError("credential handle is empty")
        response = self._client.get_secret_value(SecretId=handle.strip())
        secret_string = response.get("SecretString")
        if not secret_string:
            raise ValueError(f"secret {handle!r} has no string value")
        try:
            value = json.loads(secret_string)
        except json.JSONDecodeError:
            return {"api_key": secret_string.strip()}
        if not isinstance(value, dict):
            return {"api_key": str(value)}
        return value

    def load_into_env(self, handle: str) -> None:
        """Inject all key-value pairs of a JSON secret into os.environ.

        Must be called before any library that reads env vars at import time
        (e.g. langfuse.langchain.CallbackHandler reads LANGFUSE_SECRET_KEY).
        """
        secrets = self.get_secret(handle)
        for key, value in secrets.items():
            os.environ[key] = str(value)

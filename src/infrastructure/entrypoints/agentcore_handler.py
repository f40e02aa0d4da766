"""
AgentCore Runtime entry point — cloud deployment.
See docs/CleanArchitecture.md — Phase 6 for the architectural rationale.

Langfuse secrets are fetched from AWS Secrets Manager at container startup
(before any Langfuse import) so LANGFUSE_* env vars are available process-wide.
Authentication is handled by AgentCore's built-in OAuth authorizer; the validated
JWT is forwarded in context.request_headers so we can extract the caller sub for
Langfuse tracing without re-validating the signature.

Deploy:
    agentcore configure \\
        --entrypoint src/infrastructure/entrypoints/agentcore_handler.py \\
        --execution-role <AGENTCORE_EXECUTION_ROLE_ARN> \\
        --ecr-uri <ECR_REPOSITORY_URL> \\
        --authorizer-config cognito \\
        --cognito-user-pool-id <COGNITO_USER_POOL_ID> \\
        --cognito-client-id <COGNITO_CLIENT_ID>
    agentcore deploy --env LANGFUSE_SECRET_ARN=<arn> --env SECRET_STORE=secretsmanager
"""

import base64
import json
import logging
import os

# ---------------------------------------------------------------------------
# Secret bootstrap — must run before any library that reads LANGFUSE_* env vars
# ---------------------------------------------------------------------------
_secret_arn = os.environ.get("LANGFUSE_SECRET_ARN")
if _secret_arn:
    from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
    SecretsManagerAdapter().load_into_env(_secret_arn)

# ---------------------------------------------------------------------------
# Composition Root — wire all dependencies once at container startup
# ---------------------------------------------------------------------------
from bedrock_agentcore.runtime import BedrockAgentCoreApp  # noqa: E402

from src.domain.entities.generation import GenerationRequest, GenerationResult  # noqa: E402
from src.infrastructure.config.settings import NodeConfig, configure_logging  # noqa: E402
from src.infrastructure.entrypoints.composition import build_use_case  # noqa: E402

_config = NodeConfig.from_env()
configure_logging(_config.log_level)
_use_case = build_use_case(_config)

logger = logging.getLogger(__name__)

app = BedrockAgentCoreApp()


@app.entrypoint
async def invoke(payload: dict, context=None) -> dict:
    """AgentCore entrypoint — returns exactly one of {"response": ...} or {"error": ...}.

    Malformed payloads (unknown mode, non-numeric temperature) are reported on
    the error output rather than raised, like any other node failure.
    """
    try:
        request = GenerationRequest(
            mode=payload.get("mode", "chat"),
            system_instruction=payload.get("system_instruction", ""),
            user_instruction=payload.get("user_instruction", ""),
            temperature=payload.get("temperature", 1.0),
            credential=payload.get("credential", ""),
            user_id=_extract_sub(context),
            session_id=payload.get("session_id"),
        )
    except ValueError as exc:
        logger.warning("Rejected AgentCore payload: %s", exc)
        return GenerationResult.failure(str(exc)).as_outputs()

    result = await _use_case.execute(request)
    _use_case.flush()
    return result.as_outputs()


def _extract_sub(context) -> str | None:
    """Extract the 'sub' claim from the forwarded JWT payload without re-verifying."""
    try:
        auth_header = context.request_headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return None
        token = auth_header.split(" ", 1)[1]
        b64_payload = token.split(".")[1]
        # base64url without padding
        b64_payload += "=" * (-len(b64_payload) % 4)
        claims = json.loads(base64.urlsafe_b64decode(b64_payload))
        return claims.get("sub")
    except (AttributeError, IndexError, ValueError):
        return None


if __name__ == "__main__":
    app.run()

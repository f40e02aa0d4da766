"""
Infrastructure adapter: process environment → ISecretStore.
See docs/CleanArchitecture.md — Phase 6 for the architectural rationale.

Used for local runs, where load_dotenv() has populated os.environ from .env.
A handle names an environment variable inside the SECRET_ENV_PREFIX namespace
(LLM_NODE_KEY_ by default): handle "OPENAI" reads LLM_NODE_KEY_OPENAI. The
prefix may not be empty, so workflow authors can only reach the variables
meant for them and never e.g. AWS_SECRET_ACCESS_KEY or LANGFUSE_SECRET_KEY.
"""

import os
import re
from typing import Mapping, Optional

from src.domain.ports.secret_store_port import ISecretStore

DEFAULT_PREFIX = "LLM_NODE_KEY_"

_HANDLE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class EnvSecretStore(ISecretStore):
    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Raises:
            ValueError: if *prefix* is blank or not usable as a variable-name prefix.
        """
        if not prefix or not _HANDLE_PATTERN.match(prefix):
            raise ValueError(f"secret prefix must be a non-empty variable-name prefix, got {prefix!r}")
        self._prefix = prefix
        self._environ = environ

    def get_secret(self, handle: str) -> dict:
        """Resolve *handle* to {"api_key": <value of prefix + handle>}.

        Raises:
            ValueError: if *handle* is blank, malformed, unset, or set to a blank value.
        """
        if not handle or not handle.strip():
            raise ValueError("credential handle is empty")
        name = handle.strip()
        if not _HANDLE_PATTERN.match(name):
            raise ValueError(f"credential handle {name!r} is not a valid variable name")

        env = os.environ if self._environ is None else self._environ
        value = env.get(self._prefix + name, "").strip()
        if not value:
            raise ValueError(f"no secret found for credential handle {name!r}")
        return {"api_key": value}

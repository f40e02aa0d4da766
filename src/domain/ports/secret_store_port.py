"""
Port (interface) for secret stores.
See docs/CleanArchitecture.md — Phase 2 for the architectural rationale.
Infrastructure adapters (e.g. SecretsManagerAdapter, EnvSecretStore) must implement this interface.
"""

from abc import ABC, abstractmethod


class ISecretStore(ABC):
    @abstractmethod
    def get_secret(self, handle: str) -> dict:
        """Resolve a credential handle to its key-value pairs.

        Raises:
            ValueError: if *handle* is blank or does not resolve to a secret.
        """
        ...

"""
Port (interface) for JWT token validators.
See docs/CleanArchitecture.md — Phase 2 for the architectural rationale.
Infrastructure adapters (e.g. CognitoTokenValidator) must implement this interface.
"""

from abc import ABC, abstractmethod


class ITokenValidator(ABC):
    @abstractmethod
    def validate(self, token: str) -> dict:
        """Validate a bearer token sent by the automation host and return its claims.

        Raises:
            ValueError: if the token is invalid, expired, or not issued for this node.
        """
        ...

"""
Infrastructure adapter: AWS Cognito JWKS → ITokenValidator.
See docs/CleanArchitecture.md — Phase 6 for the architectural rationale.

Automation hosts call the node either on behalf of a signed-in user (ID token)
or as an app client using the client-credentials grant (access token).
ID tokens carry the app client in "aud"; access tokens carry it in "client_id".
JWKS are cached per-process via functools.lru_cache to avoid repeated HTTP calls.
"""

from functools import lru_cache

import httpx
from jose import JWTError, jwt

from src.domain.ports.token_validator_port import ITokenValidator

ACCEPTED_TOKEN_USES = ("id", "access")


class CognitoTokenValidator(ITokenValidator):
    """Validates Cognito ID and access tokens against the user pool's public JWKS."""

    def __init__(
        self,
        user_pool_id: str,
        client_id: str,
        region: str = "us-east-1",
    ) -> None:
        self._client_id = client_id
        self._issuer = f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}"
        self._jwks_url = f"{self._issuer}/.well-known/jwks.json"

    @lru_cache(maxsize=1)
    def _get_jwks(self) -> dict:
        response = httpx.get(self._jwks_url, timeout=10)
        response.raise_for_status()
        return response.json()

    def _signing_key(self, token: str) -> dict:
        kid = jwt.get_unverified_header(token).get("kid")
        for key in self._get_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key
        raise ValueError("Matching key not found in JWKS; token may be stale.")

    def validate(self, token: str) -> dict:
        """Decode and validate a Cognito token issued for this node's app client.

        Raises:
            ValueError: on any validation failure (bad signature, expiry, wrong
                        issuer, wrong app client, unsupported token_use).
        """
        try:
            claims = jwt.decode(
                token,
                self._signing_key(token),
                algorithms=["RS256"],
                audience=self._client_id,
                issuer=self._issuer,
            )
        except JWTError as exc:
            raise ValueError(f"Token validation failed: {exc}") from exc

        token_use = claims.get("token_use")
        if token_use not in ACCEPTED_TOKEN_USES:
            raise ValueError(f"Invalid token_use: {token_use!r}")
        if token_use == "access" and claims.get("client_id") != self._client_id:
            raise ValueError("Access token was issued to a different app client.")
        return claims

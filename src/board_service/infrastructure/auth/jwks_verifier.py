from __future__ import annotations

import asyncio

import jwt
from jwt import PyJWKClient

from board_service.application.dto.principal import Principal
from board_service.infrastructure.auth.claims import principal_from_claims

_ASYMMETRIC_ALGORITHMS = ["RS256", "ES256"]


class JWKSVerifier:
    """Verify JWTs against keys published by the identity provider."""

    def __init__(self, jwks_url: str, *, leeway: int = 0) -> None:
        # PyJWKClient caches fetched keys between calls.
        self._jwk_client = PyJWKClient(jwks_url, cache_keys=True)
        self._leeway = leeway

    async def verify(self, token: str) -> Principal:
        # Key fetch is blocking HTTP; keep it off the event loop.
        signing_key = await asyncio.to_thread(self._jwk_client.get_signing_key_from_jwt, token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=_ASYMMETRIC_ALGORITHMS,
            leeway=self._leeway,
            options={"require": ["sub"]},
        )
        return principal_from_claims(payload)

from __future__ import annotations

import jwt

from board_service.application.dto.principal import Principal
from board_service.infrastructure.auth.claims import principal_from_claims


class HS256Verifier:
    """Verify JWTs signed with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256", *, leeway: int = 0) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._leeway = leeway

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            leeway=self._leeway,
            options={"require": ["sub"]},
        )
        return principal_from_claims(payload)

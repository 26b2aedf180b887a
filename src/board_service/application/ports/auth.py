from __future__ import annotations

from typing import Protocol

from board_service.application.dto.principal import Principal


class TokenVerifier(Protocol):
    """Turns a bearer token into a Principal.

    Raises on any invalid, expired or subject-less token; callers map that
    to 401 on HTTP and to close code 4001 on the live feed.
    """

    async def verify(self, token: str) -> Principal: ...

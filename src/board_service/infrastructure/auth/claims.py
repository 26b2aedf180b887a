from __future__ import annotations

from typing import Any

from board_service.application.dto.principal import Principal
from board_service.domain.value_objects.enums import Role


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Map verified JWT claims onto a Principal. Unknown kinds fall back to USER."""
    kind_raw = payload.get("kind", payload.get("role", "user"))
    kind = Role(kind_raw) if kind_raw in Role.__members__.values() else Role.USER
    subject = payload.get("sub")
    if subject in (None, ""):
        raise ValueError("Token has no subject")
    return Principal(
        kind=kind,
        subject_id=str(subject),
        display_name=str(payload.get("name") or payload.get("username") or ""),
        roles=list(payload.get("roles", [])),
    )

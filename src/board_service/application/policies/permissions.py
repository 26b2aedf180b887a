from __future__ import annotations

from board_service.application.dto.principal import Principal
from board_service.application.exceptions import ForbiddenError, UnauthorizedError
from board_service.domain.entities.message import Message


def assert_admin(principal: Principal | None) -> Principal:
    """Role gate. Runs before any lookup so non-admins learn nothing about targets."""
    if principal is None or not principal.is_admin:
        raise ForbiddenError("Admin access required")
    return principal


def assert_author(principal: Principal, message: Message) -> None:
    """Ownership gate. Admins may only touch messages they wrote themselves."""
    if message.author_id != principal.subject_id:
        raise UnauthorizedError("Not the author of this message")

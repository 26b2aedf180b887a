from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    USER = "user"
    ADMIN = "admin"


class MessageKind(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    POLL = "poll"

    @property
    def is_attachment(self) -> bool:
        return self in (MessageKind.IMAGE, MessageKind.FILE)


class BoardEvent(StrEnum):
    MESSAGE_CREATED = "message.created"
    MESSAGE_EDITED = "message.edited"
    MESSAGE_DELETED = "message.deleted"
    POLL_CREATED = "poll.created"
    POLL_VOTED = "poll.voted"

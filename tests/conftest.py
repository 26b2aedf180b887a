"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import pytest

from board_service.application.dto.principal import Principal
from board_service.application.exceptions import ServerError, ValidationError
from board_service.domain.entities.message import Message
from board_service.domain.entities.poll import Poll, PollOption
from board_service.domain.value_objects.enums import MessageKind, Role


@pytest.fixture
def user_principal() -> Principal:
    return Principal(kind=Role.USER, subject_id="42", display_name="Viewer", roles=[])


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(kind=Role.ADMIN, subject_id="1", display_name="Alice", roles=["admin"])


@pytest.fixture
def other_admin() -> Principal:
    return Principal(kind=Role.ADMIN, subject_id="2", display_name="Bob", roles=["admin"])


def make_message(
    *,
    author_id: str = "1",
    body: str = "hello",
    kind: str = MessageKind.TEXT,
    attachment_ref: str | None = None,
    created_at: datetime | None = None,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        author_id=author_id,
        author_display_name="Alice",
        kind=kind,
        body=body,
        attachment_ref=attachment_ref,
        attachment_name="file.bin" if attachment_ref else None,
        edited=False,
        created_at=created_at or datetime.now(timezone.utc),
    )


def make_poll(question: str = "Lunch?", options: tuple[str, ...] = ("Pizza", "Sushi")) -> Poll:
    return Poll(
        id=uuid.uuid4(),
        question=question,
        options=tuple(PollOption(text=o) for o in options),
        created_at=datetime.now(timezone.utc),
    )


@dataclass
class FakeMessageReader:
    _store: dict[UUID, Message] = field(default_factory=dict)

    async def get(self, message_id: UUID, *, for_update: bool = False) -> Message | None:
        return self._store.get(message_id)

    async def list_ordered(self) -> list[Message]:
        return sorted(self._store.values(), key=lambda m: (m.created_at, m.seq or 0))


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    _seq: int = 0

    async def insert(self, message: Message) -> Message:
        if not message.body and message.attachment_ref is None:
            raise ValidationError("Message needs a body or an attachment")
        self._seq += 1
        stored = replace(message, seq=self._seq)
        self._reader._store[stored.id] = stored
        return stored

    async def update(self, message_id: UUID, **changes: Any) -> Message | None:
        rejected = set(changes) - {"body", "edited"}
        if rejected:
            raise ValidationError(f"Fields cannot be changed: {', '.join(sorted(rejected))}")
        current = self._reader._store.get(message_id)
        if current is None:
            return None
        updated = replace(current, **changes)
        self._reader._store[message_id] = updated
        return updated

    async def delete(self, message_id: UUID) -> bool:
        return self._reader._store.pop(message_id, None) is not None


@dataclass
class FakePollReader:
    _store: dict[UUID, Poll] = field(default_factory=dict)

    async def get(self, poll_id: UUID) -> Poll | None:
        return self._store.get(poll_id)

    async def list_ordered(self) -> list[Poll]:
        return sorted(self._store.values(), key=lambda p: (p.created_at, p.seq or 0))


@dataclass
class FakePollWriter:
    _reader: FakePollReader
    _seq: int = 0

    async def insert(self, poll: Poll) -> Poll:
        self._seq += 1
        stored = replace(poll, seq=self._seq)
        self._reader._store[stored.id] = stored
        return stored

    async def increment_vote(self, poll_id: UUID, option_index: int) -> bool:
        poll = self._reader._store.get(poll_id)
        if poll is None or not 0 <= option_index < len(poll.options):
            return False
        options = list(poll.options)
        options[option_index] = replace(options[option_index], votes=options[option_index].votes + 1)
        self._reader._store[poll_id] = replace(poll, options=tuple(options))
        return True


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    polls: FakePollReader = field(default_factory=FakePollReader)
    polls_w: FakePollWriter | None = None
    fail_commit: bool = False
    _committed: bool = False
    _rolled_back: bool = False

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.polls_w is None:
            self.polls_w = FakePollWriter(self.polls)

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        if self.fail_commit:
            raise ServerError("Storage unavailable")
        self._committed = True

    async def rollback(self) -> None:
        self._rolled_back = True

    async def __aenter__(self) -> FakeUoW:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            await self.rollback()


@dataclass
class RecordingPublisher:
    """Collects published events and whether the UoW had committed at that point."""
    uow: FakeUoW | None = None
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    committed_at_publish: list[bool] = field(default_factory=list)

    async def publish(self, event_type: str, data: dict[str, Any]) -> None:
        self.events.append((event_type, data))
        if self.uow is not None:
            self.committed_at_publish.append(self.uow._committed)

    @property
    def types(self) -> list[str]:
        return [t for t, _ in self.events]


@dataclass
class FakeStorage:
    saved: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    fail_delete: bool = False

    async def save(self, data: bytes, filename: str) -> str:
        ref = f"/uploads/{uuid.uuid4().hex}-{filename}"
        self.saved[ref] = data
        return ref

    async def delete(self, ref: str) -> None:
        if self.fail_delete:
            raise OSError("disk gone")
        self.deleted.append(ref)
        self.saved.pop(ref, None)


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()


@pytest.fixture
def publisher(uow: FakeUoW) -> RecordingPublisher:
    return RecordingPublisher(uow)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()

from __future__ import annotations

import uuid

import pytest

from board_service.application.exceptions import ForbiddenError, NotFoundError, ValidationError
from board_service.domain.value_objects.enums import BoardEvent
from board_service.services import poll_service
from tests.conftest import make_poll


@pytest.mark.asyncio
async def test_create_poll_starts_with_zero_votes(admin_principal, uow, publisher):
    poll = await poll_service.create_poll(
        admin_principal, " Lunch? ", ["Pizza", " Sushi "], uow, publisher,
    )

    assert poll.question == "Lunch?"
    assert [o.text for o in poll.options] == ["Pizza", "Sushi"]
    assert poll.votes == [0, 0]
    assert await poll_service.list_polls(uow) == [poll]
    assert publisher.types == [BoardEvent.POLL_CREATED]
    assert publisher.committed_at_publish == [True]


@pytest.mark.asyncio
async def test_create_poll_forbidden_for_user(user_principal, uow, publisher):
    with pytest.raises(ForbiddenError):
        await poll_service.create_poll(user_principal, "Lunch?", ["Pizza", "Sushi"], uow, publisher)

    assert uow.polls._store == {}
    assert publisher.events == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("question", "options"),
    [
        ("", ["Pizza", "Sushi"]),
        ("Lunch?", ["Pizza"]),
        ("Lunch?", []),
        ("Lunch?", ["Pizza", "  "]),
    ],
)
async def test_create_poll_rejects_bad_content(question, options, admin_principal, uow, publisher):
    with pytest.raises(ValidationError):
        await poll_service.create_poll(admin_principal, question, options, uow, publisher)


@pytest.mark.asyncio
async def test_vote_sequence(admin_principal, uow, publisher):
    poll = await poll_service.create_poll(admin_principal, "Lunch?", ["Pizza", "Sushi"], uow, publisher)

    await poll_service.vote(poll.id, 1, uow, publisher)
    await poll_service.vote(poll.id, 1, uow, publisher)
    result = await poll_service.vote(poll.id, 0, uow, publisher)

    assert result.votes == [1, 2]
    assert (await uow.polls.get(poll.id)).votes == [1, 2]


@pytest.mark.asyncio
async def test_vote_publishes_updated_counts(uow, publisher):
    poll = make_poll()
    uow.polls._store[poll.id] = poll

    await poll_service.vote(poll.id, 0, uow, publisher)

    event_type, data = publisher.events[-1]
    assert event_type == BoardEvent.POLL_VOTED
    assert data["poll"]["options"] == [{"text": "Pizza", "votes": 1}, {"text": "Sushi", "votes": 0}]


@pytest.mark.asyncio
@pytest.mark.parametrize("index", [2, -1, None, True])
async def test_vote_invalid_index_leaves_counts(index, uow, publisher):
    poll = make_poll()
    uow.polls._store[poll.id] = poll

    with pytest.raises(ValidationError):
        await poll_service.vote(poll.id, index, uow, publisher)

    assert (await uow.polls.get(poll.id)).votes == [0, 0]
    assert publisher.events == []


@pytest.mark.asyncio
async def test_vote_unknown_poll(uow, publisher):
    with pytest.raises(NotFoundError):
        await poll_service.vote(uuid.uuid4(), 0, uow, publisher)

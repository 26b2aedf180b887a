from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from board_service.api.deps import CurrentPrincipal, PublisherDep, UoWDep
from board_service.api.v1.schemas.poll import CreatePollRequest, PollResponse, VoteRequest
from board_service.services import poll_service

router = APIRouter(prefix="/api/v1/board/polls", tags=["polls"])


@router.get("", response_model=list[PollResponse])
async def list_polls(uow: UoWDep) -> list[PollResponse]:
    polls = await poll_service.list_polls(uow)
    return [PollResponse.model_validate(p, from_attributes=True) for p in polls]


@router.post("", response_model=PollResponse, status_code=201)
async def create_poll(
    body: CreatePollRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    publisher: PublisherDep,
) -> PollResponse:
    poll = await poll_service.create_poll(principal, body.question, body.options, uow, publisher)
    return PollResponse.model_validate(poll, from_attributes=True)


@router.post("/{poll_id}/vote", response_model=PollResponse)
async def vote(
    poll_id: UUID,
    body: VoteRequest,
    uow: UoWDep,
    publisher: PublisherDep,
) -> PollResponse:
    poll = await poll_service.vote(poll_id, body.option_index, uow, publisher)
    return PollResponse.model_validate(poll, from_attributes=True)

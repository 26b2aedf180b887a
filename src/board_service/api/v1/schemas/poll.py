from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field


class CreatePollRequest(BaseModel):
    question: str = ""
    options: list[str] = []


class VoteRequest(BaseModel):
    # Optional so a missing index reaches the service and fails as a ValidationError.
    option_index: int | None = Field(
        None,
        validation_alias=AliasChoices("option_index", "optionIndex"),
    )


class PollOptionResponse(BaseModel):
    text: str
    votes: int

    model_config = {"from_attributes": True}


class PollResponse(BaseModel):
    id: UUID
    question: str
    options: list[PollOptionResponse]
    created_at: datetime

    model_config = {"from_attributes": True}

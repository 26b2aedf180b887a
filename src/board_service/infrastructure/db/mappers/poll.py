from __future__ import annotations

from collections.abc import Iterable

from board_service.domain.entities.poll import Poll, PollOption
from board_service.infrastructure.db.mappers._time import as_utc
from board_service.infrastructure.db.models.poll import PollModel, PollOptionModel


def model_to_entity(model: PollModel, options: Iterable[PollOptionModel]) -> Poll:
    return Poll(
        id=model.id,
        question=model.question,
        options=tuple(
            PollOption(text=o.text, votes=o.votes)
            for o in sorted(options, key=lambda o: o.position)
        ),
        created_at=as_utc(model.created_at),
        seq=model.seq,
    )


def entity_to_model(entity: Poll) -> PollModel:
    return PollModel(
        id=entity.id,
        question=entity.question,
        created_at=entity.created_at,
        options=[
            PollOptionModel(position=i, text=o.text, votes=o.votes)
            for i, o in enumerate(entity.options)
        ],
    )

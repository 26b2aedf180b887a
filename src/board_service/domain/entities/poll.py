from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class PollOption:
    text: str
    votes: int = 0


@dataclass(frozen=True, slots=True)
class Poll:
    id: UUID
    question: str
    options: tuple[PollOption, ...]
    created_at: datetime
    seq: int | None = None

    @property
    def votes(self) -> list[int]:
        return [o.votes for o in self.options]

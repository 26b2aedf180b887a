from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    author_id: str
    author_display_name: str
    kind: str
    body: str
    attachment_ref: str | None
    attachment_name: str | None
    edited: bool
    created_at: datetime
    # Assigned by the store on insert; tie-break for equal created_at.
    seq: int | None = None

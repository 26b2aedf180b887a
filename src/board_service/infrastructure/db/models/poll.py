from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from board_service.infrastructure.db.base import Base, SequenceKey


class PollModel(Base):
    __tablename__ = "polls"

    seq: Mapped[int] = mapped_column(SequenceKey, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        unique=True,
        default=uuid.uuid4,
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    options: Mapped[list[PollOptionModel]] = relationship(
        back_populates="poll",
        order_by="PollOptionModel.position",
        lazy="raise",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_polls_timeline", "created_at", "seq"),
    )


class PollOptionModel(Base):
    __tablename__ = "poll_options"

    id: Mapped[int] = mapped_column(SequenceKey, primary_key=True, autoincrement=True)
    poll_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("polls.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(String(500), nullable=False)
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    poll: Mapped[PollModel] = relationship(back_populates="options")

    __table_args__ = (
        UniqueConstraint("poll_id", "position", name="uq_poll_option_position"),
    )

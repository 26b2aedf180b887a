"""Import all models so Base.metadata knows every table."""
from board_service.infrastructure.db.models.message import MessageModel
from board_service.infrastructure.db.models.poll import PollModel, PollOptionModel

__all__ = [
    "MessageModel",
    "PollModel",
    "PollOptionModel",
]

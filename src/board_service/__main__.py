"""Entrypoint: python -m board_service"""
from __future__ import annotations

import logging

import uvicorn

from board_service.api.middleware.correlation_id import CorrelationIdFilter
from board_service.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s]: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # Attach to handlers, not loggers, so records from every library get a request_id.
    for handler in logging.getLogger().handlers:
        handler.addFilter(CorrelationIdFilter())


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "board_service.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        # Keep the root handlers configured above.
        log_config=None,
    )


if __name__ == "__main__":
    main()

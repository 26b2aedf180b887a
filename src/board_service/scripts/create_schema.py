"""Create board tables in the configured database (idempotent)."""
from __future__ import annotations

import asyncio
import logging

from board_service.infrastructure.db.base import Base
from board_service.infrastructure.db import models  # noqa: F401  registers tables
from board_service.infrastructure.db.session import engine

logger = logging.getLogger(__name__)


async def create_schema() -> None:
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
    finally:
        await engine.dispose()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_schema())


if __name__ == "__main__":
    main()

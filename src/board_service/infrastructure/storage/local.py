"""Attachment storage on the local filesystem, served back under a URL prefix."""
from __future__ import annotations

import asyncio
import logging
import re
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_name(filename: str) -> str:
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


class LocalAttachmentStorage:
    """Implements application.ports.storage.AttachmentStorage."""

    def __init__(self, base_dir: str | Path, url_prefix: str = "/uploads") -> None:
        self._base_dir = Path(base_dir)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    async def save(self, data: bytes, filename: str) -> str:
        stored_name = f"{uuid.uuid4().hex}-{_safe_name(filename)}"
        path = self._base_dir / stored_name
        await asyncio.to_thread(self._base_dir.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_bytes, data)
        logger.debug("Stored attachment %s (%d bytes)", stored_name, len(data))
        return f"{self._url_prefix}/{stored_name}"

    async def delete(self, ref: str) -> None:
        path = self._resolve(ref)
        if path is None:
            logger.warning("Refusing to delete attachment outside storage: %s", ref)
            return
        await asyncio.to_thread(path.unlink, missing_ok=True)
        logger.debug("Released attachment %s", path.name)

    def _resolve(self, ref: str) -> Path | None:
        prefix = f"{self._url_prefix}/"
        if not ref.startswith(prefix):
            return None
        name = ref[len(prefix):]
        if not name or name.startswith(".") or _UNSAFE_CHARS.search(name):
            return None
        return self._base_dir / name

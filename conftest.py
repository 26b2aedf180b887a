"""Root conftest: pins the test environment before board_service reads settings."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path


def _read_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not path.exists():
        return values
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if line and not line.startswith("#"):
            key, _, value = line.partition("=")
            values[key.strip()] = value.strip()
    return values


for _key, _value in _read_env_file(Path(__file__).resolve().parent / ".env.test").items():
    os.environ.setdefault(_key, _value)

# Uploads made by tests never land in the working tree.
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="board-uploads-"))

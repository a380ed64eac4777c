"""Key-value blob storage backing the workout log."""

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageUnavailable(OSError):
    """Raised when the persisted read/write channel fails."""


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def _default_storage_dir() -> Path:
    return Path.home() / ".mapty"


def _slugify(key: str) -> str:
    s = re.sub(r"[^a-zA-Z0-9]+", "-", key.strip().lower()).strip("-")
    return s or "default"


class FileStorage:
    """One UTF-8 file per key under ``base_dir``."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or _default_storage_dir()

    def path_for(self, key: str) -> Path:
        return self.base_dir / f"{_slugify(key)}.json"

    def get(self, key: str) -> str | None:
        target = self.path_for(key)
        if not target.exists():
            return None
        try:
            return target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageUnavailable(f"Cannot read {target}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        target = self.path_for(key)
        tmp = target.with_suffix(".json.tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, target)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageUnavailable(f"Cannot write {target}: {exc}") from exc
        logger.debug("Wrote %d chars to %s", len(value), target)

    def remove(self, key: str) -> None:
        target = self.path_for(key)
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot remove {target}: {exc}") from exc


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)

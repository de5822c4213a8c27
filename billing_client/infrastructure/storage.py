# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Key-value stores backing the persisted session."""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path

from billing_client.domain.session import SessionStorage
from billing_client.shared.logging import logger


class MemorySessionStorage(SessionStorage):
    """Process-local store; lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileSessionStorage(SessionStorage):
    """Flat JSON object on disk, rewritten atomically on each change.

    A missing, unreadable or corrupt file reads as empty.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = str(value)
            self._write(data)
        logger.debug(f"storage: set key={key} path={self._path}")

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key not in data:
                return
            data.pop(key)
            self._write(data)
        logger.debug(f"storage: removed key={key} path={self._path}")

    def _load(self) -> dict[str, object]:
        try:
            with open(self._path, encoding="utf-8") as f:
                loaded = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning(f"storage: unreadable file treated as empty path={self._path}")
            return {}
        if not isinstance(loaded, dict):
            logger.warning(f"storage: unexpected content treated as empty path={self._path}")
            return {}
        return loaded

    def _write(self, data: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=0)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self._path)


__all__ = ["JsonFileSessionStorage", "MemorySessionStorage"]

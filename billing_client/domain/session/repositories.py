# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol


class SessionStorage(Protocol):
    """String key-value store that survives process restarts."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class Navigator(Protocol):
    def push(self, route: str) -> None: ...

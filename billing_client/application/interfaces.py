# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Deferred callbacks on the UI event loop."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


Clock = Callable[[], float]


class AuthPort(Protocol):
    async def login(self, credentials: Mapping[str, Any]) -> Any: ...

    async def signup(self, profile: Mapping[str, Any]) -> Any: ...

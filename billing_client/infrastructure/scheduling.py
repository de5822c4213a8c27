# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from billing_client.application.interfaces import Scheduler
from billing_client.shared.logging import logger


class AsyncioScheduler(Scheduler):
    """Timers on the asyncio loop that drives the UI."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
            logger.debug("scheduler: bound to running loop")
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return self._resolve_loop().call_later(max(0.0, delay), callback)

    def time(self) -> float:
        """Loop clock, same base as the timers above."""

        return self._resolve_loop().time()


__all__ = ["AsyncioScheduler"]

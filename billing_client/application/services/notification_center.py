# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Ordered queue of transient messages with independent countdowns."""

from __future__ import annotations

import asyncio
import itertools
import threading
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import replace
from functools import partial

from billing_client.application.interfaces import Clock, Scheduler, TimerHandle
from billing_client.domain.notifications import Notification, NotificationKind
from billing_client.shared.config import NotificationConfig, load_config
from billing_client.shared.logging import logger

Listener = Callable[[tuple[Notification, ...]], None]


class NotificationCenter:
    def __init__(
        self,
        *,
        scheduler: Scheduler,
        clock: Clock = time.monotonic,
        config: NotificationConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._config = config or load_config().notifications
        self._sleep = sleep
        self._ids = itertools.count(1)
        self._entries: dict[int, Notification] = {}
        self._timers: dict[int, list[TimerHandle]] = {}
        self._listeners: list[Listener] = []
        self._guard = threading.RLock()

    def post(
        self,
        message: str,
        kind: NotificationKind | str = NotificationKind.INFO,
        duration_ms: int | None = None,
    ) -> int:
        kind = NotificationKind.parse(kind)
        if duration_ms is None:
            duration_ms = self._config.default_durations()[kind.value]

        with self._guard:
            notification = Notification(
                id=next(self._ids),
                message=str(message),
                kind=kind,
                duration_ms=duration_ms,
                created_at=self._clock(),
            )
            # nothing is queued unless its timer could be scheduled
            handles: list[TimerHandle] = []
            if not notification.persistent:
                handles.append(
                    self._scheduler.call_later(
                        duration_ms / 1000.0, partial(self._expire, notification.id)
                    )
                )
            self._entries[notification.id] = notification
            if handles:
                self._timers[notification.id] = handles

        logger.debug(
            f"toast: posted id={notification.id} kind={kind.value} duration_ms={duration_ms}"
        )
        self._emit()
        return notification.id

    def success(self, message: str, duration_ms: int | None = None) -> int:
        return self.post(message, NotificationKind.SUCCESS, duration_ms)

    def error(self, message: str, duration_ms: int | None = None) -> int:
        return self.post(message, NotificationKind.ERROR, duration_ms)

    def info(self, message: str, duration_ms: int | None = None) -> int:
        return self.post(message, NotificationKind.INFO, duration_ms)

    def warning(self, message: str, duration_ms: int | None = None) -> int:
        return self.post(message, NotificationKind.WARNING, duration_ms)

    def dismiss(self, notification_id: int) -> bool:
        """Remove the entry now. Returns False if it was already gone."""

        return self._remove(notification_id, reason="dismissed")

    def close(self, notification_id: int) -> bool:
        """Start the exit transition; the entry is removed after the exit delay."""

        with self._guard:
            current = self._entries.get(notification_id)
            if current is None or current.exiting:
                return False
            exit_ms = self._config.exit_ms
            if exit_ms > 0:
                self._entries[notification_id] = replace(current, exiting=True)
                handle = self._scheduler.call_later(
                    exit_ms / 1000.0,
                    partial(self._remove, notification_id, reason="closed"),
                )
                self._timers.setdefault(notification_id, []).append(handle)

        if exit_ms == 0:
            return self._remove(notification_id, reason="closed")
        self._emit()
        return True

    def clear(self) -> None:
        with self._guard:
            ids = list(self._entries)
        for notification_id in ids:
            self._remove(notification_id, reason="cleared", emit=False)
        self._emit()

    def get(self, notification_id: int) -> Notification | None:
        self._prune()
        with self._guard:
            return self._entries.get(notification_id)

    def list(self) -> tuple[Notification, ...]:
        self._prune()
        return self._snapshot()

    def __len__(self) -> int:
        return len(self.list())

    def remaining_ratio(self, notification_id: int) -> float | None:
        notification = self.get(notification_id)
        if notification is None:
            return None
        return notification.remaining_ratio(self._clock())

    async def countdown(
        self, notification_id: int, *, tick_ms: int | None = None
    ) -> AsyncIterator[float]:
        """Yield the remaining ratio every tick until the entry goes away.

        The last value is 0.0 when the entry expires; a dismissed entry just
        stops the stream.
        """

        interval = (tick_ms or self._config.tick_ms) / 1000.0
        last: Notification | None = None
        while True:
            with self._guard:
                notification = self._entries.get(notification_id)
            if notification is None:
                # the deadline timer may have removed it between two ticks
                if last is not None and last.is_expired(self._clock()):
                    yield 0.0
                return
            last = notification
            now = self._clock()
            ratio = notification.remaining_ratio(now)
            yield ratio
            if ratio <= 0.0:
                self._remove(notification_id, reason="expired")
                return
            delay = interval
            if notification.deadline is not None:
                delay = min(interval, max(0.0, notification.deadline - now))
            await self._sleep(delay)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._guard:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._guard:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _expire(self, notification_id: int) -> None:
        self._remove(notification_id, reason="expired")

    def _remove(self, notification_id: int, *, reason: str, emit: bool = True) -> bool:
        with self._guard:
            removed = self._entries.pop(notification_id, None)
            handles = self._timers.pop(notification_id, [])
        for handle in handles:
            handle.cancel()
        if removed is None:
            return False
        logger.debug(f"toast: removed id={notification_id} reason={reason}")
        if emit:
            self._emit()
        return True

    def _prune(self) -> None:
        # late timers must not keep an entry visible past its deadline
        now = self._clock()
        with self._guard:
            expired = [nid for nid, entry in self._entries.items() if entry.is_expired(now)]
        for notification_id in expired:
            self._remove(notification_id, reason="expired")

    def _snapshot(self) -> tuple[Notification, ...]:
        with self._guard:
            return tuple(self._entries.values())

    def _emit(self) -> None:
        with self._guard:
            listeners = list(self._listeners)
        if not listeners:
            return
        snapshot = self._snapshot()
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("toast: listener failed")


__all__ = ["Listener", "NotificationCenter"]

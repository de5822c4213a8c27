from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from billing_client.shared.config import NotificationConfig, SessionConfig


class FakeClock:
    """Monotonic clock driven by hand, in whole milliseconds."""

    def __init__(self, start_ms: int = 10_000) -> None:
        self.ms = start_ms

    def __call__(self) -> float:
        return self.ms / 1000.0


class _Handle:
    def __init__(self, due_ms: int, callback: Callable[[], Any]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    def __init__(self, clock: FakeClock) -> None:
        self._clock = clock
        self._handles: list[_Handle] = []

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _Handle:
        handle = _Handle(self._clock.ms + round(delay * 1000), callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> list[_Handle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, ms: int) -> None:
        target = self._clock.ms + ms
        while True:
            due = sorted(
                (h for h in self._handles if not h.cancelled and h.due_ms <= target),
                key=lambda h: h.due_ms,
            )
            if not due:
                break
            handle = due[0]
            self._handles.remove(handle)
            self._clock.ms = handle.due_ms
            handle.callback()
        self._clock.ms = target


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler(clock: FakeClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture()
def notification_config() -> NotificationConfig:
    return NotificationConfig(
        success_ms=3000, error_ms=5000, info_ms=3000, warning_ms=4000, tick_ms=50, exit_ms=300
    )


@pytest.fixture()
def session_config(tmp_path) -> SessionConfig:
    return SessionConfig(
        storage_file=tmp_path / "session.json",
        preferences_file=tmp_path / "preferences.json",
        token_key="token",
        user_key="user",
        login_route="/login",
        home_route="/dashboard",
    )

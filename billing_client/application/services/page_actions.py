# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Reporting contract shared by every list, detail and form view."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from billing_client.application.services.notification_center import NotificationCenter
from billing_client.application.services.session_manager import SessionManager
from billing_client.domain.session import Navigator, SessionStorage, ViewGate
from billing_client.shared.errors import RequestFailed
from billing_client.shared.logging import logger

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class ActionOutcome(Generic[T]):
    ok: bool
    value: T | None = None
    error: RequestFailed | None = None
    gate: ViewGate = ViewGate.PROCEED

    @property
    def skipped(self) -> bool:
        return self.gate is not ViewGate.PROCEED


class PageActions:
    def __init__(
        self,
        *,
        session: SessionManager,
        notifications: NotificationCenter,
        navigator: Navigator,
        preferences: SessionStorage,
    ) -> None:
        self._session = session
        self._notifications = notifications
        self._navigator = navigator
        self._preferences = preferences

    async def mutate(
        self,
        action: Callable[[], Awaitable[T]],
        *,
        success: str,
        failure: str | None = None,
        required_role: str | None = None,
    ) -> ActionOutcome[T]:
        gate = self._session.enforce(required_role)
        if gate is not ViewGate.PROCEED:
            return ActionOutcome(ok=False, gate=gate)
        try:
            value = await action()
        except RequestFailed as exc:
            self._report(exc, failure)
            return ActionOutcome(ok=False, error=exc)
        self._notifications.success(success)
        return ActionOutcome(ok=True, value=value)

    async def load_detail(
        self,
        fetch: Callable[[], Awaitable[T]],
        *,
        fallback_route: str,
        failure: str | None = None,
        required_role: str | None = None,
    ) -> ActionOutcome[T]:
        gate = self._session.enforce(required_role)
        if gate is not ViewGate.PROCEED:
            return ActionOutcome(ok=False, gate=gate)
        try:
            value = await fetch()
        except RequestFailed as exc:
            if not self._report(exc, failure):
                self._navigator.push(fallback_route)
            return ActionOutcome(ok=False, error=exc)
        return ActionOutcome(ok=True, value=value)

    async def load_list(
        self,
        fetch: Callable[[], Awaitable[Any]],
        *,
        key: str | None = None,
        failure: str | None = None,
        required_role: str | None = None,
    ) -> ActionOutcome[list[Any]]:
        gate = self._session.enforce(required_role)
        if gate is not ViewGate.PROCEED:
            return ActionOutcome(ok=False, value=[], gate=gate)
        try:
            data = await fetch()
        except RequestFailed as exc:
            self._report(exc, failure)
            return ActionOutcome(ok=False, value=[], error=exc)
        if key is not None and isinstance(data, dict):
            data = data.get(key)
        return ActionOutcome(ok=True, value=list(data or []))

    def show_tip_once(self, key: str, message: str, duration_ms: int = 6000) -> bool:
        if self._preferences.get(key):
            return False
        self._notifications.info(message, duration_ms)
        self._preferences.set(key, "true")
        return True

    def _report(self, exc: RequestFailed, failure: str | None) -> bool:
        logger.warning(f"page: request failed status={exc.status} message={exc.message}")
        self._notifications.error(failure or exc.message)
        return self._session.handle_request_failure(exc)


__all__ = ["ActionOutcome", "PageActions"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from billing_client.domain.session import Navigator
from billing_client.shared.logging import logger

RouteListener = Callable[[str], None]


class MemoryNavigator(Navigator):
    """Route history for an embedding view layer; listeners render the new route."""

    def __init__(self, initial: str | None = None) -> None:
        self._history: list[str] = [initial] if initial else []
        self._listeners: list[RouteListener] = []

    @property
    def current(self) -> str | None:
        return self._history[-1] if self._history else None

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    def push(self, route: str) -> None:
        self._history.append(route)
        logger.debug(f"nav: push route={route}")
        for listener in list(self._listeners):
            try:
                listener(route)
            except Exception:
                logger.exception(f"nav: listener failed route={route}")

    def subscribe(self, listener: RouteListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe


__all__ = ["MemoryNavigator", "RouteListener"]

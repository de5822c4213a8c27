# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..exceptions import InvariantViolation

# float noise when converting monotonic seconds back to milliseconds
_EPSILON_MS = 1e-6


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"

    @classmethod
    def parse(cls, value: NotificationKind | str) -> NotificationKind:
        try:
            return cls(value)
        except ValueError:
            raise InvariantViolation(f"unknown notification kind {value!r}", field="kind") from None


@dataclass(slots=True, frozen=True)
class Notification:
    """Transient message shown on top of the current view.

    ``created_at`` is a monotonic timestamp in seconds; ``duration_ms == 0``
    keeps the entry until it is dismissed.
    """

    id: int
    message: str
    kind: NotificationKind
    duration_ms: int
    created_at: float
    exiting: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.duration_ms, bool) or not isinstance(self.duration_ms, int):
            raise InvariantViolation("duration must be an integer", field="duration_ms")
        if self.duration_ms < 0:
            raise InvariantViolation("duration must be >= 0", field="duration_ms")
        object.__setattr__(self, "kind", NotificationKind.parse(self.kind))

    @property
    def persistent(self) -> bool:
        return self.duration_ms == 0

    @property
    def deadline(self) -> float | None:
        if self.persistent:
            return None
        return self.created_at + self.duration_ms / 1000.0

    def elapsed_ms(self, now: float) -> float:
        return max(0.0, (now - self.created_at) * 1000.0)

    def is_expired(self, now: float) -> bool:
        if self.persistent:
            return False
        return self.elapsed_ms(now) + _EPSILON_MS >= self.duration_ms

    def remaining_ratio(self, now: float) -> float:
        """Fraction of the lifetime left, 1.0 at creation and 0.0 at the deadline."""

        if self.persistent:
            return 1.0
        if self.is_expired(now):
            return 0.0
        return max(0.0, min(1.0, 1.0 - self.elapsed_ms(now) / self.duration_ms))

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import DomainError, InvariantViolation
from .notifications import Notification, NotificationKind
from .session import Navigator, Session, SessionStatus, SessionStorage, UserProfile, ViewGate

__all__ = [
    "DomainError",
    "InvariantViolation",
    "Navigator",
    "Notification",
    "NotificationKind",
    "Session",
    "SessionStatus",
    "SessionStorage",
    "UserProfile",
    "ViewGate",
]

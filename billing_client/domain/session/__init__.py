# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Session, SessionStatus, UserProfile, ViewGate
from .repositories import Navigator, SessionStorage

__all__ = [
    "Navigator",
    "Session",
    "SessionStatus",
    "SessionStorage",
    "UserProfile",
    "ViewGate",
]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Notification, NotificationKind

__all__ = ["Notification", "NotificationKind"]

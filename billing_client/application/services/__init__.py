# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .notification_center import NotificationCenter
from .page_actions import ActionOutcome, PageActions
from .session_manager import SessionManager

__all__ = ["ActionOutcome", "NotificationCenter", "PageActions", "SessionManager"]

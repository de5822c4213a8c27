# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import ApiConfig, AppConfig, NotificationConfig, SessionConfig, load_config

__all__ = ["ApiConfig", "AppConfig", "NotificationConfig", "SessionConfig", "load_config"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import AuthPort, Clock, Scheduler, TimerHandle

__all__ = [
    "AuthPort",
    "Clock",
    "Scheduler",
    "TimerHandle",
]

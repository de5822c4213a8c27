# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from billing_client.shared.errors.base import ValidationError

DomainError = ValidationError


class InvariantViolationError(ValidationError):
    """Entity constructed with values the client must never hold."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        text = f"{field}: {message}" if field else message
        super().__init__(text, context={"field": field} if field else None)
        self.field = field


InvariantViolation = InvariantViolationError

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

DEFAULT_ERROR_MESSAGE = "Something went wrong"


@dataclass(slots=True)
class AppError(Exception):
    code: str
    message: str = DEFAULT_ERROR_MESSAGE
    status: int | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.status is not None:
            payload["status"] = self.status
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def _message_from(body: Any) -> str | None:
    if isinstance(body, Mapping):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class RequestFailed(AppError):
    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="request_failed",
            message=message or DEFAULT_ERROR_MESSAGE,
            status=status,
            context=context,
        )

    @classmethod
    def from_response(cls, status: int, body: Any) -> RequestFailed:
        return cls(_message_from(body), status=status)

    @property
    def is_auth_rejection(self) -> bool:
        return self.status == HTTPStatus.UNAUTHORIZED

    @property
    def is_not_found(self) -> bool:
        return self.status == HTTPStatus.NOT_FOUND


class AuthenticationFailed(AppError):
    def __init__(
        self,
        message: str | None = None,
        *,
        status: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="authentication_failed",
            message=message or DEFAULT_ERROR_MESSAGE,
            status=status,
            context=context,
        )

    @classmethod
    def from_request_failure(cls, exc: RequestFailed) -> AuthenticationFailed:
        return cls(exc.message, status=exc.status, context=exc.context)


class MalformedPersistedSession(AppError):
    def __init__(self, reason: str, *, key: str | None = None) -> None:
        super().__init__(
            code="malformed_persisted_session",
            message=reason,
            context={"key": key} if key else None,
        )


class ValidationError(AppError):
    def __init__(
        self,
        message: str = "Invalid input",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="validation_error",
            message=message,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )

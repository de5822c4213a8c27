# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Identity held by the running client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..exceptions import InvariantViolation


class SessionStatus(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class ViewGate(str, Enum):
    """What a protected view should do for the current session."""

    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_HOME = "redirect_home"
    PROCEED = "proceed"


@dataclass(slots=True, frozen=True)
class UserProfile:
    """Profile record returned by the auth endpoints.

    ``attributes`` keeps the server payload verbatim so that it round-trips
    through persisted storage without loss.
    """

    id: str | None
    name: str | None
    email: str | None
    role: str | None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Any) -> UserProfile:
        if not isinstance(data, Mapping) or not data:
            raise InvariantViolation("profile must be a non-empty mapping", field="user")
        attributes = {key: value for key, value in data.items() if key != "token"}
        if not attributes:
            raise InvariantViolation("profile must be a non-empty mapping", field="user")
        raw_id = attributes.get("_id", attributes.get("id"))
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            name=_optional_str(attributes.get("name")),
            email=_optional_str(attributes.get("email")),
            role=_optional_str(attributes.get("role")),
            attributes=attributes,
        )

    def has_role(self, role: str) -> bool:
        return self.role == role

    def to_dict(self) -> dict[str, Any]:
        return dict(self.attributes)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(slots=True, frozen=True)
class Session:
    status: SessionStatus
    token: str | None = None
    user: UserProfile | None = None

    def __post_init__(self) -> None:
        complete = bool(self.token) and self.user is not None
        if self.status is SessionStatus.AUTHENTICATED and not complete:
            raise InvariantViolation(
                "authenticated session requires token and user", field="status"
            )
        if self.status is not SessionStatus.AUTHENTICATED and (self.token or self.user):
            raise InvariantViolation(
                "only an authenticated session may hold credentials", field="status"
            )

    @classmethod
    def unknown(cls) -> Session:
        return cls(status=SessionStatus.UNKNOWN)

    @classmethod
    def anonymous(cls) -> Session:
        return cls(status=SessionStatus.ANONYMOUS)

    @classmethod
    def authenticated(cls, token: str, user: UserProfile) -> Session:
        return cls(status=SessionStatus.AUTHENTICATED, token=token, user=user)

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

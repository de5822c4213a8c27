from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

MIN_PASSWORD_LENGTH = 6


class LoginRequestDTO(BaseModel):
    email: str = ""
    password: str = ""

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def _require_credentials(self) -> LoginRequestDTO:
        if not self.email.strip() or not self.password:
            raise ValueError("Email and password are required")
        return self


class SignupRequestDTO(BaseModel):
    name: str = Field("", max_length=128)
    email: str = ""
    password: str = ""
    confirm_password: str | None = Field(None, alias="confirmPassword")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="after")
    def _check_password(self) -> SignupRequestDTO:
        if not self.name.strip() or not self.email.strip():
            raise ValueError("Name and email are required")
        if self.confirm_password is not None and self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return self

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude={"confirm_password"}, exclude_none=True)


class AuthResponseDTO(BaseModel):
    token: str = Field(min_length=1)

    model_config = ConfigDict(extra="ignore")

    @staticmethod
    def profile_from(data: Mapping[str, Any]) -> dict[str, Any]:
        """Profile part of a login/signup response: a nested ``user`` or the rest of the body."""

        nested = data.get("user")
        if isinstance(nested, Mapping) and nested:
            return dict(nested)
        return {key: value for key, value in data.items() if key != "token"}

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
                "message": error.get("msg", ""),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def first_error_message(exc: PydanticValidationError) -> str:
    """Human-readable text of the first validation failure."""

    for error in exc.errors():
        message = str(error.get("msg") or "")
        # "Value error, <text>" is how pydantic wraps ValueError raised in validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if message:
            return message
    return "Invalid input"


__all__ = [
    "first_error_message",
    "format_pydantic_errors",
]

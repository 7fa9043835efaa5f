"""Translate pydantic validation errors into field-naming messages."""

from __future__ import annotations

from pydantic import ValidationError

from chuk_mcp_piano.constants import ErrorMessages


def describe_validation_error(error: ValidationError, document: str) -> str:
    """
    Describe the first problem in a validation error.

    Field errors quote the offending field path ('events.1.note');
    document-level errors (wrong shape, broken invariants) use the
    validator's own message.
    """
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = first["msg"].removeprefix("Value error, ")

    if not location:
        if first["type"] == "model_type":
            return f"{document} must be an object"
        return message

    return f"{ErrorMessages.INVALID_FIELD.format(field=location)}: {message}"

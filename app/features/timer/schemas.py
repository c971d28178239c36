"""Request and response schemas for the timer API"""

from typing import List

from pydantic import BaseModel


class FieldError(BaseModel):
    """A single validation failure, addressed by wire field name"""
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Response model for 400 validation failures"""
    message: str = "Invalid timer data"
    errors: List[FieldError]


def to_field_errors(errors) -> List[FieldError]:
    """
    Flatten pydantic/FastAPI error dicts into field errors.

    The leading "body" segment of request locations is dropped; errors raised
    by whole-model validators are reported against "body".
    """
    field_errors = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field_errors.append(
            FieldError(
                field=".".join(loc) or "body",
                message=error.get("msg", "Invalid value"),
            )
        )
    return field_errors

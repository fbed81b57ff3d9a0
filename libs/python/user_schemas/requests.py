"""Request bodies accepted by the user endpoints, with their validation rules."""

from __future__ import annotations

import re
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, field_validator

PASSWORD_PATTERN = re.compile(r"(?:(?=.*\d)|(?=.*\W+))(?![.\n])(?=.*[A-Z])(?=.*[a-z]).*$")
PASSWORD_MESSAGE = "The password must have a Uppercase, lowercase letter and a number"
EMAIL_MESSAGE = "Please provide a valid email address"


def check_email(value: str) -> str:
    """Validate the address format and return it exactly as sent.

    Emails are matched verbatim by the store, so the normalised form
    ``email_validator`` computes is discarded.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(EMAIL_MESSAGE) from exc
    return value


def check_password(value: str) -> str:
    """Reject passwords lacking an uppercase letter, a lowercase letter, and a digit or symbol."""
    if not PASSWORD_PATTERN.search(value):
        raise ValueError(PASSWORD_MESSAGE)
    return value


Email = Annotated[str, AfterValidator(check_email)]


class CreateUserRequest(BaseModel):
    """Payload accepted when registering a user."""

    username: str = Field(..., min_length=3)
    email: Email
    password: str = Field(..., min_length=6, max_length=50)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class LoginUserRequest(BaseModel):
    email: Email
    password: str = Field(..., min_length=6, max_length=50)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class UpdateUserRequest(BaseModel):
    """Partial form of :class:`CreateUserRequest`; omitted fields stay untouched."""

    username: str | None = Field(default=None, min_length=3)
    email: Email | None = None
    password: str | None = Field(default=None, min_length=6, max_length=50)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_password(value)

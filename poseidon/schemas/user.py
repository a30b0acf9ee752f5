"""Form schemas for user administration."""

from enum import Enum
from typing import Annotated

from pydantic import Field, StringConstraints, field_validator

from poseidon.core.security import (
    FULLNAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    PASSWORD_STRENGTH_PATTERN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from poseidon.schemas.forms import FormModel


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


# Passwords are encoded exactly as typed; surrounding spaces are part of the secret.
PlainPassword = Annotated[str, StringConstraints(strip_whitespace=False)]


def _check_password_strength(value: str) -> str:
    if not PASSWORD_STRENGTH_PATTERN.match(value):
        raise ValueError(
            "Password must contain at least one uppercase letter, one digit and one symbol."
        )
    return value


class UserCreateForm(FormModel):
    """New account; password is plaintext here and must be encoded before it is stored."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, title="Username"
    )
    password: PlainPassword = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        title="Password",
        json_schema_extra={"widget": "password"},
    )
    fullname: str = Field(..., max_length=FULLNAME_MAX_LEN, title="Full name")
    role: Role = Field(..., title="Role")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_strength(v)

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, v: object) -> object:
        if isinstance(v, str) and v not in Role.__members__:
            raise ValueError("Role must be ADMIN or USER.")
        return v


class UserUpdateForm(UserCreateForm):
    """Account edit; a blank password means keep the stored digest."""

    password: PlainPassword | None = Field(
        default=None,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        title="Password",
        json_schema_extra={"widget": "password"},
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _check_password_strength(v)

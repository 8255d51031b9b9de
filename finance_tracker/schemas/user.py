# finance_tracker/schemas/user.py
from datetime import datetime
from typing import Any, Mapping
from pydantic import BaseModel

from finance_tracker.core.errors import BadRequestError
from finance_tracker.schemas.common import CamelModel, is_blank, is_valid_email

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


# Public fields; the password hash never leaves the server
class UserRead(CamelModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    user: UserRead
    token: str


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SignupRequest":
        name = payload.get("name")
        email = payload.get("email")
        password = payload.get("password")

        if is_blank(name):
            raise BadRequestError("MISSING_NAME", "Name is required")
        if email is None or email == "":
            raise BadRequestError("MISSING_EMAIL", "Email is required")
        if not isinstance(password, str) or password == "":
            raise BadRequestError("MISSING_PASSWORD", "Password is required")
        if not is_valid_email(email):
            raise BadRequestError("INVALID_EMAIL", "Invalid email format")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(
                "PASSWORD_TOO_SHORT",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )

        return cls(name=name.strip(), email=normalize_email(email), password=password)


class LoginRequest(BaseModel):
    email: str
    password: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "LoginRequest":
        email = payload.get("email")
        password = payload.get("password")

        if email is None or email == "":
            raise BadRequestError("MISSING_EMAIL", "Email is required")
        if not isinstance(password, str) or password == "":
            raise BadRequestError("MISSING_PASSWORD", "Password is required")
        if not is_valid_email(email):
            raise BadRequestError("INVALID_EMAIL", "Invalid email format")

        return cls(email=normalize_email(email), password=password)

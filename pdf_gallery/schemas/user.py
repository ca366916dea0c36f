# pdf_gallery/schemas/user.py
import re
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from .base import BaseSchema, RequestSchema, TimestampMixin

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,30}$")
MIN_PASSWORD_LENGTH = 6


class RegisterRequest(RequestSchema):
    username: str
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator("username")
    @classmethod
    def valid_username(cls, value: str) -> str:
        value = value.strip()
        if not USERNAME_PATTERN.match(value):
            raise ValueError("username must be 3-30 letters, digits, '_', '-' or '.'")
        return value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(RequestSchema):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def identifier_present(self):
        if not (self.username or self.email):
            raise ValueError("username or email is required")
        return self


class ChangePasswordRequest(RequestSchema):
    current_password: str
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class User(TimestampMixin):
    id: int
    username: str
    email: str


class TokenResponse(BaseSchema):
    token: str
    user: User


class ProfileStats(BaseSchema):
    total_pdfs: int = Field(0, alias="totalPDFs")
    public_pdfs: int = Field(0, alias="publicPDFs")
    private_pdfs: int = Field(0, alias="privatePDFs")
    total_storage: float = Field(0.0, alias="totalStorage")


class Profile(BaseSchema):
    user: User
    stats: ProfileStats

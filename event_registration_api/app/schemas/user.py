"""
Pydantic models for user accounts.

Users are the organizers: every event is owned by the user who
created it.  Passwords are accepted on input only and never returned.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


MIN_PASSWORD_LENGTH = 6


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Jane Organizer"])
    email: str = Field(..., min_length=1, examples=["jane@example.com"])

    model_config = {
        "str_strip_whitespace": True,
    }

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        local, _, domain = value.partition("@")
        if not local or "." not in domain:
            raise ValueError("Please include a valid email")
        return value.lower()


class UserCreate(UserBase):
    """Schema for signing up."""

    password: str = Field(..., min_length=1, examples=["strongpassword"])

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
            )
        return value


class UserLogin(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    model_config = {
        "str_strip_whitespace": True,
    }


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    name: str
    email: str
    created_at: datetime = Field(..., alias="date")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

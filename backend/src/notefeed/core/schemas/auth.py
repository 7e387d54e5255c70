"""
Authentication schemas.

These schemas define the API contracts for signup, login and the
current-user profile.
"""

import uuid
from typing import List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

PASSWORD_MIN_LENGTH = 5


class SignupRequest(BaseModel):
    """User registration request schema."""

    email: EmailStr = Field(description="Unique account email")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128, description="User password")
    confirm_password: str = Field(description="Password confirmation")

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "email": "test@test.com",
                "name": "Test User",
                "password": "tester1",
                "confirm_password": "tester1",
            }
        },
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Passwords are letters and digits only."""
        if not v.isalnum():
            raise ValueError("Password can only contain letters and numbers")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords have to match!")
        return self


class LoginRequest(BaseModel):
    """User login request schema."""

    email: EmailStr = Field(description="Account email")
    password: str = Field(min_length=1, max_length=128, description="User password")

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={"example": {"email": "test@test.com", "password": "tester1"}},
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginResponse(BaseModel):
    token: str = Field(description="JWT access token")
    user_id: uuid.UUID
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")


class SignupResponse(BaseModel):
    message: str = "User created!"
    user_id: uuid.UUID


class UserProfileResponse(BaseModel):
    """Current user information."""

    id: uuid.UUID
    email: str
    name: str
    bio: str
    note_ids: List[uuid.UUID] = Field(default_factory=list, description="Ids of notes the user created")

    @classmethod
    def from_model(cls, user) -> "UserProfileResponse":
        return cls(id=user.id, email=user.email, name=user.name, bio=user.bio, note_ids=user.note_ids)

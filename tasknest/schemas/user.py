from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..models.user import UserRole


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    # Passwords are kept byte-exact, surrounding spaces included
    password: str = Field(..., min_length=6, max_length=64)
    role: UserRole = UserRole.USER

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_identity(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("role", mode="before")
    @classmethod
    def default_empty_role(cls, value):
        """A null or empty role means the default role."""
        if value is None or value == "":
            return UserRole.USER
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=64)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    role: UserRole
    created_at: datetime


class Token(BaseModel):
    token: str


class Message(BaseModel):
    message: str

"""
Authentication models for admin users and tokens
"""
import uuid
from sqlmodel import Field, SQLModel
from pydantic import EmailStr, ConfigDict

from core.models import TimestampedModel


class User(TimestampedModel, table=True):
    """Account that can sign in; admins manage portfolio content"""

    __tablename__ = "users"

    id: uuid.UUID | None = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str = Field(max_length=255)
    is_admin: bool = Field(default=False)

    model_config = ConfigDict(from_attributes=True)


# Request/Response Models

class UserRegister(SQLModel):
    """User registration request"""
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=100)


class UserLogin(SQLModel):
    """User login request"""
    email: EmailStr
    password: str


class UserPublic(SQLModel):
    """Public user information"""
    id: uuid.UUID
    name: str
    email: str
    is_admin: bool


class TokenResponse(UserPublic):
    """User information plus a bearer token"""
    access_token: str
    token_type: str = "bearer"

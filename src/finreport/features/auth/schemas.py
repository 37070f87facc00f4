"""Pydantic schemas for registration and token exchange."""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
import datetime

from ...common.schemas import CamelModel


class UserBase(CamelModel):
    username: str = Field(..., min_length=3, max_length=100, description="Username")
    email: EmailStr = Field(..., description="User email address")


class UserCreate(UserBase):
    password: str = Field(..., min_length=8, description="User password")


class UserResponse(UserBase):
    public_id: str = Field(..., description="Public unique identifier for the user (KSUID)")
    is_active: bool
    created_at: datetime.datetime


# OAuth2 token responses keep their snake_case keys
class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    sub: Optional[str] = None

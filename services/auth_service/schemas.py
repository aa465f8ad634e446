from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from shared.schemas import CamelModel


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: Optional[str] = None


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_signed_in: Optional[datetime] = None

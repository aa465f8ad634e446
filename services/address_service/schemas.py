from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.schemas import CamelModel


class AddressCreate(CamelModel):
    recipient_name: str = Field(min_length=1)
    street: str = Field(min_length=1)
    number: str = Field(min_length=1)
    complement: Optional[str] = None
    neighborhood: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=2, max_length=2)
    zip_code: str = Field(min_length=8)
    is_default: bool = False


class AddressUpdate(CamelModel):
    id: int
    recipient_name: Optional[str] = Field(default=None, min_length=1)
    street: Optional[str] = Field(default=None, min_length=1)
    number: Optional[str] = Field(default=None, min_length=1)
    complement: Optional[str] = None
    neighborhood: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = Field(default=None, min_length=1)
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)
    zip_code: Optional[str] = Field(default=None, min_length=8)
    is_default: Optional[bool] = None


class AddressId(CamelModel):
    id: int


class AddressResponse(CamelModel):
    id: int
    user_id: int
    recipient_name: str
    street: str
    number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    state: str
    zip_code: str
    is_default: bool
    created_at: Optional[datetime] = None

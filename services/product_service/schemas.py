from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.schemas import MAX_INT, CamelModel


class ProductCreate(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: Optional[str] = None
    price: int = Field(ge=0, le=MAX_INT)
    category_id: int
    stock: int = Field(default=0, ge=0, le=MAX_INT)
    image_url: Optional[str] = None
    image_key: Optional[str] = None
    active: bool = True


class ProductUpdate(CamelModel):
    id: int
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    category_id: Optional[int] = None
    stock: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    image_url: Optional[str] = None
    image_key: Optional[str] = None
    active: Optional[bool] = None


class ProductId(CamelModel):
    id: int


class ProductResponse(CamelModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    price: int
    category_id: int
    stock: int
    image_url: Optional[str] = None
    image_key: Optional[str] = None
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ImageUpload(CamelModel):
    base64: str = Field(min_length=1)
    filename: str = Field(min_length=1)
    mime_type: str = Field(min_length=1)


class ImageUploadResponse(CamelModel):
    url: str
    file_key: str

from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.schemas import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: Optional[str] = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

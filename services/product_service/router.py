from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import SuccessResponse
from shared.security.dependencies import get_admin_user
from shared.storage import ObjectStorage, get_object_storage
from .schemas import (
    ImageUpload,
    ImageUploadResponse,
    ProductCreate,
    ProductId,
    ProductResponse,
    ProductUpdate,
)
from .service import ProductService

router = APIRouter(tags=["products"])
admin_router = APIRouter(tags=["products"], dependencies=[Depends(get_admin_user)])


@router.get("/products.list", response_model=list[ProductResponse])
async def list_products(
    category_id: Optional[int] = Query(default=None, alias="categoryId"),
    search: Optional[str] = Query(default=None),
    active_only: bool = Query(default=False, alias="activeOnly"),
    db: AsyncSession = Depends(get_db),
):
    return await ProductService.list_products(
        db, category_id=category_id, search=search, active_only=active_only
    )


@router.get("/products.getById", response_model=ProductResponse)
async def get_product(id: int = Query(...), db: AsyncSession = Depends(get_db)):
    return await ProductService.get_product_by_id(db, id)


@router.get("/products.getBySlug", response_model=ProductResponse)
async def get_product_by_slug(slug: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)):
    return await ProductService.get_product_by_slug(db, slug)


@admin_router.post("/products.create", response_model=ProductResponse)
async def create_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    return await ProductService.create_product(db, product)


@admin_router.post("/products.update", response_model=ProductResponse)
async def update_product(product: ProductUpdate, db: AsyncSession = Depends(get_db)):
    return await ProductService.update_product(db, product)


@admin_router.post("/products.delete", response_model=SuccessResponse)
async def delete_product(payload: ProductId, db: AsyncSession = Depends(get_db)):
    await ProductService.delete_product(db, payload.id)
    return SuccessResponse()


@admin_router.post("/products.uploadImage", response_model=ImageUploadResponse)
async def upload_image(payload: ImageUpload, storage: ObjectStorage = Depends(get_object_storage)):
    return await ProductService.upload_image(storage, payload)

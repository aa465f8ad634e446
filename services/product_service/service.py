import base64
import binascii
import re
import uuid
from pathlib import Path
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import CONFLICT, ProcedureError, bad_request, not_found
from shared.storage import ObjectStorage
from .models import Product
from .repository import ProductRepository
from .schemas import ImageUpload, ImageUploadResponse, ProductCreate, ProductUpdate

logger = structlog.get_logger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")

# Columns that may not be cleared through products.update
_REQUIRED_FIELDS = {"name", "slug", "price", "category_id", "stock", "active"}


class ProductService:

    @staticmethod
    async def _ensure_slug_free(db: AsyncSession, slug: str, product_id: Optional[int] = None):
        existing = await ProductRepository.get_product_by_slug(db, slug)
        if existing and existing.id != product_id:
            raise ProcedureError(CONFLICT, f"Product slug '{slug}' already exists")

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate):
        await ProductService._ensure_slug_free(db, data.slug)
        product = Product(**data.model_dump())
        try:
            product = await ProductRepository.create_product(db, product)
        except IntegrityError:
            await db.rollback()
            raise ProcedureError(CONFLICT, f"Product slug '{data.slug}' already exists")
        logger.info("product_created", product_id=product.id, slug=product.slug, stock=product.stock)
        return product

    @staticmethod
    async def list_products(
        db: AsyncSession,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        active_only: bool = False,
    ):
        return await ProductRepository.get_all_products(
            db, category_id=category_id, search=search, active_only=active_only
        )

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise not_found("Product not found")
        return product

    @staticmethod
    async def get_product_by_slug(db: AsyncSession, slug: str):
        product = await ProductRepository.get_product_by_slug(db, slug)
        if not product:
            raise not_found("Product not found")
        return product

    @staticmethod
    async def update_product(db: AsyncSession, data: ProductUpdate):
        product = await ProductService.get_product_by_id(db, data.id)

        changes = data.model_dump(exclude_unset=True, exclude={"id"})
        changes = {
            field: value for field, value in changes.items()
            if value is not None or field not in _REQUIRED_FIELDS
        }
        if "slug" in changes:
            await ProductService._ensure_slug_free(db, changes["slug"], product.id)

        for field, value in changes.items():
            setattr(product, field, value)
        try:
            product = await ProductRepository.update_product(db, product)
        except IntegrityError:
            await db.rollback()
            raise ProcedureError(CONFLICT, "Product slug already exists")
        logger.info("product_updated", product_id=product.id, fields=sorted(changes))
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int):
        if not await ProductRepository.delete_product(db, product_id):
            raise not_found("Product not found")
        logger.info("product_deleted", product_id=product_id)

    @staticmethod
    async def upload_image(storage: ObjectStorage, data: ImageUpload) -> ImageUploadResponse:
        encoded = _DATA_URL_PREFIX.sub("", data.base64)
        try:
            buffer = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise bad_request("Image payload is not valid base64")

        ext = Path(data.filename).suffix.lstrip(".").lower()
        if not ext.isalnum():
            ext = "bin"
        file_key = f"products/{uuid.uuid4().hex}.{ext}"

        stored = await storage.put(file_key, buffer, data.mime_type)
        logger.info("image_uploaded", file_key=stored.key, size=len(buffer), mime_type=data.mime_type)
        return ImageUploadResponse(url=stored.url, file_key=stored.key)

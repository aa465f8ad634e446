import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import CONFLICT, ProcedureError
from .models import Category
from .repository import CategoryRepository
from .schemas import CategoryCreate

logger = structlog.get_logger(__name__)


class CategoryService:

    @staticmethod
    async def create_category(db: AsyncSession, data: CategoryCreate):
        if await CategoryRepository.get_category_by_slug(db, data.slug):
            raise ProcedureError(CONFLICT, f"Category slug '{data.slug}' already exists")
        category = Category(name=data.name, slug=data.slug, description=data.description)
        try:
            category = await CategoryRepository.create_category(db, category)
        except IntegrityError:
            await db.rollback()
            raise ProcedureError(CONFLICT, f"Category slug '{data.slug}' already exists")
        logger.info("category_created", category_id=category.id, slug=category.slug)
        return category

    @staticmethod
    async def list_categories(db: AsyncSession):
        return await CategoryRepository.get_all_categories(db)

    @staticmethod
    async def get_category_by_id(db: AsyncSession, category_id: int):
        return await CategoryRepository.get_category_by_id(db, category_id)

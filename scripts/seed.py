"""
Seed the default bakery categories and products.

Idempotent: rows are matched by slug and skipped when already present.
Run with `python -m scripts.seed` from the project root.
"""
import asyncio

import structlog

from shared.config.database import AsyncSessionLocal, create_tables
from shared.observability import configure_logging
from services.category_service.models import Category
from services.category_service.repository import CategoryRepository
from services.product_service.models import Product
from services.product_service.repository import ProductRepository

logger = structlog.get_logger(__name__)

CATEGORIES = [
    {"name": "Clássicos", "slug": "classicos", "description": "Sabores tradicionais e atemporais"},
    {"name": "Frutas", "slug": "frutas", "description": "Cupcakes com sabores de frutas frescas"},
    {"name": "Chocolate", "slug": "chocolate", "description": "Para os amantes de chocolate"},
    {"name": "Especiais", "slug": "especiais", "description": "Sabores únicos e exclusivos"},
    {"name": "Veganos", "slug": "veganos", "description": "Opções 100% veganas"},
]

# (name, slug, description, price in cents, category slug, stock, image)
PRODUCTS = [
    ("Cupcake de Morango", "cupcake-morango",
     "Delicioso cupcake com cobertura de morango fresco e chantilly",
     1200, "frutas", 50, "https://images.unsplash.com/photo-1614707267537-b85aaf00c4b7?w=500"),
    ("Cupcake de Chocolate Belga", "cupcake-chocolate-belga",
     "Massa de chocolate com cobertura cremosa de chocolate belga",
     1400, "chocolate", 45, "https://images.unsplash.com/photo-1587668178277-295251f900ce?w=500"),
    ("Cupcake de Baunilha", "cupcake-baunilha",
     "Clássico cupcake de baunilha com buttercream suave",
     1000, "classicos", 60, "https://images.unsplash.com/photo-1576618148400-f54bed99fcfd?w=500"),
    ("Cupcake de Limão Siciliano", "cupcake-limao",
     "Refrescante cupcake de limão com cobertura cítrica",
     1100, "frutas", 40, "https://images.unsplash.com/photo-1519869325930-281384150729?w=500"),
    ("Cupcake Red Velvet", "cupcake-red-velvet",
     "Famoso red velvet com cream cheese frosting",
     1500, "especiais", 35, "https://images.unsplash.com/photo-1599785209796-786432b228bc?w=500"),
    ("Cupcake de Cenoura", "cupcake-cenoura",
     "Cupcake de cenoura com cobertura de cream cheese",
     1100, "classicos", 55, None),
    ("Cupcake de Chocolate Mint", "cupcake-chocolate-mint",
     "Chocolate com toque refrescante de menta",
     1300, "chocolate", 30, None),
    ("Cupcake Vegano de Banana", "cupcake-vegano-banana",
     "100% vegano com banana e cobertura de chocolate",
     1400, "veganos", 25, None),
]


async def seed():
    await create_tables()
    async with AsyncSessionLocal() as db:
        category_ids = {}
        for data in CATEGORIES:
            category = await CategoryRepository.get_category_by_slug(db, data["slug"])
            if not category:
                category = await CategoryRepository.create_category(db, Category(**data))
                logger.info("seed_category_created", slug=category.slug)
            category_ids[category.slug] = category.id

        for name, slug, description, price, category_slug, stock, image_url in PRODUCTS:
            if await ProductRepository.get_product_by_slug(db, slug):
                continue
            await ProductRepository.create_product(db, Product(
                name=name,
                slug=slug,
                description=description,
                price=price,
                category_id=category_ids[category_slug],
                stock=stock,
                image_url=image_url,
                active=True,
            ))
            logger.info("seed_product_created", slug=slug)


if __name__ == "__main__":
    configure_logging()
    asyncio.run(seed())

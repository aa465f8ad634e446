from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.database import create_tables
from shared.config.settings import SERVICE_NAME
from shared.errors import (
    ProcedureError,
    http_error_handler,
    procedure_error_handler,
    rate_limit_error_handler,
    unhandled_error_handler,
    validation_error_handler,
)
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.category_service import models as category_models  # noqa: F401
from services.product_service import models as product_models  # noqa: F401
from services.address_service import models as address_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401

from services.auth_service.router import router as auth_router
from services.category_service.router import router as category_router
from services.product_service.router import router as product_router, admin_router as product_admin_router
from services.address_service.router import router as address_router
from services.order_service.router import router as order_router
from services.dashboard_service.router import router as dashboard_router

app = FastAPI(
    title="Cupcake L'amore Storefront",
    version="1.0.0",
    description="Catalog, cart checkout and admin procedures for the bakery storefront.",
)

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, SERVICE_NAME)

# --- SECURITY SETUP ---
app.state.limiter = limiter

# --- ERROR TAXONOMY ---
app.add_exception_handler(ProcedureError, procedure_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(auth_router)
app.include_router(category_router)
app.include_router(product_router)
app.include_router(product_admin_router)
app.include_router(address_router)
app.include_router(order_router)
app.include_router(dashboard_router)


@app.get("/system.health", tags=["system"])
async def health_check():
    return {"service": SERVICE_NAME, "status": "running"}


@app.on_event("startup")
async def startup_event():
    await create_tables()

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SERVICE_NAME = os.getenv("SERVICE_NAME", "bakery_storefront")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database
DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5433")
DB_NAME = os.getenv("POSTGRES_DB", "bakery")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)
DB_ECHO = _env_bool("DB_ECHO", False)

# Auth
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "app_session_id")
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
# The account registered with this e-mail is promoted to admin
OWNER_EMAIL = os.getenv("OWNER_EMAIL", "").strip().lower()

# Checkout
SHIPPING_FEE = int(os.getenv("SHIPPING_FEE", "1500"))  # R$ 15,00, minor units
CHECKOUT_RATE_LIMIT = os.getenv("CHECKOUT_RATE_LIMIT", "10/minute")
RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED", True)

# Object storage
STORAGE_DIR = os.getenv("STORAGE_DIR", "./uploads")
STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL", "/uploads").rstrip("/")

# Tracing is only wired when a collector endpoint is configured
OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "")

# Storefront client
CART_STORAGE_KEY = "cupcake-lamore-cart"
STOREFRONT_API_URL = os.getenv("STOREFRONT_API_URL", "http://localhost:8000")

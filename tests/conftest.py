import asyncio
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="bakery-tests-")

# Must be set before any project module reads the environment
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/storefront.db"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["OWNER_EMAIL"] = "owner@lamore.com.br"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORAGE_DIR"] = f"{_TMP_DIR}/uploads"
os.environ["STORAGE_PUBLIC_URL"] = "/uploads"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SHIPPING_FEE"] = "1500"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("OTLP_ENDPOINT", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

import main
from shared.config.database import AsyncSessionLocal, create_tables, drop_tables

STORAGE_DIR = os.environ["STORAGE_DIR"]
OWNER_EMAIL = os.environ["OWNER_EMAIL"]
PASSWORD = "s3cret-pass"


async def _reset_database():
    await drop_tables()
    await create_tables()


async def _count(model, *criteria):
    async with AsyncSessionLocal() as db:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await db.execute(stmt)
        return result.scalar_one()


def count_rows(model, *criteria) -> int:
    """Row count read straight from the database, bypassing the procedures."""
    return asyncio.run(_count(model, *criteria))


@pytest.fixture(autouse=True)
def database():
    asyncio.run(_reset_database())
    yield


@pytest.fixture
def client():
    with TestClient(main.app) as c:
        yield c


def login(client, email, password=PASSWORD, name=None) -> dict:
    """Register (once) and log in; returns bearer headers. The session cookie is dropped."""
    client.post("/auth.register", json={"email": email, "password": password, "name": name})
    resp = client.post("/auth.login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, OWNER_EMAIL, name="Owner")


@pytest.fixture
def customer_headers(client):
    return login(client, "ana@lamore.com.br", name="Ana")


@pytest.fixture
def other_headers(client):
    return login(client, "bruno@lamore.com.br", name="Bruno")


def create_category(client, headers, slug="frutas", name="Frutas"):
    resp = client.post("/categories.create", json={"name": name, "slug": slug}, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def create_product(client, headers, **overrides):
    payload = {
        "name": "Cupcake de Morango",
        "slug": "cupcake-morango",
        "description": "Cobertura de morango fresco e chantilly",
        "price": 1200,
        "categoryId": 1,
        "stock": 50,
        "active": True,
    }
    payload.update(overrides)
    resp = client.post("/products.create", json=payload, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def create_address(client, headers, **overrides):
    payload = {
        "recipientName": "Ana Souza",
        "street": "Rua das Flores",
        "number": "123",
        "neighborhood": "Centro",
        "city": "São Paulo",
        "state": "SP",
        "zipCode": "01310-100",
        "isDefault": False,
    }
    payload.update(overrides)
    resp = client.post("/addresses.create", json=payload, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def get_product(client, product_id):
    resp = client.get("/products.getById", params={"id": product_id})
    assert resp.status_code == 200, resp.text
    return resp.json()


def error_of(resp) -> dict:
    return resp.json()["error"]

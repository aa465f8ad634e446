from conftest import OWNER_EMAIL, PASSWORD, error_of, login
from services.auth_service.repository import UserRepository


def test_register_returns_customer_profile(client):
    resp = client.post("/auth.register", json={"email": "Ana@Lamore.com.br", "password": PASSWORD, "name": "Ana"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "ana@lamore.com.br"
    assert body["role"] == "customer"
    assert body["isActive"] is True
    assert "hashedPassword" not in body


def test_owner_email_registers_as_admin(client):
    resp = client.post("/auth.register", json={"email": OWNER_EMAIL, "password": PASSWORD})
    assert resp.json()["role"] == "admin"


def test_duplicate_email_conflicts(client):
    client.post("/auth.register", json={"email": "ana@lamore.com.br", "password": PASSWORD})
    resp = client.post("/auth.register", json={"email": "ana@lamore.com.br", "password": PASSWORD})

    assert resp.status_code == 409
    assert error_of(resp)["code"] == "CONFLICT"


def test_short_password_is_bad_request(client):
    resp = client.post("/auth.register", json={"email": "ana@lamore.com.br", "password": "123"})

    assert resp.status_code == 400
    assert error_of(resp)["code"] == "BAD_REQUEST"
    assert "password" in error_of(resp)["message"]


def test_wrong_password_is_unauthenticated(client):
    client.post("/auth.register", json={"email": "ana@lamore.com.br", "password": PASSWORD})
    resp = client.post("/auth.login", json={"email": "ana@lamore.com.br", "password": "wrong-pass"})

    assert resp.status_code == 401
    assert error_of(resp)["code"] == "UNAUTHENTICATED"


def test_me_is_null_when_anonymous(client):
    resp = client.get("/auth.me")

    assert resp.status_code == 200
    assert resp.json() is None


def test_me_with_bearer_token(client, customer_headers):
    resp = client.get("/auth.me", headers=customer_headers)

    assert resp.json()["email"] == "ana@lamore.com.br"
    assert resp.json()["lastSignedIn"] is not None


def test_session_cookie_login_and_logout(client):
    client.post("/auth.register", json={"email": "ana@lamore.com.br", "password": PASSWORD})
    client.post("/auth.login", json={"email": "ana@lamore.com.br", "password": PASSWORD})

    assert client.get("/auth.me").json()["email"] == "ana@lamore.com.br"

    resp = client.post("/auth.logout")
    assert resp.json() == {"success": True}
    assert client.get("/auth.me").json() is None


def test_garbage_token_is_treated_as_anonymous(client):
    resp = client.get("/addresses.list", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert error_of(resp)["code"] == "UNAUTHENTICATED"


def test_login_helper_tokens_are_independent(client):
    ana = login(client, "ana@lamore.com.br")
    bruno = login(client, "bruno@lamore.com.br")

    assert client.get("/auth.me", headers=ana).json()["email"] == "ana@lamore.com.br"
    assert client.get("/auth.me", headers=bruno).json()["email"] == "bruno@lamore.com.br"


def test_concurrent_registration_conflicts(client, monkeypatch):
    payload = {"email": "carla@lamore.com.br", "password": PASSWORD}
    assert client.post("/auth.register", json=payload).status_code == 201

    async def not_yet_visible(db, email):
        return None

    monkeypatch.setattr(UserRepository, "get_by_email", staticmethod(not_yet_visible))
    resp = client.post("/auth.register", json=payload)

    assert resp.status_code == 409
    assert error_of(resp)["code"] == "CONFLICT"

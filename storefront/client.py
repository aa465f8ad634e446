"""
httpx client for the storefront procedures.

Queries are GETs with query-string input, mutations are POSTs with a JSON
body. Every non-2xx answer becomes a StorefrontError carrying the server's
error code and message.
"""
from typing import Any, Optional

import httpx

from shared.config.settings import STOREFRONT_API_URL


class StorefrontError(Exception):

    def __init__(self, code: str, message: str, status_code: int, reason: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.reason = reason


def _drop_none(values: dict) -> dict:
    return {key: value for key, value in values.items() if value is not None}


class StorefrontClient:

    def __init__(self, http: Optional[httpx.Client] = None, base_url: str = STOREFRONT_API_URL,
                 timeout: float = 10.0):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    @staticmethod
    def _unwrap(resp: httpx.Response) -> Any:
        if resp.is_success:
            return resp.json()
        try:
            error = resp.json().get("error") or {}
        except ValueError:
            error = {}
        raise StorefrontError(
            code=error.get("code", "INTERNAL_SERVER_ERROR"),
            message=error.get("message") or resp.text or "Request failed",
            status_code=resp.status_code,
            reason=error.get("reason"),
        )

    def query(self, procedure: str, **params) -> Any:
        resp = self.http.get(f"/{procedure}", params=_drop_none(params), headers=self._headers())
        return self._unwrap(resp)

    def mutate(self, procedure: str, payload: Optional[dict] = None) -> Any:
        resp = self.http.post(f"/{procedure}", json=_drop_none(payload or {}), headers=self._headers())
        return self._unwrap(resp)

    # --- auth ---

    def register(self, email: str, password: str, name: Optional[str] = None) -> dict:
        return self.mutate("auth.register", {"email": email, "password": password, "name": name})

    def login(self, email: str, password: str) -> dict:
        token = self.mutate("auth.login", {"email": email, "password": password})
        self.token = token["accessToken"]
        return token

    def logout(self) -> dict:
        result = self.mutate("auth.logout")
        self.token = None
        return result

    def me(self) -> Optional[dict]:
        return self.query("auth.me")

    # --- catalog ---

    def list_categories(self) -> list[dict]:
        return self.query("categories.list")

    def create_category(self, name: str, slug: str, description: Optional[str] = None) -> dict:
        return self.mutate("categories.create", {"name": name, "slug": slug, "description": description})

    def list_products(self, category_id: Optional[int] = None, search: Optional[str] = None,
                      active_only: Optional[bool] = None) -> list[dict]:
        if active_only is not None:
            active_only = str(active_only).lower()
        return self.query("products.list", categoryId=category_id, search=search or None, activeOnly=active_only)

    def get_product(self, product_id: int) -> dict:
        return self.query("products.getById", id=product_id)

    def get_product_by_slug(self, slug: str) -> dict:
        return self.query("products.getBySlug", slug=slug)

    def create_product(self, **fields) -> dict:
        return self.mutate("products.create", fields)

    def update_product(self, product_id: int, **fields) -> dict:
        return self.mutate("products.update", {"id": product_id, **fields})

    def delete_product(self, product_id: int) -> dict:
        return self.mutate("products.delete", {"id": product_id})

    def upload_image(self, base64_data: str, filename: str, mime_type: str) -> dict:
        return self.mutate("products.uploadImage", {"base64": base64_data, "filename": filename, "mimeType": mime_type})

    # --- addresses ---

    def list_addresses(self) -> list[dict]:
        return self.query("addresses.list")

    def create_address(self, **fields) -> dict:
        return self.mutate("addresses.create", fields)

    def update_address(self, address_id: int, **fields) -> dict:
        return self.mutate("addresses.update", {"id": address_id, **fields})

    def delete_address(self, address_id: int) -> dict:
        return self.mutate("addresses.delete", {"id": address_id})

    # --- orders ---

    def create_order(self, address_id: int, payment_method: str, items: list[dict],
                     notes: Optional[str] = None) -> dict:
        return self.mutate("orders.create", {
            "addressId": address_id,
            "paymentMethod": payment_method,
            "items": items,
            "notes": notes,
        })

    def list_orders(self) -> list[dict]:
        return self.query("orders.list")

    def get_order(self, order_id: int) -> dict:
        return self.query("orders.getById", id=order_id)

    def update_order_status(self, order_id: int, status: str) -> dict:
        return self.mutate("orders.updateStatus", {"id": order_id, "status": status})

    # --- dashboard ---

    def dashboard_stats(self) -> dict:
        return self.query("dashboard.stats")

# dog_sync/clients/shopify.py
from typing import Optional

import requests

from ..config import StoreConfig
from ..errors import DownstreamLocateError, DownstreamWriteError

def admin_base(store: StoreConfig) -> str:
    return f"https://{store.domain}/admin/api/{store.api_version}"

def rest_headers(token: str) -> dict:
    return {"Content-Type": "application/json", "X-Shopify-Access-Token": token}

def _ok(r: requests.Response) -> bool:
    return 200 <= r.status_code < 300

def search_products_by_handle(store: StoreConfig, handle: str) -> list[dict]:
    """Filter the product list server-side by exact handle."""
    try:
        r = requests.get(f"{admin_base(store)}/products.json",
                         headers=rest_headers(store.token), params={"handle": handle},
                         timeout=store.timeout)
    except requests.RequestException as e:
        raise DownstreamLocateError(f"search for {handle} failed: {e}") from e
    if not _ok(r):
        raise DownstreamLocateError(f"search for {handle} failed: {r.status_code} {r.reason}")
    try:
        data = r.json()
    except ValueError as e:
        raise DownstreamLocateError(f"search for {handle} returned invalid JSON") from e
    if not isinstance(data, dict):
        raise DownstreamLocateError(f"search for {handle} returned unexpected body")
    return data.get("products") or []

def create_product(store: StoreConfig, product: dict) -> dict:
    r = requests.post(f"{admin_base(store)}/products.json",
                      headers=rest_headers(store.token), json={"product": product},
                      timeout=store.timeout)
    if not _ok(r):
        raise DownstreamWriteError("Failed to create product", details=r.text,
                                   status_code=r.status_code, handle=product.get("handle"))
    return r.json()

def update_product(store: StoreConfig, pid: int | str, product: dict) -> dict:
    r = requests.put(f"{admin_base(store)}/products/{pid}.json",
                     headers=rest_headers(store.token), json={"product": product},
                     timeout=store.timeout)
    if not _ok(r):
        raise DownstreamWriteError("Failed to update product", details=r.text,
                                   status_code=r.status_code, product_id=pid,
                                   handle=product.get("handle"))
    return r.json()

def products_url(store: StoreConfig) -> Optional[str]:
    if not (store.domain and store.api_version):
        return None
    return f"{admin_base(store)}/products.json"

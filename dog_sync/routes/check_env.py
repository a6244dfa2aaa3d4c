# dog_sync/routes/check_env.py
from flask import Blueprint

from ..config import load_store_config
from ..clients.shopify import products_url

bp = Blueprint("check_env", __name__)

def _preview(domain: str) -> str:
    return f"{domain[:3]}...{domain[-15:]}"

@bp.get("/check-env")
def check_env():
    """Report which Shopify settings are present without exposing the token."""
    store = load_store_config()
    return {
        "has_store_domain": bool(store.domain),
        "store_domain_length": len(store.domain or ""),
        "store_domain_preview": _preview(store.domain) if store.domain else None,
        "has_access_token": bool(store.token),
        "token_length": len(store.token or ""),
        "token_starts_with": store.token[:6] if store.token else None,
        "has_api_version": bool(store.api_version),
        "api_version": store.api_version or None,
        "constructed_url": products_url(store),
    }, 200

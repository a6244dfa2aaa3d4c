import os
from dataclasses import dataclass
from typing import Optional

from .errors import MissingConfiguration
from .utils.logger import warn

DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class StoreConfig:
    domain: Optional[str]
    token: Optional[str]
    api_version: Optional[str]
    timeout: float = DEFAULT_TIMEOUT

    def missing(self) -> list[str]:
        out = []
        if not self.domain:
            out.append("SHOPIFY_STORE_DOMAIN")
        if not self.token:
            out.append("SHOPIFY_ADMIN_API_ACCESS_TOKEN")
        if not self.api_version:
            out.append("SHOPIFY_API_VERSION")
        return out

    def validate(self):
        """Raise MissingConfiguration unless domain, token and API version are all set."""
        if self.missing():
            raise MissingConfiguration(
                "Missing Shopify environment variables",
                has_store_domain=bool(self.domain),
                has_access_token=bool(self.token),
                has_api_version=bool(self.api_version),
            )
        return self


def _timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        warn(f"[config] SHOPIFY_TIMEOUT={raw!r} is not a number; using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


def load_store_config() -> StoreConfig:
    # Read per request, not at import
    return StoreConfig(
        domain=os.getenv("SHOPIFY_STORE_DOMAIN"),
        token=os.getenv("SHOPIFY_ADMIN_API_ACCESS_TOKEN"),
        api_version=os.getenv("SHOPIFY_API_VERSION"),
        timeout=_timeout(os.getenv("SHOPIFY_TIMEOUT")),
    )


def is_development() -> bool:
    return os.getenv("APP_ENV", "production").lower() == "development"

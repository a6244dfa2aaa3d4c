"""Pytest fixtures for dog-sync tests."""

import json
from unittest.mock import patch

import pytest

from dog_sync import create_app
from dog_sync.config import StoreConfig

STORE_ENV = {
    "SHOPIFY_STORE_DOMAIN": "test-rescue.myshopify.com",
    "SHOPIFY_ADMIN_API_ACCESS_TOKEN": "shpat_test_token_123",
    "SHOPIFY_API_VERSION": "2025-04",
}


class FakeResponse:
    """Just enough of requests.Response for the Shopify client."""

    def __init__(self, status_code: int = 200, body=None, text: str | None = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)
        self.reason = "OK" if status_code < 400 else "Error"

    def json(self):
        if self._body is None:
            raise ValueError("response body is not JSON")
        return self._body


class FakeShopify:
    """In-memory product store answering the three REST calls the client makes."""

    def __init__(self):
        self.products: dict[int, dict] = {}
        self.calls: list[tuple] = []
        self.failures: dict[str, object] = {}
        self._next_id = 9001

    def _failure(self, method: str):
        failure = self.failures[method]
        if isinstance(failure, Exception):
            raise failure
        return failure

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append(("GET", url, params, headers))
        if "GET" in self.failures:
            return self._failure("GET")
        handle = (params or {}).get("handle")
        found = [p for p in self.products.values() if p.get("handle") == handle]
        return FakeResponse(200, {"products": found})

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append(("POST", url, json, headers))
        if "POST" in self.failures:
            return self._failure("POST")
        product = dict(json["product"], id=self._next_id)
        self._next_id += 1
        self.products[product["id"]] = product
        return FakeResponse(201, {"product": product})

    def put(self, url, headers=None, json=None, timeout=None):
        self.calls.append(("PUT", url, json, headers))
        if "PUT" in self.failures:
            return self._failure("PUT")
        pid = int(url.rsplit("/", 1)[-1].removesuffix(".json"))
        self.products[pid].update(json["product"])
        return FakeResponse(200, {"product": self.products[pid]})

    @property
    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("POST", "PUT")]


class RecordingObserver:
    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def event(self, stage, **fields):
        self.events.append((stage, fields))

    @property
    def stages(self) -> list[str]:
        return [stage for stage, _ in self.events]


@pytest.fixture
def shopify():
    """FakeShopify patched over requests.get/post/put in the Shopify client."""
    fake = FakeShopify()
    with patch("dog_sync.clients.shopify.requests.get", side_effect=fake.get), \
         patch("dog_sync.clients.shopify.requests.post", side_effect=fake.post), \
         patch("dog_sync.clients.shopify.requests.put", side_effect=fake.put):
        yield fake


@pytest.fixture
def store() -> StoreConfig:
    return StoreConfig(
        domain=STORE_ENV["SHOPIFY_STORE_DOMAIN"],
        token=STORE_ENV["SHOPIFY_ADMIN_API_ACCESS_TOKEN"],
        api_version=STORE_ENV["SHOPIFY_API_VERSION"],
    )


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def store_env(monkeypatch):
    for key, value in STORE_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("SHOPIFY_TIMEOUT", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)


@pytest.fixture
def app(monkeypatch):
    # Keep a developer's local .env out of the tests
    monkeypatch.setattr("dog_sync.load_dotenv", lambda: None)
    app = create_app()
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def submission() -> dict:
    """A Cognito Forms entry as posted by the webhook."""
    return {
        "Id": "24-108",
        "DogName": "Biscuit",
        "MyStory": "Biscuit loves belly rubs.",
        "LitterName": "Bakery",
        "PupBirthday": "2024-03-01",
        "Breed": "Lab Mix",
        "Gender": "Male",
        "EstimatedSizeWhenGrown": "50-60 lbs",
        "Code": "Available Now",
        "MainPhoto": [{"File": "https://files.example.com/main.jpg?token=abc", "Id": "m1"}],
        "AdditionalPhoto1": [{"Id": "extra-1"}],
    }


@pytest.fixture
def make_response():
    return FakeResponse

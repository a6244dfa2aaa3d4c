# dog_sync/services/sync.py
from enum import Enum
from typing import Optional

from ..clients.shopify import create_product, search_products_by_handle, update_product
from ..config import StoreConfig
from ..errors import DownstreamLocateError, MissingIdentifier, SyncError
from ..utils.logger import EventLogger
from .mapping import build_product_payload, derive_handle, map_submission


class Stage(Enum):
    RECEIVED = "received"
    MAPPED = "mapped"
    VALIDATED = "validated"
    LOCATED = "located"
    LOCATE_FAILED = "locate_failed"
    CREATING = "creating"
    UPDATING = "updating"
    COMPLETED = "completed"
    FAILED = "failed"


class DogSync:
    """
    Upsert one form entry into Shopify, keyed by the handle dog-<entry id>.

    received -> mapped -> validated -> located -> creating|updating -> completed
    Any stage may end in failed. One search and at most one write per call;
    nothing is retried, the webhook sender redelivers on error.
    """

    def __init__(self, store: StoreConfig, observer=None):
        self.store = store
        self.observer = observer or EventLogger()

    def _emit(self, stage: Stage, **fields):
        self.observer.event(stage.value, **fields)

    def locate(self, handle: str) -> Optional[dict]:
        try:
            products = search_products_by_handle(self.store, handle)
        except DownstreamLocateError as e:
            # A failed search counts as not found; sync() goes on to create.
            self._emit(Stage.LOCATE_FAILED, handle=handle, reason=str(e))
            return None
        if not products:
            return None
        return products[0]

    def sync(self, raw: dict) -> dict:
        self._emit(Stage.RECEIVED, keys=len(raw))
        try:
            return self._run(raw)
        except SyncError as e:
            self._emit(Stage.FAILED, status=e.status, error=e.message)
            raise
        except Exception as e:
            self._emit(Stage.FAILED, status=500, error=str(e))
            raise

    def _run(self, raw: dict) -> dict:
        dog = map_submission(raw)
        self._emit(Stage.MAPPED, entry=dog.entry_id, name=dog.name, images=len(dog.image_urls))

        if not dog.has_entry_id():
            raise MissingIdentifier("Missing Cognito entry ID", received_payload=raw)
        self.store.validate()

        handle = derive_handle(dog.entry_id)
        self._emit(Stage.VALIDATED, entry=dog.entry_id, handle=handle)

        existing = self.locate(handle)
        self._emit(Stage.LOCATED, handle=handle, product_id=existing.get("id") if existing else None)

        payload = build_product_payload(dog, handle)

        if existing:
            pid = existing["id"]
            self._emit(Stage.UPDATING, handle=handle, product_id=pid,
                       old_title=existing.get("title"), new_title=payload["title"])
            # handle is re-asserted last so the update can never rename the product
            result = update_product(self.store, pid, {**payload, "id": pid, "handle": handle})
            action = "updated"
        else:
            self._emit(Stage.CREATING, handle=handle, title=payload["title"])
            result = create_product(self.store, payload)
            action = "created"

        product = result.get("product") or result
        self._emit(Stage.COMPLETED, action=action, handle=handle, product_id=product.get("id"))
        return {"success": True, "action": action, "product": product}

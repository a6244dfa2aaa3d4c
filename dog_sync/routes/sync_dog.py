# dog_sync/routes/sync_dog.py
import traceback
from flask import Blueprint, request

from ..config import load_store_config, is_development
from ..errors import SyncError
from ..services.sync import DogSync
from ..utils.logger import info, error

bp = Blueprint("sync_dog", __name__)

@bp.route("/sync-dog", methods=["POST"], provide_automatic_options=False)
def sync_dog():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    info(f"[cognito] /sync-dog webhook received. Id={payload.get('Id')}")

    try:
        return DogSync(load_store_config()).sync(payload), 200
    except SyncError as e:
        return e.to_dict(), e.status
    except Exception as e:
        error(f"[cognito] /sync-dog unhandled: {e}")
        body = {"error": "Internal server error", "details": str(e)}
        if is_development():
            body["stack"] = traceback.format_exc()
        return body, 500

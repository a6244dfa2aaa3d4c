# dog_sync/services/mapping.py
"""
Cognito Forms submission -> DogRecord -> Shopify product payload.

Everything here is pure: no network, no config. The handle derived from the
entry id is the only identity anchor between a form entry and its product.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from ..utils.logger import debug, warn

# =========================================================
# Field aliases (newest key first, legacy keys after)
# =========================================================

ENTRY_ID_KEY = "Id"

ALIASES = {
    "name":            ("DogName", "Name", "Dog Name"),
    "story":           ("MyStory", "My Story"),
    "litter":          ("LitterName", "Litter"),
    "birthday":        ("PupBirthday", "Birthday"),
    "breed":           ("Breed",),
    "gender":          ("Gender",),
    "size_when_grown": ("EstimatedSizeWhenGrown", "Size when Grown"),
    "availability":    ("Code", "Availability"),
}

PHOTO_FIELDS = ("MainPhoto", "AdditionalPhoto1", "AdditionalPhoto2",
                "AdditionalPhoto3", "AdditionalPhoto4")

COGNITO_FILE_URL = "https://www.cognitoforms.com/file/{id}"

AVAILABLE_NOW = "Available: Now"
AVAILABLE_SOON = "Available Soon: Nursery"
ADOPTED = "Adopted"

PRODUCT_STATUS = "active"
PRODUCT_TYPE = "Dog"
EMPTY_BODY = "<p>No information available.</p>"


@dataclass
class DogRecord:
    entry_id: Any = None
    name: Optional[str] = None
    story: Optional[str] = None
    litter: Optional[str] = None
    birthday: Optional[str] = None
    breed: Optional[str] = None
    gender: Optional[str] = None
    size_when_grown: Optional[str] = None
    availability: str = AVAILABLE_NOW
    image_urls: list[str] = field(default_factory=list)

    def has_entry_id(self) -> bool:
        if self.entry_id is None:
            return False
        return str(self.entry_id).strip() != ""


# =========================================================
# Field Mapper
# =========================================================

def _first(raw: dict, keys: tuple) -> Any:
    for k in keys:
        v = raw.get(k)
        if v:
            return v
    return None

def _photo_url(photo) -> Optional[str]:
    if not isinstance(photo, dict):
        return None
    # File already carries the access token Cognito signs it with
    if photo.get("File"):
        return photo["File"]
    if photo.get("Id"):
        return COGNITO_FILE_URL.format(id=photo["Id"])
    return None

def extract_image_urls(raw: dict) -> list[str]:
    urls = []
    for key in PHOTO_FIELDS:
        photos = raw.get(key)
        if not isinstance(photos, list):
            continue
        for photo in photos:
            url = _photo_url(photo)
            if url:
                urls.append(url)
    return urls

def map_submission(raw: dict) -> DogRecord:
    """Map a raw Cognito entry to a DogRecord. Never raises; absent fields stay None."""
    entry_id = raw.get(ENTRY_ID_KEY)
    values = {attr: _first(raw, keys) for attr, keys in ALIASES.items()}
    values["availability"] = normalize_availability(values["availability"])

    record = DogRecord(entry_id=entry_id, image_urls=extract_image_urls(raw), **values)
    if not record.has_entry_id():
        warn(f"[mapping] no {ENTRY_ID_KEY} in submission; keys={sorted(raw.keys())}")
    debug(f"[mapping] entry={entry_id} images={len(record.image_urls)}")
    return record


# =========================================================
# Availability Normalizer
# =========================================================

def normalize_availability(value) -> str:
    if not value:
        return AVAILABLE_NOW
    v = str(value).lower()
    if "nursery" in v or "soon" in v:
        return AVAILABLE_SOON
    if "adopted" in v:
        return ADOPTED
    if "available" in v and "now" in v:
        return AVAILABLE_NOW
    # Unrecognized codes are kept as the form sent them
    return str(value)


# =========================================================
# Slug Deriver
# =========================================================

def derive_handle(entry_id) -> str:
    return f"dog-{entry_id}".lower()


# =========================================================
# Payload Builder
# =========================================================

def _details(record: DogRecord) -> list[tuple[str, Optional[str]]]:
    return [
        ("LITTER", record.litter),
        ("BIRTHDAY", record.birthday),
        ("BREED", record.breed),
        ("GENDER", record.gender),
        ("SIZE WHEN GROWN", record.size_when_grown),
        ("AVAILABILITY", record.availability),
    ]

def _labeled_block(label: str, value) -> str:
    return f"<b>{label}:</b><br>\n{value}<br><br>"

def build_body_html(record: DogRecord) -> str:
    blocks = []
    if record.story:
        blocks.append(f"<p>{record.story}</p>")
    blocks.extend(_labeled_block(label, value) for label, value in _details(record) if value)
    body = "\n\n".join(blocks).strip()
    return body or EMPTY_BODY

def build_tags(record: DogRecord) -> str:
    tags = [record.availability] if record.availability else []
    for label, value in (("Litter", record.litter),
                         ("Breed", record.breed),
                         ("Gender", record.gender)):
        if value:
            tags.append(f"{label}: {value}")
    return ", ".join(tags)

def build_product_payload(record: DogRecord, handle: str) -> dict:
    return {
        "title": record.name or f"Dog {record.entry_id}",
        "body_html": build_body_html(record),
        "handle": handle,
        "tags": build_tags(record),
        "images": [{"src": url} for url in record.image_urls],
        "status": PRODUCT_STATUS,
        "product_type": PRODUCT_TYPE,
    }

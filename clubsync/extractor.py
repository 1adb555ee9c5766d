"""
Extraction of club records from loosely-typed JSON dumps of the public
club directory. Several historical field-naming schemes are accepted.
"""
import json
from typing import Any, Dict, List, Optional, Sequence
from loguru import logger

from clubsync.config import STRICT_EXTRACTION
from clubsync.errors import ExtractionError, RecordExtractionError
from clubsync.models import ExtractedClub, ExtractionResult, RejectedRecord
from clubsync.text import clean_text

# Candidate keys per output field, in priority order
FIELD_ALIASES: Dict[str, Sequence[str]] = {
    "name": ("Name", "club_name", "name"),
    "logo_url": ("Image", "logo_url", "logoUrl", "imageUrl"),
    "phone": ("PhoneNumber", "phone", "phoneNumber"),
    "email": ("EmailAddress", "email", "contactEmail"),
    "website": ("Website", "website", "websiteUrl"),
    "contact_person": ("ContactPerson", "primaryContact"),
    "contact_role": ("ContactRole",),
}

# Alternate identifiers folded into additional_info
ID_ALIASES: Dict[str, Sequence[str]] = {
    "ClubId": ("ClubId", "PCAid", "clubId"),
    "DocId": ("DocId",),
    "SyncGuid": ("SyncGuid",),
}

ADDRESS_PARTS = ("Address1", "Address2", "Address3", "Town", "County", "Country", "Postcode")


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def resolve_field(item: Dict[str, Any], keys: Sequence[str]) -> Optional[str]:
    """Return the first present, non-empty value among `keys` as a string."""
    for key in keys:
        value = item.get(key)
        if _is_present(value):
            return str(value)
    return None


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = clean_text(value)
    return cleaned or None


def _build_address(item: Dict[str, Any]) -> Optional[str]:
    """Join the nested Address sub-fields with ', ', skipping empty parts."""
    address_obj = item.get("Address")
    if isinstance(address_obj, dict):
        parts = []
        for key in ADDRESS_PARTS:
            value = address_obj.get(key)
            if _is_present(value):
                cleaned = clean_text(str(value))
                if cleaned:
                    parts.append(cleaned)
        return ", ".join(parts) or None

    # Flat string address used by older dumps
    flat = resolve_field(item, ("Address", "address"))
    return _clean_optional(flat)


def _parse_coordinate(value: Any) -> Optional[float]:
    if not _is_present(value):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _build_additional_info(item: Dict[str, Any]) -> Optional[str]:
    parts = []
    for label, keys in ID_ALIASES.items():
        value = resolve_field(item, keys)
        if value is not None:
            parts.append(f"{label}: {clean_text(value)}")

    latlng = item.get("Latlng")
    if isinstance(latlng, dict):
        lat = _parse_coordinate(latlng.get("Lat"))
        lng = _parse_coordinate(latlng.get("Lng"))
        if lat is not None:
            parts.append(f"Lat: {lat}")
        if lng is not None:
            parts.append(f"Lng: {lng}")

    return "; ".join(parts) or None


def _slice_array(json_content: str) -> str:
    """Cut the text from the first '[' through the last ']' after it."""
    start = json_content.find("[")
    if start == -1:
        raise ExtractionError("no array found")
    end = json_content.rfind("]")
    if end < start:
        raise ExtractionError("array not closed")
    return json_content[start:end + 1]


def map_club(item: Dict[str, Any]) -> ExtractedClub:
    """
    Map one JSON object to an ExtractedClub.

    Args:
        item (Dict[str, Any]): Raw array element.

    Returns:
        ExtractedClub: Club with every field normalized; name may be empty.
    """
    name = clean_text(resolve_field(item, FIELD_ALIASES["name"]) or "")
    return ExtractedClub(
        name=name,
        address=_build_address(item),
        phone=_clean_optional(resolve_field(item, FIELD_ALIASES["phone"])),
        email=_clean_optional(resolve_field(item, FIELD_ALIASES["email"])),
        website=_clean_optional(resolve_field(item, FIELD_ALIASES["website"])),
        logo_url=_clean_optional(resolve_field(item, FIELD_ALIASES["logo_url"])),
        contact_person=_clean_optional(resolve_field(item, FIELD_ALIASES["contact_person"])),
        contact_role=_clean_optional(resolve_field(item, FIELD_ALIASES["contact_role"])),
        additional_info=_build_additional_info(item),
    )


def parse_club_records(json_content: str, strict: bool = STRICT_EXTRACTION) -> ExtractionResult:
    """
    Parse a text blob containing a JSON array of club objects.

    Leading and trailing noise around the array (markdown fences, log lines)
    is ignored. Elements that are not JSON objects are collected as rejected
    records, or raise RecordExtractionError when `strict` is set. Clubs whose
    name is empty after normalization are dropped silently.

    Args:
        json_content (str): Raw input text.
        strict (bool): Abort on the first malformed element.

    Returns:
        ExtractionResult: Extracted clubs and rejected elements.
    """
    payload = _slice_array(json_content)

    try:
        raw_clubs = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Failed to parse JSON: {e}") from e
    except RecursionError as e:
        raise ExtractionError(f"Failed to parse JSON: nesting too deep ({e})") from e

    if not isinstance(raw_clubs, list):
        raise ExtractionError("not an array")

    result = ExtractionResult()
    for index, item in enumerate(raw_clubs):
        if not isinstance(item, dict):
            reason = f"expected an object, got {type(item).__name__}"
            if strict:
                raise RecordExtractionError(index, reason)
            logger.debug(f"⚠️ Rejected record {index}: {reason}")
            result.rejected.append(RejectedRecord(index=index, reason=reason))
            continue

        club = map_club(item)
        if not club.name:
            logger.debug(f"⏭️ Dropped record {index} with empty name")
            continue
        result.clubs.append(club)

    return result


def extract_clubs_from_json(json_content: str) -> List[ExtractedClub]:
    """Extract the clubs from a JSON payload, discarding rejected elements."""
    return parse_club_records(json_content).clubs

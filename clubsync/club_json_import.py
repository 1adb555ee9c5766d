"""
Import of brand-new clubs from the platform's own club JSON export
(club_id, club_name, zone, physical_address, ...).
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loguru import logger

from clubsync.stores import ClubStore

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class InvalidClub:
    data: Dict[str, Any]
    errors: List[str]


@dataclass
class ProcessedClubs:
    valid_clubs: List[Dict[str, Any]] = field(default_factory=list)
    invalid_clubs: List[InvalidClub] = field(default_factory=list)
    missing_zones: List[str] = field(default_factory=list)


@dataclass
class ClubImportReport:
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    invalid_clubs: List[InvalidClub] = field(default_factory=list)
    missing_zones: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imported": self.imported,
            "skipped": self.skipped,
            "failed": self.failed,
            "invalidClubs": [{"data": c.data, "errors": c.errors} for c in self.invalid_clubs],
            "missingZones": list(self.missing_zones),
        }


def _text(item: Dict[str, Any], key: str) -> str:
    value = item.get(key)
    return str(value).strip() if value is not None else ""


def validate_club_data(club: Dict[str, Any]) -> List[str]:
    """
    Check the required fields of one club export entry.

    Returns:
        List[str]: Human-readable errors; empty when the entry is valid.
    """
    errors = []
    if not _text(club, "club_name"):
        errors.append("Club name is required")
    if not _text(club, "zone"):
        errors.append("Zone is required")
    if not _text(club, "physical_address"):
        errors.append("Physical address is required")

    email = _text(club, "email")
    if not email:
        errors.append("Email is required")
    elif not _EMAIL.match(email):
        errors.append("Valid email is required")
    return errors


def find_zone_id_by_name(zone_name: str, zones: List[Dict[str, str]]) -> Optional[str]:
    """Case-insensitive, whitespace-trimmed zone lookup."""
    wanted = zone_name.strip().lower()
    for zone in zones:
        if zone["name"].strip().lower() == wanted:
            return zone["id"]
    return None


def transform_club_data(club: Dict[str, Any], zone_id: str) -> Dict[str, Any]:
    """Convert an export entry to a club store document."""
    return {
        "name": club.get("club_name"),
        "zoneId": zone_id,
        "clubId": club.get("club_id"),
        "physicalAddress": club.get("physical_address"),
        "postalAddress": club.get("postal_address"),
        "email": club.get("email"),
        "phone": club.get("phone"),
        "websiteUrl": club.get("website_url"),
        "socialMediaUrl": club.get("social_media_url"),
        # Older screens still read `website`
        "website": club.get("website_url"),
    }


def process_clubs_from_json(clubs_data: List[Dict[str, Any]], zones: List[Dict[str, str]]) -> ProcessedClubs:
    """
    Validate export entries and resolve their zones.

    Args:
        clubs_data (List[Dict[str, Any]]): Export entries.
        zones (List[Dict[str, str]]): Known zones.

    Returns:
        ProcessedClubs: Store-ready documents, rejected entries with their
                        errors, and each unknown zone name once.
    """
    result = ProcessedClubs()
    for club in clubs_data:
        errors = validate_club_data(club)
        if errors:
            result.invalid_clubs.append(InvalidClub(data=club, errors=errors))
            continue

        zone_name = _text(club, "zone")
        zone_id = find_zone_id_by_name(zone_name, zones)
        if zone_id is None:
            if zone_name not in result.missing_zones:
                result.missing_zones.append(zone_name)
            result.invalid_clubs.append(InvalidClub(data=club, errors=[f"Zone '{zone_name}' not found"]))
            continue

        result.valid_clubs.append(transform_club_data(club, zone_id))
    return result


async def import_clubs_from_json(clubs_data: List[Dict[str, Any]], store: ClubStore) -> ClubImportReport:
    """
    Add the valid, not-yet-present clubs of an export to the store.

    Clubs already present by (name, zone) are skipped. A failed insert is
    logged and counted as failed; the remaining clubs are still imported.
    """
    logger.info(f"🎯 Starting import process for {len(clubs_data)} clubs")
    zones = await store.list_zones()
    logger.debug(f"📍 Found {len(zones)} zones")

    processed = process_clubs_from_json(clubs_data, zones)
    logger.info(
        f"📊 Valid: {len(processed.valid_clubs)}, invalid: {len(processed.invalid_clubs)}, "
        f"missing zones: {', '.join(processed.missing_zones) or 'none'}"
    )
    for invalid in processed.invalid_clubs:
        logger.debug(f"❌ {invalid.data.get('club_name')}: {', '.join(invalid.errors)}")

    report = ClubImportReport(invalid_clubs=processed.invalid_clubs, missing_zones=processed.missing_zones)
    report.failed = len(processed.invalid_clubs)

    for club in processed.valid_clubs:
        if await store.find_club(club["name"], club["zoneId"]) is not None:
            logger.debug(f"⏭️ Skipping {club['name']} - already exists")
            report.skipped += 1
            continue
        try:
            await store.add_club(club)
            report.imported += 1
            logger.debug(f"✅ Imported {club['name']}")
        except Exception as e:
            logger.warning(f"❌ Failed to import {club['name']}: {e}")
            report.failed += 1

    logger.info(f"🎉 Import completed: {report.imported} imported, {report.skipped} skipped, {report.failed} failed")
    return report

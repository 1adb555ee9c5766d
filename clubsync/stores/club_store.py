"""
Club store interface plus an in-memory implementation.
"""
from abc import ABC, abstractmethod
from dataclasses import fields, replace
from typing import Any, Dict, List, Optional
from uuid import uuid4

from loguru import logger

from clubsync.errors import ClubStoreError
from clubsync.models import ExistingClub

# Store document keys → ExistingClub attributes
FIELD_MAP = {
    "id": "id",
    "name": "name",
    "zoneId": "zone_id",
    "physicalAddress": "physical_address",
    "postalAddress": "postal_address",
    "phone": "phone",
    "email": "email",
    "websiteUrl": "website_url",
    "socialMediaUrl": "social_media_url",
    "logoUrl": "logo_url",
}

_CLUB_ATTRS = {f.name for f in fields(ExistingClub)}


def club_from_document(doc: Dict[str, Any]) -> ExistingClub:
    """Build an ExistingClub from a store document, ignoring unknown keys."""
    kwargs = {}
    for key, value in doc.items():
        attr = FIELD_MAP.get(key, key)
        if attr in _CLUB_ATTRS:
            kwargs[attr] = value
    if not kwargs.get("id") or kwargs.get("name") is None:
        raise ClubStoreError(f"Club document is missing id or name: {doc}")
    kwargs["id"] = str(kwargs["id"])
    return ExistingClub(**kwargs)


class ClubStore(ABC):
    """Authoritative club and zone records."""

    @abstractmethod
    async def list_clubs(self) -> List[ExistingClub]:
        """Return every club in a stable order."""

    @abstractmethod
    async def update_club(self, club_id: str, data: Dict[str, Any]) -> ExistingClub:
        """Apply a partial update keyed by store document keys."""

    @abstractmethod
    async def add_club(self, data: Dict[str, Any]) -> ExistingClub:
        """Insert a new club and return it with its generated id."""

    @abstractmethod
    async def find_club(self, name: str, zone_id: Optional[str]) -> Optional[ExistingClub]:
        """Return the club with exactly this name in this zone, if any."""

    @abstractmethod
    async def list_zones(self) -> List[Dict[str, str]]:
        """Return zones as {"id": ..., "name": ...} dicts."""


class InMemoryClubStore(ClubStore):
    """
    Dict-backed club store. Iteration follows insertion order.
    """

    def __init__(self, clubs: Optional[List[ExistingClub]] = None, zones: Optional[List[Dict[str, str]]] = None):
        self._clubs: Dict[str, ExistingClub] = {}
        self._extra: Dict[str, Dict[str, Any]] = {}
        for club in clubs or []:
            self._clubs[club.id] = club
        self._zones: List[Dict[str, str]] = list(zones or [])

    async def list_clubs(self) -> List[ExistingClub]:
        return list(self._clubs.values())

    async def update_club(self, club_id: str, data: Dict[str, Any]) -> ExistingClub:
        club = self._clubs.get(club_id)
        if club is None:
            raise ClubStoreError(f"Club {club_id} not found")

        changes = {}
        for key, value in data.items():
            attr = FIELD_MAP.get(key, key)
            if attr == "id":
                continue
            if attr in _CLUB_ATTRS:
                changes[attr] = value
            else:
                # Keys without a model attribute are kept as-is
                self._extra.setdefault(club_id, {})[key] = value

        updated = replace(club, **changes)
        self._clubs[club_id] = updated
        logger.debug(f"💾 Updated club {club_id}: {sorted(data)}")
        return updated

    def _put_document(self, doc: Dict[str, Any]) -> ExistingClub:
        """Store a document, keeping keys without a model attribute as extras."""
        club = club_from_document(doc)
        if club.id in self._clubs:
            raise ClubStoreError(f"Club {club.id} already exists")
        self._clubs[club.id] = club
        extra = {k: v for k, v in doc.items() if FIELD_MAP.get(k, k) not in _CLUB_ATTRS}
        if extra:
            self._extra[club.id] = extra
        return club

    async def add_club(self, data: Dict[str, Any]) -> ExistingClub:
        doc = dict(data)
        doc["id"] = str(doc.get("id") or uuid4().hex)
        club = self._put_document(doc)
        logger.debug(f"➕ Added club {club.name} ({club.id})")
        return club

    async def find_club(self, name: str, zone_id: Optional[str]) -> Optional[ExistingClub]:
        for club in self._clubs.values():
            if club.name == name and club.zone_id == zone_id:
                return club
        return None

    async def list_zones(self) -> List[Dict[str, str]]:
        return list(self._zones)

    def extra_fields(self, club_id: str) -> Dict[str, Any]:
        """Stored keys that have no ExistingClub attribute."""
        return dict(self._extra.get(club_id, {}))

import pytest
from unittest.mock import AsyncMock

from clubsync.club_json_import import (
    find_zone_id_by_name,
    import_clubs_from_json,
    process_clubs_from_json,
    transform_club_data,
    validate_club_data,
)
from clubsync.models import ExistingClub
from clubsync.stores import InMemoryClubStore

ZONES = [{"id": "z1", "name": "Central Zone"}, {"id": "z2", "name": "North West Zone"}]

BEALIBA = {
    "club_id": 101,
    "club_name": "Bealiba Pony Club",
    "zone": "Central Zone",
    "physical_address": "Park Lane, Bealiba VIC 3475",
    "postal_address": "PO Box 123, Bealiba VIC 3475",
    "email": "secretary@bealibaponyclub.com.au",
    "phone": "03 5468 1234",
    "website_url": "https://www.bealibaponyclub.com.au",
    "social_media_url": "https://www.facebook.com/bealibaponyclub",
}

AVOCA = {
    "club_id": 102,
    "club_name": "Avoca Pony Club",
    "zone": "Central Zone",
    "physical_address": "Recreation Reserve, High Street, Avoca VIC 3467",
    "email": "info@avocaponyclub.org.au",
}


def test_validate_club_data_accepts_complete_entry():
    assert validate_club_data(BEALIBA) == []


def test_validate_club_data_reports_every_problem():
    errors = validate_club_data({"club_name": " ", "email": "not-an-email"})
    assert errors == [
        "Club name is required",
        "Zone is required",
        "Physical address is required",
        "Valid email is required",
    ]
    assert "Email is required" in validate_club_data({})


def test_find_zone_id_by_name_ignores_case_and_padding():
    assert find_zone_id_by_name("  central ZONE ", ZONES) == "z1"
    assert find_zone_id_by_name("Southern", ZONES) is None


def test_transform_club_data_mirrors_website():
    doc = transform_club_data(BEALIBA, "z1")
    assert doc["name"] == "Bealiba Pony Club"
    assert doc["zoneId"] == "z1"
    assert doc["physicalAddress"] == BEALIBA["physical_address"]
    assert doc["website"] == doc["websiteUrl"] == BEALIBA["website_url"]


def test_process_clubs_collects_missing_zones_once():
    orphan_a = dict(AVOCA, club_name="A", zone="Southern")
    orphan_b = dict(AVOCA, club_name="B", zone="Southern")

    result = process_clubs_from_json([BEALIBA, orphan_a, orphan_b], ZONES)

    assert [c["name"] for c in result.valid_clubs] == ["Bealiba Pony Club"]
    assert len(result.invalid_clubs) == 2
    assert result.invalid_clubs[0].errors == ["Zone 'Southern' not found"]
    assert result.missing_zones == ["Southern"]


@pytest.mark.asyncio
async def test_import_skips_existing_clubs():
    store = InMemoryClubStore(
        clubs=[ExistingClub(id="c1", name="Avoca Pony Club", zone_id="z1")],
        zones=ZONES,
    )

    report = await import_clubs_from_json([BEALIBA, AVOCA], store)

    assert report.imported == 1
    assert report.skipped == 1
    assert report.failed == 0
    names = [c.name for c in await store.list_clubs()]
    assert names == ["Avoca Pony Club", "Bealiba Pony Club"]
    added = await store.find_club("Bealiba Pony Club", "z1")
    assert added.phone == "03 5468 1234"
    assert store.extra_fields(added.id)["clubId"] == 101


@pytest.mark.asyncio
async def test_failed_insert_is_counted_and_import_continues():
    store = InMemoryClubStore(zones=ZONES)
    store.add_club = AsyncMock(side_effect=[RuntimeError("quota exceeded"), None])

    report = await import_clubs_from_json([BEALIBA, AVOCA], store)

    assert report.imported == 1
    assert report.failed == 1
    assert store.add_club.await_count == 2

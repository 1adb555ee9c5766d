import json

import pytest

from clubsync.errors import ExtractionError, RecordExtractionError
from clubsync.extractor import extract_clubs_from_json, parse_club_records


def test_minimal_record():
    clubs = extract_clubs_from_json('[{"Name":"Riverside Pony Club","PhoneNumber":"0400000000"}]')
    assert len(clubs) == 1
    assert clubs[0].name == "Riverside Pony Club"
    assert clubs[0].phone == "0400000000"


def test_empty_names_are_dropped():
    clubs = extract_clubs_from_json('[{"Name":""},{"Name":"Valid Club"},{"Name":"  !! "}]')
    assert [c.name for c in clubs] == ["Valid Club"]


def test_empty_array_yields_no_clubs():
    assert extract_clubs_from_json("[]") == []


def test_noise_around_array_is_ignored():
    text = 'Here is the data:\n```json\n[{"club_name": "Avoca Pony Club"}]\n```\nDone.'
    clubs = extract_clubs_from_json(text)
    assert [c.name for c in clubs] == ["Avoca Pony Club"]


def test_missing_open_bracket():
    with pytest.raises(ExtractionError, match="no array found"):
        extract_clubs_from_json("not json at all")


def test_missing_close_bracket():
    with pytest.raises(ExtractionError, match="array not closed"):
        extract_clubs_from_json('[{"Name": "Avoca"}')


def test_invalid_json_carries_parser_message():
    with pytest.raises(ExtractionError, match="Failed to parse JSON"):
        extract_clubs_from_json("[{Name: Avoca}]")


def test_alias_priority_first_non_empty_wins():
    payload = [
        {"Name": "Primary", "club_name": "Secondary"},
        {"Name": "", "club_name": "Fallback"},
        {
            "name": "Third",
            "logo_url": "logo.png",
            "imageUrl": "other.png",
            "phoneNumber": "0411 111 111",
            "contactEmail": "info@third.org",
            "websiteUrl": "third.org",
        },
    ]
    clubs = extract_clubs_from_json(json.dumps(payload))
    assert [c.name for c in clubs] == ["Primary", "Fallback", "Third"]
    third = clubs[2]
    assert third.logo_url == "logo.png"
    assert third.phone == "0411 111 111"
    assert third.email == "info@third.org"
    assert third.website == "third.org"


def test_address_is_built_from_nested_parts():
    payload = [{
        "Name": "Avoca",
        "Address": {
            "Address1": "Recreation Reserve",
            "Address2": "",
            "Address3": None,
            "Town": "Avoca",
            "County": "VIC",
            "Country": "Australia",
            "Postcode": "3467",
        },
    }]
    club = extract_clubs_from_json(json.dumps(payload))[0]
    assert club.address == "Recreation Reserve, Avoca, VIC, Australia, 3467"


def test_flat_address_string_is_accepted():
    club = extract_clubs_from_json('[{"name": "Avoca", "address": "High St,  Avoca"}]')[0]
    assert club.address == "High St Avoca"


def test_ids_and_coordinates_fold_into_additional_info():
    payload = [{
        "Name": "Bealiba",
        "ClubId": 12,
        "SyncGuid": "abc-123",
        "Latlng": {"Lat": "-37.1", "Lng": "144.2"},
    }]
    club = extract_clubs_from_json(json.dumps(payload))[0]
    assert club.additional_info == "ClubId: 12; SyncGuid: abc-123; Lat: -37.1; Lng: 144.2"


def test_unparsable_coordinates_are_left_out():
    payload = [{"Name": "Bealiba", "Latlng": {"Lat": "north", "Lng": "144.2"}}]
    club = extract_clubs_from_json(json.dumps(payload))[0]
    assert club.additional_info == "Lng: 144.2"


def test_contact_fields_are_normalized():
    payload = [{
        "Name": "  Riverside   Pony Club! ",
        "ContactPerson": "Jo  Smith",
        "ContactRole": "Secretary",
        "EmailAddress": " jo@riverside.org ",
    }]
    club = extract_clubs_from_json(json.dumps(payload))[0]
    assert club.name == "Riverside Pony Club"
    assert club.contact_person == "Jo Smith"
    assert club.contact_role == "Secretary"
    assert club.email == "jo@riverside.org"


def test_non_object_elements_are_rejected_and_reported():
    result = parse_club_records('[{"Name": "A"}, 5, "x"]', strict=False)
    assert [c.name for c in result.clubs] == ["A"]
    assert [r.index for r in result.rejected] == [1, 2]


def test_strict_mode_aborts_on_first_bad_element():
    with pytest.raises(RecordExtractionError) as exc_info:
        parse_club_records('[{"Name": "A"}, 5]', strict=True)
    assert exc_info.value.index == 1


def test_deeply_nested_array_is_an_extraction_error():
    with pytest.raises(ExtractionError, match="Failed to parse JSON"):
        extract_clubs_from_json("[" * 100000 + "]" * 100000)

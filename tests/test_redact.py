from __future__ import annotations

import pytest

from reliefmap._redact import mask_phone_numbers, redact_request_item


def test_redact_request_item_masks_personal_fields() -> None:
    item = {
        "location": "Chengannur",
        "requestee": "A. Person",
        "Requestee_Phone": "+91 90000 00000",
        "district": "alp",
    }

    redacted = redact_request_item(item)
    assert redacted["location"] == "Chengannur"
    assert redacted["requestee"] == "<redacted>"
    assert redacted["Requestee_Phone"] == "<redacted>"
    assert redacted["district"] == "alp"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Call 9447012345 for boat", "Call <phone> for boat"),
        ("contact +91 90000 00000 asap", "contact <phone> asap"),
        ("0477 2230000 landline", "<phone> landline"),
        ("ward 12, 45 people stranded", "ward 12, 45 people stranded"),
        ("since 2018-08-17 10:30", "since 2018-08-17 10:30"),
        ("pincode 689121", "pincode 689121"),
    ],
)
def test_mask_phone_numbers_in_free_text(text: str, expected: str) -> None:
    assert mask_phone_numbers(text) == expected


def test_redact_request_item_masks_numbers_in_free_text_fields() -> None:
    redacted = redact_request_item({"needothers": "Insulin needed, call 9447012345", "needwater": True})

    assert redacted == {"needothers": "Insulin needed, call <phone>", "needwater": True}


def test_redact_request_item_masks_integer_phone_numbers() -> None:
    redacted = redact_request_item({"id": 4021, "alt_number": 9447012345, "latlng_accuracy": 12.5})

    assert redacted == {"id": 4021, "alt_number": "<phone>", "latlng_accuracy": 12.5}


def test_redact_request_item_summarises_nested_values() -> None:
    redacted = redact_request_item({"meta": {"phone": "1"}, "tags": ["a", "b"], "blob": b"\x00"})

    assert redacted == {"meta": {"phone": "<redacted>"}, "tags": "<list:2>", "blob": "<bytes>"}


def test_redact_request_item_truncates_long_text() -> None:
    redacted = redact_request_item({"detailmed": "x" * 400})

    assert len(redacted["detailmed"]) == 161
    assert redacted["detailmed"].endswith("…")


def test_redact_request_item_handles_non_mapping_entries() -> None:
    assert redact_request_item("caller 9447012345") == "caller <phone>"
    assert redact_request_item(None) is None

from __future__ import annotations

import pytest
from pydantic import ValidationError

from parkkean.models import CanonicalStatus, LiveLot, StoredLot


def test_live_lot_code_is_trimmed_and_upper_cased() -> None:
    lot = LiveLot(code="  lib_hall ", last_updated=1)
    assert lot.code == "LIB_HALL"
    assert lot.name == "LIB_HALL"


def test_live_lot_rejects_blank_code() -> None:
    with pytest.raises(ValidationError):
        LiveLot(code="   ", last_updated=1)


def test_live_lot_is_frozen() -> None:
    lot = LiveLot(code="A", last_updated=1)
    with pytest.raises(ValidationError):
        lot.occupancy = 3  # type: ignore[misc]


def test_stored_lot_serializes_camel_case_for_status_api() -> None:
    lot = StoredLot(id=1, code="A", name="Lot A", walk_time=4, full_by="08:30", last_updated=5)

    dumped = lot.model_dump(mode="json", by_alias=True)

    assert dumped["walkTime"] == 4
    assert dumped["fullBy"] == "08:30"
    assert dumped["lastUpdated"] == 5
    assert dumped["lastReport"] is None
    assert dumped["status"] == "OPEN"


def test_stored_lot_accepts_camel_case_input() -> None:
    lot = StoredLot.model_validate({"id": 2, "code": "B", "name": "Lot B", "walkTime": 6, "status": "FULL"})
    assert lot.walk_time == 6
    assert lot.status == CanonicalStatus.FULL


def test_canonical_status_parse() -> None:
    assert CanonicalStatus.parse("LIMITED") == CanonicalStatus.LIMITED
    assert CanonicalStatus.parse("limited") is None
    assert CanonicalStatus.parse(3) is None

from __future__ import annotations

from parkkean.models import CanonicalStatus, LiveLot, LotReport, StoredLot
from parkkean.state.policy import prefer_live, prefer_live_status
from parkkean.state.reconcile import index_live_lots, reconcile, reconcile_snapshot


def _stored(**overrides: object) -> StoredLot:
    values: dict[str, object] = {
        "id": 1,
        "code": "X1",
        "name": "Lot X1",
        "capacity": 100,
        "occupancy": 20,
        "status": CanonicalStatus.OPEN,
        "walk_time": 5,
        "full_by": "09:00",
        "last_updated": 1_000,
        "last_report": LotReport(
            id=9,
            lot_id=1,
            reported_status=CanonicalStatus.LIMITED,
            note="busy",
            created_at=900,
            user="sam",
        ),
    }
    values.update(overrides)
    return StoredLot(**values)


def _live(**overrides: object) -> LiveLot:
    values: dict[str, object] = {"code": "x1", "last_updated": 2_000}
    values.update(overrides)
    return LiveLot(**values)


def test_case_insensitive_match_overrides_status() -> None:
    merged = reconcile([_stored()], [_live(status=CanonicalStatus.FULL)])

    assert merged[0].status == CanonicalStatus.FULL
    assert merged[0].last_updated == 2_000


def test_stored_lowercase_code_still_matches() -> None:
    merged = reconcile([_stored(code="x1")], [_live(occupancy=77)])
    assert merged[0].occupancy == 77


def test_unmatched_lot_passes_through_unchanged() -> None:
    stored = _stored(id=2, code="OTHER")

    merged = reconcile([stored], [_live(status=CanonicalStatus.FULL)])

    assert merged[0] is stored


def test_unknown_live_values_keep_stored_values() -> None:
    stored = _stored()

    merged = reconcile([stored], [_live()])[0]

    assert merged.capacity == stored.capacity
    assert merged.occupancy == stored.occupancy
    assert merged.walk_time == stored.walk_time
    assert merged.full_by == stored.full_by
    assert merged.status == CanonicalStatus.OPEN


def test_identity_and_reports_are_never_overridden() -> None:
    stored = _stored()
    live = _live(name="Feed Name", occupancy=99, capacity=120, walk_time=1, full_by="07:45")

    merged = reconcile([stored], [live])[0]

    assert merged.id == stored.id
    assert merged.code == "X1"
    assert merged.name == "Lot X1"
    assert merged.last_report == stored.last_report
    assert (merged.occupancy, merged.capacity, merged.walk_time, merged.full_by) == (99, 120, 1, "07:45")


def test_merge_does_not_mutate_stored_lot() -> None:
    stored = _stored()
    reconcile([stored], [_live(occupancy=99)])
    assert stored.occupancy == 20


def test_duplicate_live_codes_last_entry_wins() -> None:
    live = [_live(occupancy=10), _live(code="X1", occupancy=30)]

    assert index_live_lots(live)["X1"].occupancy == 30
    assert reconcile([_stored()], live)[0].occupancy == 30


def test_empty_snapshot_merges_nothing() -> None:
    stored = [_stored()]

    result = reconcile_snapshot(stored, [])

    assert result.lots == stored
    assert result.updates == []
    assert reconcile_snapshot(stored, None).updates == []


def test_updates_only_for_matched_lots() -> None:
    stored = [_stored(), _stored(id=2, code="Y2", name="Lot Y2")]

    result = reconcile_snapshot(stored, [_live(occupancy=95, capacity=100, status=CanonicalStatus.LIMITED)])

    assert result.matched_ids == [1]
    assert result.updates[0].fields() == {
        "capacity": 100,
        "occupancy": 95,
        "status": CanonicalStatus.LIMITED,
        "walk_time": 5,
        "full_by": "09:00",
        "last_updated": 2_000,
    }
    assert result.lots[1] is stored[1]


def test_policy_helpers() -> None:
    assert prefer_live(None, 4) == 4
    assert prefer_live(0, 4) == 0
    assert prefer_live_status("FULL", CanonicalStatus.OPEN) == CanonicalStatus.FULL
    assert prefer_live_status("SORT OF", CanonicalStatus.OPEN) == CanonicalStatus.OPEN
    assert prefer_live_status(None, CanonicalStatus.LIMITED) == CanonicalStatus.LIMITED

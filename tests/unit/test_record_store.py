import json
from pathlib import Path

import pytest

from core.errors import NotFound, ValidationFailure
from persistence.models import IntakeRecord
from persistence.record_store import BoundedRecordStore, StoreSpec, now_iso, parse_limit


def _intake_store(path: Path, *, cap: int = 200, page_ceiling: int = 50) -> BoundedRecordStore:
    spec = StoreSpec(
        name="intake",
        model=IntakeRecord,
        cap=cap,
        id_prefix="intake",
        created_field="received_at",
    )
    return BoundedRecordStore(spec, path, page_ceiling=page_ceiling)


def test_append_assigns_id_and_timestamp(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json")
    record = store.append({"plant_name": "Tomato"})
    store.close()

    assert record.id.startswith("intake_")
    assert record.received_at.endswith("Z")
    assert record.plant_name == "Tomato"


def test_append_keeps_most_recent_first_and_trims_to_cap(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json", cap=200, page_ceiling=200)
    store.append({"plantName": "Tomato-A"})
    store.append({"plantName": "Tomato-B"})
    for index in range(1, 206):
        store.append({"plantName": f"Tomato-{index}"})
    store.close()

    records = store.list(200)
    assert len(store) == 200
    assert len(records) == 200
    assert records[0].plant_name == "Tomato-205"
    assert records[-1].plant_name == "Tomato-6"
    assert all(record.plant_name not in {"Tomato-A", "Tomato-B"} for record in store)


def test_cap_of_one_keeps_only_latest(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json", cap=1)
    store.append({"plantName": "Basil"})
    store.append({"plantName": "Mint"})
    store.close()

    assert [record.plant_name for record in store] == ["Mint"]


def test_append_rejects_invalid_record_without_change(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json")
    store.append({"plantName": "Basil"})

    with pytest.raises(ValidationFailure) as excinfo:
        store.append({"plantName": ""})
    store.close()

    assert len(store) == 1
    assert any("plant_name" in issue.path or "plantName" in issue.path for issue in excinfo.value.issues)


def test_list_applies_default_and_ceiling(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json")
    for index in range(60):
        store.append({"plantName": f"Pepper-{index}"})
    store.close()

    assert len(store.list()) == 20
    assert len(store.list("5")) == 5
    assert len(store.list("1000")) == 50
    assert len(store.list("abc")) == 20
    assert len(store.list("-3")) == 20


def test_list_on_empty_store(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json")
    store.close()

    assert store.list() == []
    assert store.list("10") == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 20),
        ("", 20),
        ("abc", 20),
        ("0", 20),
        ("-1", 20),
        ("nan", 20),
        ("inf", 20),
        ("0.5", 20),
        ("3.9", 3),
        ("7", 7),
        (7, 7),
        ("50", 50),
        ("51", 50),
        (True, 20),
    ],
)
def test_parse_limit(raw, expected) -> None:
    assert parse_limit(raw) == expected


def test_parse_limit_custom_bounds() -> None:
    assert parse_limit(None, default=10, ceiling=5) == 5
    assert parse_limit("300", default=20, ceiling=200) == 200


def test_now_iso_format() -> None:
    stamp = now_iso()
    assert stamp.endswith("Z")
    assert "." in stamp
    assert len(stamp.split(".")[-1]) == 4


def test_update_unknown_id_raises_not_found(sop_store) -> None:
    with pytest.raises(NotFound):
        sop_store.update("sop_missing", lambda record: {"name": "Renamed"})


def test_update_scoped_to_owner(sop_store) -> None:
    record = sop_store.append({"owner_id": "alice", "name": "Veg feed", "stage": "veg"})

    with pytest.raises(NotFound):
        sop_store.update(record.id, lambda current: {"name": "Stolen"}, owner_id="bob")

    updated = sop_store.update(record.id, lambda current: {"name": "Veg feed v2"}, owner_id="alice")
    assert updated.id == record.id
    assert updated.name == "Veg feed v2"
    assert updated.created_at == record.created_at
    assert updated.updated_at > record.updated_at
    assert sop_store.get(record.id).name == "Veg feed v2"


def test_update_mutator_failure_leaves_store_unchanged(sop_store) -> None:
    record = sop_store.append({"owner_id": "alice", "name": "Veg feed", "stage": "veg"})

    def explode(current):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        sop_store.update(record.id, explode)

    assert sop_store.get(record.id) == record
    assert len(sop_store) == 1


def test_update_rejects_invalid_changes(sop_store) -> None:
    record = sop_store.append({"owner_id": "alice", "name": "Veg feed", "stage": "veg"})

    with pytest.raises(ValidationFailure):
        sop_store.update(record.id, lambda current: {"name": "x"})

    assert sop_store.get(record.id).name == "Veg feed"


def test_flush_writes_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "intake.json"
    store = _intake_store(path)
    store.append({"plantName": "Basil", "roomName": "Veg A"})
    store.append({"plantName": "Mint"})
    assert store.drain(timeout=5)
    store.close()

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [item["plantName"] for item in payload] == ["Mint", "Basil"]
    assert payload[1]["roomName"] == "Veg A"
    assert "receivedAt" in payload[0]
    assert not path.with_suffix(".json.tmp").exists()


def test_reload_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "intake.json"
    store = _intake_store(path)
    first = store.append({"plantName": "Basil"})
    second = store.append({"plantName": "Mint"})
    store.close()

    reopened = _intake_store(path)
    assert reopened.load() == "loaded"
    reopened.close()

    assert reopened.snapshot() == [second, first]


def test_flush_failure_does_not_roll_back_memory(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = _intake_store(blocker / "intake.json")

    record = store.append({"plantName": "Basil"})
    store.drain(timeout=5)
    stats = store.stats()
    store.close()

    assert store.get(record.id) == record
    assert stats.flush_failures >= 1
    assert stats.as_dict()["flushFailures"] >= 1


def test_stats_reports_counts(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json", cap=3)
    assert store.load() == "missing"
    store.append({"plantName": "Basil"})
    store.drain(timeout=5)
    stats = store.stats().as_dict()
    store.close()

    assert stats["name"] == "intake"
    assert stats["count"] == 1
    assert stats["cap"] == 3
    assert stats["loadStatus"] == "missing"
    assert stats["flushes"] >= 1
    assert stats["flushFailures"] == 0


def test_owner_listing_requires_owner_field(tmp_path: Path) -> None:
    store = _intake_store(tmp_path / "intake.json")
    store.append({"plantName": "Basil"})
    store.close()

    with pytest.raises(TypeError):
        store.list_for_owner("alice")


def test_closed_store_rejects_writes_without_change(tmp_path: Path, sop_store) -> None:
    intake = _intake_store(tmp_path / "intake.json")
    intake.append({"plantName": "Basil"})
    intake.close()

    with pytest.raises(RuntimeError):
        intake.append({"plantName": "Mint"})
    assert [record.plant_name for record in intake] == ["Basil"]

    record = sop_store.append({"owner_id": "alice", "name": "Veg feed", "stage": "veg"})
    sop_store.close()

    with pytest.raises(RuntimeError):
        sop_store.update(record.id, lambda current: {"name": "Veg feed v2"})
    assert sop_store.get(record.id).name == "Veg feed"

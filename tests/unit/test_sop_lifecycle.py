import json
from pathlib import Path

import pytest

from core.errors import InvalidTransition, NotFound
from persistence.models import SopRecord
from persistence.record_store import BoundedRecordStore, StoreSpec
from services.sop_lifecycle import SopLifecycle, can_transition


@pytest.fixture
def lifecycle(sop_store) -> SopLifecycle:
    return SopLifecycle(sop_store)


def test_create_starts_private(lifecycle: SopLifecycle) -> None:
    record = lifecycle.create("alice", "Veg feed", "veg", "EC 1.4")

    assert record.status == "private"
    assert record.owner_id == "alice"
    assert record.created_at == record.updated_at
    assert record.submitted_at is None


def test_submit_moves_to_submitted(lifecycle: SopLifecycle) -> None:
    record = lifecycle.create("alice", "Veg feed", "veg")
    submitted = lifecycle.submit(record.id, "alice")

    assert submitted.status == "submitted"
    assert submitted.submitted_at == submitted.updated_at
    assert submitted.updated_at > record.updated_at
    assert submitted.created_at == record.created_at


def test_submit_twice_is_invalid(lifecycle: SopLifecycle) -> None:
    record = lifecycle.create("alice", "Veg feed", "veg")
    lifecycle.submit(record.id, "alice")

    with pytest.raises(InvalidTransition) as excinfo:
        lifecycle.submit(record.id, "alice")

    assert excinfo.value.current == "submitted"


def test_submit_by_other_owner_is_not_found(lifecycle: SopLifecycle, sop_store) -> None:
    record = lifecycle.create("alice", "Veg feed", "veg")

    with pytest.raises(NotFound):
        lifecycle.submit(record.id, "bob")

    assert sop_store.get(record.id).status == "private"


def test_submit_unknown_id(lifecycle: SopLifecycle) -> None:
    with pytest.raises(NotFound):
        lifecycle.submit("sop_missing", "alice")


def test_review_transitions(lifecycle: SopLifecycle) -> None:
    first = lifecycle.create("alice", "Veg feed", "veg")
    second = lifecycle.create("alice", "Flush", "flower")
    lifecycle.submit(first.id, "alice")
    lifecycle.submit(second.id, "alice")

    approved = lifecycle.approve(first.id)
    rejected = lifecycle.reject(second.id)

    assert approved.status == "approved"
    assert approved.approved_at == approved.updated_at
    assert rejected.status == "rejected"
    with pytest.raises(InvalidTransition):
        lifecycle.reject(first.id)


def test_private_sop_cannot_be_approved(lifecycle: SopLifecycle) -> None:
    record = lifecycle.create("alice", "Veg feed", "veg")

    with pytest.raises(InvalidTransition):
        lifecycle.approve(record.id)


def test_can_transition_table() -> None:
    assert can_transition("private", "submitted")
    assert can_transition("submitted", "approved")
    assert can_transition("submitted", "rejected")
    assert not can_transition("private", "approved")
    assert not can_transition("approved", "private")
    assert not can_transition("unknown", "submitted")


def test_list_for_owner_newest_update_first(lifecycle: SopLifecycle) -> None:
    older = lifecycle.create("alice", "Veg feed", "veg")
    newer = lifecycle.create("alice", "Flush", "flower")
    lifecycle.create("bob", "IPM", "veg")

    assert [record.id for record in lifecycle.list_for_owner("alice")] == [newer.id, older.id]

    lifecycle.submit(older.id, "alice")
    listed = lifecycle.list_for_owner("alice")

    assert [record.id for record in listed] == [older.id, newer.id]
    assert all(record.owner_id == "alice" for record in listed)
    assert lifecycle.list_for_owner("carol") == []


def test_list_for_owner_respects_limit(lifecycle: SopLifecycle) -> None:
    for index in range(5):
        lifecycle.create("alice", f"SOP {index}", "veg")

    assert len(lifecycle.list_for_owner("alice", "2")) == 2
    assert len(lifecycle.list_for_owner("alice", "junk")) == 5


def test_equal_update_times_keep_insertion_order(tmp_path: Path) -> None:
    spec = StoreSpec(
        name="sops",
        model=SopRecord,
        cap=100,
        id_prefix="sop",
        created_field="created_at",
        updated_field="updated_at",
        owner_field="owner_id",
    )
    store = BoundedRecordStore(spec, tmp_path / "sops.json", clock=lambda: "2024-01-01T00:00:00.000Z")
    lifecycle = SopLifecycle(store)
    older = lifecycle.create("alice", "Veg feed", "veg")
    newer = lifecycle.create("alice", "Flush", "flower")
    store.close()

    assert [record.id for record in lifecycle.list_for_owner("alice")] == [newer.id, older.id]


def test_loaded_sop_without_offset_lists_with_new_ones(lifecycle: SopLifecycle, sop_store) -> None:
    sop_store.path.write_text(
        json.dumps(
            [
                {
                    "id": "sop_legacy",
                    "ownerId": "alice",
                    "name": "Legacy feed",
                    "stage": "veg",
                    "createdAt": "2024-01-01T00:00:20",
                    "updatedAt": "2024-01-01T00:00:30",
                }
            ]
        ),
        encoding="utf-8",
    )
    assert sop_store.load() == "loaded"

    fresh = lifecycle.create("alice", "Veg feed", "veg")

    assert [record.id for record in lifecycle.list_for_owner("alice")] == ["sop_legacy", fresh.id]

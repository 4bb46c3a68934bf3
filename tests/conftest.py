# tests/conftest.py
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from core.config import Settings
from persistence.models import SopRecord
from persistence.record_store import BoundedRecordStore, StoreSpec


class StepClock:
    """Deterministic ISO timestamps, one second apart."""

    def __init__(self, start: int = 0) -> None:
        self.tick = start

    def __call__(self) -> str:
        value = self.tick
        self.tick += 1
        minutes, seconds = divmod(value, 60)
        hours, minutes = divmod(minutes, 60)
        return f"2024-01-01T{hours:02d}:{minutes:02d}:{seconds:02d}.000Z"


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", rate_limit_enabled=False)


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def sop_store(tmp_path: Path, clock: StepClock):
    spec = StoreSpec(
        name="sops",
        model=SopRecord,
        cap=100,
        id_prefix="sop",
        created_field="created_at",
        updated_field="updated_at",
        owner_field="owner_id",
    )
    store = BoundedRecordStore(spec, tmp_path / "sops.json", clock=clock)
    yield store
    store.close()

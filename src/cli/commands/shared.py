"""Shared helpers for CLI subcommands."""

from __future__ import annotations

import json
from typing import Any

import typer
from pydantic import BaseModel

from core.config import get_settings
from persistence.manager import SNAPSHOT_FILES, build_specs
from persistence.snapshot import SnapshotLoad, load_snapshot


def json_dumps(payload: object) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def emit_json(data: Any) -> None:
    typer.echo(json_dumps(data))


def store_names() -> list[str]:
    return list(SNAPSHOT_FILES)


def read_store(name: str) -> SnapshotLoad:
    """Load one snapshot read-only, without starting a write queue."""
    if name not in SNAPSHOT_FILES:
        raise typer.BadParameter(
            f"Unknown store: {name} (expected one of {', '.join(SNAPSHOT_FILES)})"
        )
    settings = get_settings()
    spec = build_specs(settings)[name]
    path = settings.data_dir / SNAPSHOT_FILES[name]
    return load_snapshot(path, spec.model, cap=spec.cap)


def record_json(record: BaseModel) -> dict[str, Any]:
    return record.model_dump(by_alias=True, mode="json")


def preview(text: str, limit: int = 60) -> str:
    collapsed = " ".join(text.split())
    if len(collapsed) <= limit:
        return collapsed
    return collapsed[: limit - 3] + "..."

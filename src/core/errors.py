"""Error taxonomy shared by stores, services and the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


class PlantPilotError(Exception):
    """Base class for domain errors."""


class ValidationFailure(PlantPilotError):
    """Caller supplied a malformed create/update payload."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.issues = list(issues)


class NotFound(PlantPilotError):
    """Referenced record (optionally owner-scoped) does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class InvalidTransition(PlantPilotError):
    """Status change not allowed from the record's current status."""

    def __init__(self, record_id: str, current: str, target: str) -> None:
        super().__init__(f"Cannot move {record_id} from {current} to {target}")
        self.record_id = record_id
        self.current = current
        self.target = target


class PersistenceFailure(PlantPilotError):
    """A flush to durable storage failed."""


class LoadCorruption(PlantPilotError):
    """A snapshot file could not be parsed or validated."""


__all__ = [
    "InvalidTransition",
    "LoadCorruption",
    "NotFound",
    "PersistenceFailure",
    "PlantPilotError",
    "ValidationFailure",
    "ValidationIssue",
]

"""Single validation entry point shared by request handlers and snapshot loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from core.errors import ValidationFailure, ValidationIssue

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ValidationOutcome(Generic[ModelT]):
    value: ModelT | None = None
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.issues

    def unwrap(self, message: str = "Invalid payload") -> ModelT:
        if self.value is None:
            raise ValidationFailure(message, self.issues)
        return self.value


def validate_payload(model: type[ModelT], payload: Any) -> ValidationOutcome[ModelT]:
    """Validate ``payload`` against ``model`` without raising."""
    if isinstance(payload, model):
        return ValidationOutcome(value=payload)
    if not isinstance(payload, dict):
        return ValidationOutcome(
            issues=[ValidationIssue(path="", message="Expected a JSON object")]
        )
    try:
        return ValidationOutcome(value=model.model_validate(payload))
    except ValidationError as exc:
        return ValidationOutcome(issues=issues_from_error(exc))


def issues_from_error(exc: ValidationError) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            path=".".join(str(part) for part in error.get("loc", ())),
            message=error.get("msg", "Invalid value"),
        )
        for error in exc.errors()
    ]


__all__ = ["ValidationOutcome", "issues_from_error", "validate_payload"]

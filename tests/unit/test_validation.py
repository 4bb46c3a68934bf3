import pytest

from core.errors import ValidationFailure
from schemas.requests import ChatRequest, DeletionRequest, IntakeRequest, SopCreateRequest
from schemas.validation import validate_payload


def test_non_object_payload() -> None:
    outcome = validate_payload(ChatRequest, ["hello"])

    assert not outcome.ok
    assert outcome.issues[0].message == "Expected a JSON object"


def test_camel_case_fields_accepted() -> None:
    outcome = validate_payload(IntakeRequest, {"plantName": "Basil", "targetPh": "6.0"})

    assert outcome.ok
    assert outcome.value.plant_name == "Basil"
    assert outcome.value.target_ph == "6.0"


def test_issue_paths_use_field_location() -> None:
    outcome = validate_payload(SopCreateRequest, {"name": "x", "stage": "veg"})

    assert not outcome.ok
    assert [issue.path for issue in outcome.issues] == ["name"]


def test_chat_message_length_bounds() -> None:
    assert not validate_payload(ChatRequest, {"message": ""}).ok
    assert not validate_payload(ChatRequest, {"message": "x" * 2001}).ok
    assert validate_payload(ChatRequest, {"message": "x" * 2000}).ok


def test_deletion_request_optional_fields() -> None:
    assert validate_payload(DeletionRequest, {}).ok
    assert not validate_payload(DeletionRequest, {"email": "not-an-email"}).ok
    assert not validate_payload(DeletionRequest, {"reason": "no"}).ok


def test_unwrap_raises_validation_failure() -> None:
    outcome = validate_payload(ChatRequest, {})

    with pytest.raises(ValidationFailure) as excinfo:
        outcome.unwrap("Invalid chat payload")

    assert excinfo.value.message == "Invalid chat payload"
    assert excinfo.value.issues

# domain/ids.py
from __future__ import annotations

from typing import Any

from domain.exceptions import ValidationError

# Destination meaning "end the ongoing task". OrderedTask refuses it as a step id.
NULL_STEP_IDENTIFIER = "__null_step__"


def is_null_step(step_id: Any) -> bool:
    return step_id == NULL_STEP_IDENTIFIER


def validate_step_identifier(value: Any, field_name: str = "step_identifier", allow_null: bool = True) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    if not allow_null and is_null_step(value):
        raise ValidationError(f"{field_name} must not be the reserved null step identifier")
    return value

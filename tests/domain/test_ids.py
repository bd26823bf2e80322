import pytest

from domain.exceptions import ValidationError
from domain.ids import NULL_STEP_IDENTIFIER, is_null_step, validate_step_identifier


def test_null_step_recognised():
    assert is_null_step(NULL_STEP_IDENTIFIER)
    assert not is_null_step("stepA")
    assert not is_null_step(None)


def test_valid_identifier_returned():
    assert validate_step_identifier("stepA") == "stepA"
    assert validate_step_identifier(NULL_STEP_IDENTIFIER) == NULL_STEP_IDENTIFIER


@pytest.mark.parametrize("value", [None, 3, "", "   "])
def test_malformed_identifier(value):
    with pytest.raises(ValidationError):
        validate_step_identifier(value)


def test_null_step_refused_when_not_allowed():
    with pytest.raises(ValidationError) as exc:
        validate_step_identifier(NULL_STEP_IDENTIFIER, field_name="step.id", allow_null=False)
    assert "step.id" in str(exc.value)

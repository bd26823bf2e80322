import pytest

from domain.exceptions import UnknownStepError, ValidationError
from domain.ids import NULL_STEP_IDENTIFIER, validate_step_identifier
from domain.navigation.direct import DirectNavigationRule
from domain.navigation.predicate import PredicateNavigationRule
from domain.navigation.result_predicate import AnswerEquals, ResultSelector
from domain.task import OrderedTask, Step, TaskDefinition


def make_task():
    return OrderedTask("task", [Step("a"), Step("b"), Step("c")])


class TestStepIdentifiers:
    def test_null_step_allowed_by_default(self):
        assert validate_step_identifier(NULL_STEP_IDENTIFIER) == NULL_STEP_IDENTIFIER

    def test_null_step_rejected_when_not_allowed(self):
        with pytest.raises(ValidationError):
            validate_step_identifier(NULL_STEP_IDENTIFIER, allow_null=False)

    @pytest.mark.parametrize("value", ["", "   ", None, 3])
    def test_malformed_identifier_rejected(self, value):
        with pytest.raises(ValidationError):
            validate_step_identifier(value)

    def test_step_cannot_use_null_identifier(self):
        with pytest.raises(ValidationError):
            Step(NULL_STEP_IDENTIFIER)


class TestOrderedTask:
    def test_step_identifiers_in_order(self):
        assert make_task().step_identifiers == ["a", "b", "c"]

    def test_duplicate_step_rejected(self):
        with pytest.raises(ValidationError):
            OrderedTask("task", [Step("a"), Step("a")])

    def test_empty_identifier_rejected(self):
        with pytest.raises(ValidationError):
            OrderedTask("", [Step("a")])

    def test_step_after_in_order(self):
        task = make_task()
        assert task.step_after_in_order("a").id == "b"
        assert task.step_after_in_order("c") is None

    def test_step_after_unknown_step(self):
        with pytest.raises(UnknownStepError):
            make_task().step_after_in_order("zzz")

    def test_first_step(self):
        assert make_task().first_step().id == "a"
        assert OrderedTask("empty", []).first_step() is None


class TestTaskDefinition:
    def test_accepts_known_destinations(self):
        rule = PredicateNavigationRule(
            (AnswerEquals(ResultSelector("q"), 1),), ("c",), default_step_identifier=NULL_STEP_IDENTIFIER
        )
        definition = TaskDefinition(make_task(), {"a": rule, "b": DirectNavigationRule("a")})
        assert set(definition.navigation_rules) == {"a", "b"}

    def test_unknown_trigger_rejected(self):
        with pytest.raises(UnknownStepError):
            TaskDefinition(make_task(), {"zzz": DirectNavigationRule("a")})

    def test_unknown_destination_rejected(self):
        with pytest.raises(ValidationError):
            TaskDefinition(make_task(), {"a": DirectNavigationRule("nowhere")})

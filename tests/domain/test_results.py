import pytest

from domain.exceptions import ValidationError
from domain.results import QuestionResult, StepResult, TaskResult


class TestStepResult:
    def test_question_result_lookup(self):
        step = StepResult("s1", [QuestionResult("q1", "yes"), QuestionResult("q2", 3)])
        assert step.question_result("q2").answer == 3
        assert step.question_result("missing") is None

    def test_results_are_stored_as_tuple(self):
        step = StepResult("s1", [QuestionResult("q1", "yes")])
        assert isinstance(step.results, tuple)

    def test_duplicate_question_identifier_rejected(self):
        with pytest.raises(ValidationError):
            StepResult("s1", [QuestionResult("q1", "a"), QuestionResult("q1", "b")])

    def test_skipped_question(self):
        assert QuestionResult("q1").is_skipped is True
        assert QuestionResult("q1", False).is_skipped is False

    def test_multi_choice_answer_is_frozen(self):
        choices = ["cough", ["fever", "rash"]]
        question = QuestionResult("symptoms", choices)
        choices.append("chills")

        assert question.answer == ("cough", ("fever", "rash"))
        assert question == QuestionResult("symptoms", ("cough", ("fever", "rash")))
        assert hash(question) == hash(QuestionResult("symptoms", ("cough", ("fever", "rash"))))

    def test_set_answer_becomes_ordered_tuple(self):
        assert QuestionResult("q", {"b", "a"}).answer == ("a", "b")


class TestTaskResult:
    def test_with_step_result_appends(self):
        result = TaskResult("task")
        updated = result.with_step_result(StepResult("s1", [QuestionResult("q1", 1)]))

        assert result.results == ()
        assert [s.identifier for s in updated.results] == ["s1"]

    def test_with_step_result_replaces_in_place(self):
        result = TaskResult(
            "task",
            [
                StepResult("s1", [QuestionResult("q1", 1)]),
                StepResult("s2", [QuestionResult("q2", 2)]),
            ],
        )
        updated = result.with_step_result(StepResult("s1", [QuestionResult("q1", 10)]))

        assert [s.identifier for s in updated.results] == ["s1", "s2"]
        assert updated.step_result("s1").question_result("q1").answer == 10

    def test_question_results_in_step_order(self):
        result = TaskResult(
            "task",
            [
                StepResult("s1", [QuestionResult("a", 1), QuestionResult("b", 2)]),
                StepResult("s2", [QuestionResult("c", 3)]),
            ],
        )
        assert [(s, q.identifier) for s, q in result.question_results()] == [
            ("s1", "a"),
            ("s1", "b"),
            ("s2", "c"),
        ]

    def test_task_result_frozen(self):
        result = TaskResult("task")
        with pytest.raises(Exception):  # FrozenInstanceError
            result.identifier = "other"

from domain.navigation.answer_context import AnswerContext
from domain.navigation.result_predicate import ResultSelector
from domain.results import QuestionResult, StepResult, TaskResult


def task_result(task_id, **answers):
    return TaskResult(task_id, [StepResult("step", [QuestionResult(k, v) for k, v in answers.items()])])


def test_ongoing_task_is_default_target():
    context = AnswerContext(task_result("ongoing", q1="yes"))

    assert context.lookup(ResultSelector("q1")).answer == "yes"
    assert context.lookup(ResultSelector("q1", task_identifier="ongoing")).answer == "yes"


def test_additional_results_are_addressed_by_task_identifier():
    context = AnswerContext(
        task_result("ongoing", q1="yes"),
        [task_result("intake", q1="no")],
    )

    assert context.lookup(ResultSelector("q1")).answer == "yes"
    assert context.lookup(ResultSelector("q1", task_identifier="intake")).answer == "no"
    assert context.task_identifiers == ["ongoing", "intake"]


def test_first_declared_task_result_wins():
    context = AnswerContext(
        task_result("ongoing", q1="current"),
        [task_result("intake", q1="first"), task_result("intake", q1="second"), task_result("ongoing", q1="old")],
    )

    assert context.lookup(ResultSelector("q1", task_identifier="intake")).answer == "first"
    assert context.lookup(ResultSelector("q1")).answer == "current"
    assert context.shadowed_task_identifiers == ["intake", "ongoing"]


def test_first_question_in_step_order_wins_for_unqualified_selector():
    ongoing = TaskResult(
        "ongoing",
        [
            StepResult("a", [QuestionResult("q", 1)]),
            StepResult("b", [QuestionResult("q", 2)]),
        ],
    )
    context = AnswerContext(ongoing)

    assert context.lookup(ResultSelector("q")).answer == 1
    assert context.lookup(ResultSelector("q", step_identifier="b")).answer == 2


def test_missing_lookups_return_none():
    context = AnswerContext(task_result("ongoing", q1="yes"))

    assert context.lookup(ResultSelector("q9")) is None
    assert context.lookup(ResultSelector("q1", task_identifier="missing")) is None

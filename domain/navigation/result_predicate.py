# domain/navigation/result_predicate.py
"""
Result predicates

A result predicate names a question result (task, step, question) and an
expected-answer condition. Predicates are plain tagged values; the
ResultPredicateEvaluator interprets them against an AnswerContext.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from numbers import Real
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, Optional, Tuple

from domain.exceptions import ValidationError
from domain.results import QuestionResult, freeze_answer

if TYPE_CHECKING:
    from domain.navigation.answer_context import AnswerContext


@dataclass(frozen=True)
class ResultSelector:
    question_identifier: str
    step_identifier: Optional[str] = None  # None => search every step of the task
    task_identifier: Optional[str] = None  # None => ongoing task

    def __post_init__(self) -> None:
        if not self.question_identifier:
            raise ValidationError("Result selector needs a question identifier")

    @classmethod
    def for_question(cls, question_id: str, task_id: Optional[str] = None) -> "ResultSelector":
        return cls(question_identifier=question_id, task_identifier=task_id)


@dataclass(frozen=True)
class ResultPredicate:
    kind: ClassVar[str] = ""


@dataclass(frozen=True)
class AnswerEquals(ResultPredicate):
    kind: ClassVar[str] = "equals"
    selector: ResultSelector
    expected: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "expected", freeze_answer(self.expected))


@dataclass(frozen=True)
class AnswerInRange(ResultPredicate):
    """Inclusive numeric range; either bound may be open."""
    kind: ClassVar[str] = "in_range"
    selector: ResultSelector
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def __post_init__(self) -> None:
        if self.minimum is None and self.maximum is None:
            raise ValidationError("Range predicate needs a minimum or a maximum")
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise ValidationError(f"Range predicate minimum {self.minimum} exceeds maximum {self.maximum}")


@dataclass(frozen=True)
class AnswerOneOf(ResultPredicate):
    kind: ClassVar[str] = "one_of"
    selector: ResultSelector
    values: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(freeze_answer(v) for v in self.values))


@dataclass(frozen=True)
class AnswerIncludesAll(ResultPredicate):
    kind: ClassVar[str] = "includes_all"
    selector: ResultSelector
    values: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(freeze_answer(v) for v in self.values))


@dataclass(frozen=True)
class AnswerIsTrue(ResultPredicate):
    kind: ClassVar[str] = "boolean"
    selector: ResultSelector
    expected: bool = True


@dataclass(frozen=True)
class AnswerMatches(ResultPredicate):
    kind: ClassVar[str] = "matches"
    selector: ResultSelector
    pattern: str = ""

    def __post_init__(self) -> None:
        try:
            re.compile(self.pattern)
        except re.error as exc:
            raise ValidationError(f"Invalid pattern {self.pattern!r}: {exc}") from exc


@dataclass(frozen=True)
class AnswerSkipped(ResultPredicate):
    kind: ClassVar[str] = "skipped"
    selector: ResultSelector


@dataclass(frozen=True)
class AllOf(ResultPredicate):
    kind: ClassVar[str] = "all_of"
    predicates: Tuple[ResultPredicate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "predicates", tuple(self.predicates))
        if not self.predicates:
            raise ValidationError("all_of needs at least one predicate")


@dataclass(frozen=True)
class AnyOf(ResultPredicate):
    kind: ClassVar[str] = "any_of"
    predicates: Tuple[ResultPredicate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "predicates", tuple(self.predicates))
        if not self.predicates:
            raise ValidationError("any_of needs at least one predicate")


@dataclass(frozen=True)
class Not(ResultPredicate):
    kind: ClassVar[str] = "not"
    predicate: ResultPredicate


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _same_answer(left: Any, right: Any) -> bool:
    # True and 1 are different answers
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, tuple) and isinstance(right, tuple):
        return len(left) == len(right) and all(_same_answer(l, r) for l, r in zip(left, right))
    return left == right


def _as_sequence(answer: Any) -> Tuple[Any, ...]:
    if isinstance(answer, (list, tuple, set, frozenset)):
        return tuple(answer)
    return (answer,)


class ResultPredicateEvaluator:
    """
    Evaluates predicates against an AnswerContext.

    A leaf that references an absent question (or an unknown task) is
    undetermined rather than False, and stays undetermined through Not, so
    negating it never turns a missing answer into a match. AllOf and AnyOf
    combine undetermined operands the three-valued way; evaluate() reports
    an undetermined result as a non-match.
    """

    def __init__(self) -> None:
        self._leaf_checks: Dict[str, Callable[[ResultPredicate, Any], bool]] = {
            AnswerEquals.kind: self._check_equals,
            AnswerInRange.kind: self._check_in_range,
            AnswerOneOf.kind: self._check_one_of,
            AnswerIncludesAll.kind: self._check_includes_all,
            AnswerIsTrue.kind: self._check_boolean,
            AnswerMatches.kind: self._check_matches,
        }

    def evaluate(self, predicate: ResultPredicate, context: "AnswerContext") -> bool:
        return self._evaluate(predicate, context) is True

    def _evaluate(self, predicate: ResultPredicate, context: "AnswerContext") -> Optional[bool]:
        if isinstance(predicate, AllOf):
            undetermined = False
            for operand in predicate.predicates:
                outcome = self._evaluate(operand, context)
                if outcome is False:
                    return False
                undetermined = undetermined or outcome is None
            return None if undetermined else True
        if isinstance(predicate, AnyOf):
            undetermined = False
            for operand in predicate.predicates:
                outcome = self._evaluate(operand, context)
                if outcome is True:
                    return True
                undetermined = undetermined or outcome is None
            return None if undetermined else False
        if isinstance(predicate, Not):
            outcome = self._evaluate(predicate.predicate, context)
            return None if outcome is None else not outcome

        selector = getattr(predicate, "selector", None)
        if selector is None:
            raise TypeError(f"Unsupported result predicate: {type(predicate).__name__}")

        question: Optional[QuestionResult] = context.lookup(selector)
        if question is None:
            # unanswered or unknown task
            return None

        if isinstance(predicate, AnswerSkipped):
            return question.answer is None
        if question.answer is None:
            return False

        check = self._leaf_checks.get(predicate.kind)
        if check is None:
            raise TypeError(f"Unsupported result predicate: {type(predicate).__name__}")
        return check(predicate, question.answer)

    def _check_equals(self, predicate: AnswerEquals, answer: Any) -> bool:
        return _same_answer(answer, predicate.expected)

    def _check_in_range(self, predicate: AnswerInRange, answer: Any) -> bool:
        if not _is_number(answer):
            return False
        if predicate.minimum is not None and answer < predicate.minimum:
            return False
        if predicate.maximum is not None and answer > predicate.maximum:
            return False
        return True

    def _check_one_of(self, predicate: AnswerOneOf, answer: Any) -> bool:
        return any(
            _same_answer(selected, value)
            for selected in _as_sequence(answer)
            for value in predicate.values
        )

    def _check_includes_all(self, predicate: AnswerIncludesAll, answer: Any) -> bool:
        selected = _as_sequence(answer)
        return all(any(_same_answer(item, value) for item in selected) for value in predicate.values)

    def _check_boolean(self, predicate: AnswerIsTrue, answer: Any) -> bool:
        return isinstance(answer, bool) and answer is predicate.expected

    def _check_matches(self, predicate: AnswerMatches, answer: Any) -> bool:
        if not isinstance(answer, str):
            return False
        return re.fullmatch(predicate.pattern, answer) is not None

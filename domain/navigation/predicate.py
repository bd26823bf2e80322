# domain/navigation/predicate.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Iterator, Optional, Sequence, Tuple

from domain.exceptions import NavigationRuleError, ValidationError
from domain.ids import validate_step_identifier
from domain.navigation.answer_context import AnswerContext
from domain.navigation.base import NavigationRule
from domain.navigation.result_predicate import ResultPredicate, ResultPredicateEvaluator
from domain.results import TaskResult

_EVALUATOR = ResultPredicateEvaluator()


@dataclass(frozen=True)
class PredicateNavigationRule(NavigationRule):
    """
    First-match dispatch over (predicate, step id) pairs.

    Predicates are evaluated in declared order against the ongoing task
    result plus ``additional_task_results``; the step id paired with the
    first predicate that holds is returned. When none holds the rule returns
    ``default_step_identifier``, which may be None (no override).

    Additional task results must carry distinct identifiers that differ from
    the ongoing task's identifier; see AnswerContext for how duplicates are
    resolved.
    """

    rule_type: ClassVar[str] = "predicate"
    result_predicates: Tuple[ResultPredicate, ...]
    matching_step_identifiers: Tuple[str, ...]
    default_step_identifier: Optional[str] = None
    additional_task_results: Tuple[TaskResult, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        predicates = tuple(self.result_predicates or ())
        identifiers = tuple(self.matching_step_identifiers or ())
        object.__setattr__(self, "result_predicates", predicates)
        object.__setattr__(self, "matching_step_identifiers", identifiers)
        object.__setattr__(self, "additional_task_results", tuple(self.additional_task_results or ()))

        if not predicates:
            raise NavigationRuleError("Predicate navigation rule needs at least one result predicate")
        if len(predicates) != len(identifiers):
            raise NavigationRuleError(
                f"Each result predicate needs a matching step identifier "
                f"({len(predicates)} predicates, {len(identifiers)} identifiers)"
            )
        for predicate in predicates:
            if not isinstance(predicate, ResultPredicate):
                raise NavigationRuleError(f"Not a result predicate: {predicate!r}")
        for task_result in self.additional_task_results:
            if not isinstance(task_result, TaskResult):
                raise NavigationRuleError(f"Not a task result: {task_result!r}")
        try:
            for step_id in identifiers:
                validate_step_identifier(step_id, "matching_step_identifiers")
            if self.default_step_identifier is not None:
                validate_step_identifier(self.default_step_identifier, "default_step_identifier")
        except ValidationError as exc:
            raise NavigationRuleError(str(exc)) from exc

    def with_additional_task_results(self, task_results: Sequence[TaskResult]) -> "PredicateNavigationRule":
        return replace(self, additional_task_results=tuple(task_results or ()))

    def matching_pairs(self) -> Iterator[Tuple[ResultPredicate, str]]:
        return zip(self.result_predicates, self.matching_step_identifiers)

    def identifier_for_destination(self, task_result: TaskResult) -> Optional[str]:
        context = AnswerContext(task_result, self.additional_task_results)
        for predicate, step_id in self.matching_pairs():
            if _EVALUATOR.evaluate(predicate, context):
                return step_id
        return self.default_step_identifier

    def declared_destinations(self) -> Tuple[str, ...]:
        if self.default_step_identifier is None:
            return self.matching_step_identifiers
        return self.matching_step_identifiers + (self.default_step_identifier,)

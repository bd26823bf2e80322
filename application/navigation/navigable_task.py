# application/navigation/navigable_task.py
from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

from application.outcome import NavigationOutcome, NavigationSource
from application.ports.logger import LoggerPort
from domain.exceptions import UnknownStepError
from domain.ids import is_null_step
from domain.navigation.base import NavigationRule
from domain.navigation.predicate import PredicateNavigationRule
from domain.results import TaskResult
from domain.task import OrderedTask, Step, TaskDefinition


class NavigableTask:
    """
    Ordered task whose flow can branch through navigation rules.

    Each step may trigger at most one rule. After a step completes, the
    rule (if any) picks the next step; without a rule, or when the rule has
    no override, the task moves on in its default order.
    """

    def __init__(
        self,
        task: OrderedTask,
        logger: LoggerPort,
        navigation_rules: Optional[Mapping[str, NavigationRule]] = None,
    ):
        self._task = task
        self._logger = logger.bind(task_id=task.identifier)
        self._rules: Dict[str, NavigationRule] = {}
        for trigger_id, rule in (navigation_rules or {}).items():
            self.set_navigation_rule(rule, trigger_id)

    @classmethod
    def from_definition(cls, definition: TaskDefinition, logger: LoggerPort) -> "NavigableTask":
        return cls(definition.task, logger, definition.navigation_rules)

    @property
    def task(self) -> OrderedTask:
        return self._task

    @property
    def navigation_rules(self) -> Dict[str, NavigationRule]:
        return dict(self._rules)

    def set_navigation_rule(self, rule: NavigationRule, trigger_step_identifier: str) -> None:
        if self._task.step_with_identifier(trigger_step_identifier) is None:
            raise UnknownStepError(trigger_step_identifier)
        self._rules[trigger_step_identifier] = rule

    def navigation_rule_for(self, trigger_step_identifier: str) -> Optional[NavigationRule]:
        return self._rules.get(trigger_step_identifier)

    def remove_navigation_rule(self, trigger_step_identifier: str) -> None:
        self._rules.pop(trigger_step_identifier, None)

    def attach_additional_task_results(self, task_results: Sequence[TaskResult]) -> None:
        for trigger_id, rule in self._rules.items():
            if isinstance(rule, PredicateNavigationRule):
                self._rules[trigger_id] = rule.with_additional_task_results(task_results)

    def step_after(self, step_identifier: Optional[str], task_result: TaskResult) -> Optional[Step]:
        outcome = self.decide_after(step_identifier, task_result)
        if outcome.finished:
            return None
        return self._task.step_with_identifier(outcome.next_step_id)

    def decide_after(self, step_identifier: Optional[str], task_result: TaskResult) -> NavigationOutcome:
        if step_identifier is None:
            first = self._task.first_step()
            if first is None:
                return NavigationOutcome(next_step_id=None, finished=True, source=NavigationSource.END)
            return NavigationOutcome(next_step_id=first.id, finished=False, source=NavigationSource.START)

        self._task.index_of(step_identifier)  # raises UnknownStepError

        rule = self._rules.get(step_identifier)
        if rule is not None:
            destination = rule.identifier_for_destination(task_result)
            if destination is not None:
                return self._outcome_for_destination(step_identifier, rule, destination)
            self._logger.debug("navigation.no_override", from_step=step_identifier, rule_type=rule.rule_type)

        following = self._task.step_after_in_order(step_identifier)
        if following is None:
            self._logger.info("navigation.finished", from_step=step_identifier, source="sequential")
            return NavigationOutcome(next_step_id=None, finished=True, source=NavigationSource.SEQUENTIAL)

        self._logger.info("navigation.fallback", from_step=step_identifier, to_step=following.id)
        return NavigationOutcome(next_step_id=following.id, finished=False, source=NavigationSource.SEQUENTIAL)

    def _outcome_for_destination(
        self, step_identifier: str, rule: NavigationRule, destination: str
    ) -> NavigationOutcome:
        if is_null_step(destination):
            self._logger.info("navigation.finished", from_step=step_identifier, rule_type=rule.rule_type)
            return NavigationOutcome(
                next_step_id=None,
                finished=True,
                source=NavigationSource.RULE,
                rule_type=rule.rule_type,
            )

        if self._task.step_with_identifier(destination) is None:
            self._logger.error(
                "navigation.destination_unknown",
                from_step=step_identifier,
                to_step=destination,
                rule_type=rule.rule_type,
            )
            raise UnknownStepError(destination)

        self._logger.info(
            "navigation.rule_matched",
            from_step=step_identifier,
            to_step=destination,
            rule_type=rule.rule_type,
        )
        return NavigationOutcome(
            next_step_id=destination,
            finished=False,
            source=NavigationSource.RULE,
            rule_type=rule.rule_type,
        )

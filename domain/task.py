"""
Ordered task domain model
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

from domain.exceptions import UnknownStepError, ValidationError
from domain.ids import is_null_step, validate_step_identifier

if TYPE_CHECKING:
    from domain.navigation.base import NavigationRule


@dataclass(frozen=True)
class Step:
    id: str
    title: str = ""
    questions: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        validate_step_identifier(self.id, "step id", allow_null=False)
        object.__setattr__(self, "questions", tuple(self.questions))


@dataclass(frozen=True)
class OrderedTask:
    """
    Step registry: the steps of a task in their default sequential order.
    """
    identifier: str
    steps: Tuple[Step, ...]

    def __post_init__(self) -> None:
        if not self.identifier or not str(self.identifier).strip():
            raise ValidationError("Task identifier must not be empty")
        object.__setattr__(self, "steps", tuple(self.steps))
        seen = set()
        for step in self.steps:
            if step.id in seen:
                raise ValidationError(f"Duplicate step id in task '{self.identifier}': {step.id}")
            seen.add(step.id)

    @property
    def step_identifiers(self) -> List[str]:
        return [s.id for s in self.steps]

    def step_with_identifier(self, step_id: str) -> Optional[Step]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def index_of(self, step_id: str) -> int:
        for i, step in enumerate(self.steps):
            if step.id == step_id:
                return i
        raise UnknownStepError(step_id)

    def first_step(self) -> Optional[Step]:
        return self.steps[0] if self.steps else None

    def step_after_in_order(self, step_id: str) -> Optional[Step]:
        i = self.index_of(step_id)
        if i + 1 < len(self.steps):
            return self.steps[i + 1]
        return None


@dataclass(frozen=True)
class TaskDefinition:
    """
    A task together with the navigation rules triggered by its steps.
    """
    task: OrderedTask
    navigation_rules: Mapping[str, "NavigationRule"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        rules: Dict[str, "NavigationRule"] = dict(self.navigation_rules)
        object.__setattr__(self, "navigation_rules", rules)
        known = set(self.task.step_identifiers)
        for trigger_id, rule in rules.items():
            if trigger_id not in known:
                raise UnknownStepError(trigger_id)
            for destination in rule.declared_destinations():
                if not is_null_step(destination) and destination not in known:
                    raise ValidationError(
                        f"Navigation rule on '{trigger_id}' targets unknown step '{destination}'"
                    )

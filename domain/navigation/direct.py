# domain/navigation/direct.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

from domain.exceptions import NavigationRuleError, ValidationError
from domain.ids import NULL_STEP_IDENTIFIER, validate_step_identifier
from domain.navigation.base import NavigationRule
from domain.results import TaskResult


@dataclass(frozen=True)
class DirectNavigationRule(NavigationRule):
    rule_type: ClassVar[str] = "direct"
    destination_step_identifier: str

    def __post_init__(self) -> None:
        if self.destination_step_identifier is None:
            raise NavigationRuleError("Direct navigation rule needs a destination step identifier")
        try:
            validate_step_identifier(self.destination_step_identifier, "destination_step_identifier")
        except ValidationError as exc:
            raise NavigationRuleError(str(exc)) from exc

    @classmethod
    def end_task(cls) -> "DirectNavigationRule":
        return cls(destination_step_identifier=NULL_STEP_IDENTIFIER)

    def identifier_for_destination(self, task_result: Optional[TaskResult]) -> str:
        return self.destination_step_identifier

    def declared_destinations(self) -> Tuple[str, ...]:
        return (self.destination_step_identifier,)

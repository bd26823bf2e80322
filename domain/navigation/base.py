# domain/navigation/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Tuple

from domain.results import TaskResult


class NavigationRule(ABC):
    """
    Decides which step follows the step the rule is attached to.

    ``identifier_for_destination`` returns the destination step id,
    ``NULL_STEP_IDENTIFIER`` to end the task, or ``None`` when the rule has
    no opinion and the task should continue in its default order.
    """

    rule_type: ClassVar[str] = ""

    @abstractmethod
    def identifier_for_destination(self, task_result: TaskResult) -> Optional[str]:
        ...

    @abstractmethod
    def declared_destinations(self) -> Tuple[str, ...]:
        """
        Every step id this rule can return, used for static validation.
        """
        ...

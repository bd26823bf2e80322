# domain/navigation/answer_context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from domain.navigation.result_predicate import ResultSelector
from domain.results import QuestionResult, TaskResult


@dataclass
class _FlattenedTask:
    by_question: Dict[str, QuestionResult] = field(default_factory=dict)
    by_step: Dict[Tuple[str, str], QuestionResult] = field(default_factory=dict)


class AnswerContext:
    """
    Flattened, read-only view of the answers available to result predicates.

    The ongoing task result is registered first, then the additional task
    results in their declared order. When two task results share an
    identifier, the first one registered wins and the later one is recorded
    in ``shadowed_task_identifiers``. Inside one task result the first
    question result in step order wins for selectors without a step.
    """

    def __init__(self, ongoing: TaskResult, additional: Sequence[TaskResult] = ()):
        self._ongoing_identifier = ongoing.identifier
        self._tasks: Dict[str, _FlattenedTask] = {}
        self.shadowed_task_identifiers: List[str] = []

        for task_result in (ongoing, *additional):
            if task_result.identifier in self._tasks:
                self.shadowed_task_identifiers.append(task_result.identifier)
                continue
            self._tasks[task_result.identifier] = self._flatten(task_result)

    @property
    def ongoing_identifier(self) -> str:
        return self._ongoing_identifier

    @property
    def task_identifiers(self) -> List[str]:
        return list(self._tasks)

    def lookup(self, selector: ResultSelector) -> Optional[QuestionResult]:
        task_id = selector.task_identifier or self._ongoing_identifier
        flattened = self._tasks.get(task_id)
        if flattened is None:
            return None
        if selector.step_identifier is None:
            return flattened.by_question.get(selector.question_identifier)
        return flattened.by_step.get((selector.step_identifier, selector.question_identifier))

    def _flatten(self, task_result: TaskResult) -> _FlattenedTask:
        flattened = _FlattenedTask()
        for step_id, question in task_result.question_results():
            flattened.by_question.setdefault(question.identifier, question)
            flattened.by_step.setdefault((step_id, question.identifier), question)
        return flattened

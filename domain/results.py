"""
Task result model

A TaskResult is the accumulated set of answers for one run of a task.
Results are immutable; the host builds a new TaskResult as steps complete.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Optional, Tuple

from domain.exceptions import ValidationError


def freeze_answer(value: Any) -> Any:
    """Turn lists and sets (at any depth) into tuples so answers stay immutable and hashable."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze_answer(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return tuple(sorted((freeze_answer(item) for item in value), key=repr))
    return value


def thaw_answer(value: Any) -> Any:
    """Inverse of freeze_answer for JSON output: tuples become lists."""
    if isinstance(value, tuple):
        return [thaw_answer(item) for item in value]
    return value


@dataclass(frozen=True)
class QuestionResult:
    identifier: str
    answer: Any = None  # None => skipped

    def __post_init__(self) -> None:
        object.__setattr__(self, "answer", freeze_answer(self.answer))

    @property
    def is_skipped(self) -> bool:
        return self.answer is None


@dataclass(frozen=True)
class StepResult:
    identifier: str
    results: Tuple[QuestionResult, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results))
        seen = set()
        for question in self.results:
            if question.identifier in seen:
                raise ValidationError(
                    f"Duplicate question result '{question.identifier}' in step '{self.identifier}'"
                )
            seen.add(question.identifier)

    def question_result(self, question_id: str) -> Optional[QuestionResult]:
        for question in self.results:
            if question.identifier == question_id:
                return question
        return None


@dataclass(frozen=True)
class TaskResult:
    identifier: str
    results: Tuple[StepResult, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results))

    def step_result(self, step_id: str) -> Optional[StepResult]:
        for step in self.results:
            if step.identifier == step_id:
                return step
        return None

    def with_step_result(self, step_result: StepResult) -> "TaskResult":
        # revisiting a step replaces its earlier result in place
        results = list(self.results)
        for i, existing in enumerate(results):
            if existing.identifier == step_result.identifier:
                results[i] = step_result
                break
        else:
            results.append(step_result)
        return replace(self, results=tuple(results))

    def question_results(self) -> Iterator[Tuple[str, QuestionResult]]:
        for step in self.results:
            for question in step.results:
                yield step.identifier, question

# infrastructure/results/task_result_codec.py
from __future__ import annotations

from typing import Any, Dict, List

from domain.exceptions import ValidationError
from domain.results import QuestionResult, StepResult, TaskResult, thaw_answer
from infrastructure.codec_errors import DecodeError, require_field, require_mapping


class TaskResultCodec:
    """
    Converts task results to and from JSON-compatible dicts.

    {"identifier": "survey", "steps": [
        {"identifier": "q1", "questions": [{"identifier": "q1", "answer": "yes"}]}
    ]}
    """

    def encode(self, task_result: TaskResult) -> Dict[str, Any]:
        return {
            "identifier": task_result.identifier,
            "steps": [
                {
                    "identifier": step.identifier,
                    "questions": [
                        {"identifier": q.identifier, "answer": thaw_answer(q.answer)}
                        for q in step.results
                    ],
                }
                for step in task_result.results
            ],
        }

    def decode(self, data: Any) -> TaskResult:
        try:
            return self._decode_task(data)
        except RecursionError as exc:
            raise DecodeError("task result is nested too deeply") from exc

    def _decode_task(self, data: Any) -> TaskResult:
        data = require_mapping(data, "task result")
        identifier = require_field(data, "identifier", str, "task result")
        steps_data = data.get("steps", [])
        if not isinstance(steps_data, list):
            raise DecodeError(f"task result '{identifier}': 'steps' must be a list")

        steps: List[StepResult] = []
        for step_data in steps_data:
            steps.append(self._decode_step(step_data, identifier))
        return TaskResult(identifier=identifier, results=tuple(steps))

    def decode_many(self, data: Any) -> List[TaskResult]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise DecodeError("task results must be a list")
        return [self.decode(item) for item in data]

    def _decode_step(self, data: Any, task_id: str) -> StepResult:
        where = f"step result in '{task_id}'"
        data = require_mapping(data, where)
        step_id = require_field(data, "identifier", str, where)
        questions_data = data.get("questions", [])
        if not isinstance(questions_data, list):
            raise DecodeError(f"{where}: 'questions' must be a list")

        questions = []
        for question_data in questions_data:
            question_data = require_mapping(question_data, f"question result in '{step_id}'")
            questions.append(
                QuestionResult(
                    identifier=require_field(question_data, "identifier", str, f"question result in '{step_id}'"),
                    answer=question_data.get("answer"),
                )
            )
        try:
            return StepResult(identifier=step_id, results=tuple(questions))
        except ValidationError as exc:
            raise DecodeError(str(exc)) from exc

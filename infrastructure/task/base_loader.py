# infrastructure/task/base_loader.py
"""
Build TaskDefinition objects from task definition files.

Format (JSON or YAML):

    task:
      identifier: symptom_survey
    steps:
      - id: intro
      - id: has_pain
        questions: [has_pain]
    navigation_rules:
      has_pain:
        type: predicate
        result_predicates:
          - kind: boolean
            selector: has_pain
            expected: false
        matching_step_identifiers: [done]
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Union

from domain.exceptions import ValidationError
from domain.navigation.base import NavigationRule
from domain.task import OrderedTask, Step, TaskDefinition
from infrastructure.codec_errors import DecodeError
from infrastructure.navigation.rule_codec import RULE_FORMAT_VERSION, NavigationRuleCodec


class TaskLoadError(Exception):
    pass


def _or_default(value: Any, default: Any) -> Any:
    # an empty YAML key loads as None
    return default if value is None else value


class TaskLoaderBase(ABC):
    def __init__(self, rule_codec: NavigationRuleCodec | None = None) -> None:
        self._rule_codec = rule_codec or NavigationRuleCodec()

    @abstractmethod
    def _load_file(self, path: Path) -> Any:
        ...

    def load_from_file(self, path: Union[str, Path]) -> TaskDefinition:
        p = Path(path)
        if not p.exists():
            raise TaskLoadError(f"Task file not found: {path}")

        try:
            data = self._load_file(p)
        except (OSError, ValueError) as exc:
            raise TaskLoadError(f"Task file could not be parsed: {path}: {exc}") from exc

        if data is None:
            raise TaskLoadError(f"Task file is empty: {path}")
        if not isinstance(data, dict):
            raise TaskLoadError(f"Task file is invalid: {path}")

        return self.load_from_dict(data)

    def load_from_dict(self, data: Dict[str, Any]) -> TaskDefinition:
        try:
            task = self._load_task(_or_default(data.get("task"), {}), _or_default(data.get("steps"), []))
            rules = self._load_rules(_or_default(data.get("navigation_rules"), {}))
            return TaskDefinition(task=task, navigation_rules=rules)
        except (DecodeError, ValidationError) as exc:
            raise TaskLoadError(str(exc)) from exc

    def _load_task(self, meta: Dict[str, Any], steps_data: List[Dict[str, Any]]) -> OrderedTask:
        if not isinstance(meta, dict):
            raise TaskLoadError("'task' must be an object")
        if not isinstance(steps_data, list):
            raise TaskLoadError("'steps' must be a list")
        steps = [self._load_step(step_data) for step_data in steps_data]
        return OrderedTask(identifier=meta.get("identifier", ""), steps=tuple(steps))

    def _load_step(self, data: Dict[str, Any]) -> Step:
        if not isinstance(data, dict):
            raise TaskLoadError(f"Step entry is invalid: {data!r}")
        return Step(
            id=data.get("id", ""),
            title=data.get("title", ""),
            questions=tuple(_or_default(data.get("questions"), [])),
        )

    def _load_rules(self, rules_data: Dict[str, Any]) -> Dict[str, NavigationRule]:
        if not isinstance(rules_data, dict):
            raise TaskLoadError("'navigation_rules' must map step ids to rules")
        return {
            trigger_id: self._rule_codec.decode(rule_data, default_version=RULE_FORMAT_VERSION)
            for trigger_id, rule_data in rules_data.items()
        }

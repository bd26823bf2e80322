from __future__ import annotations

from pathlib import Path

import pytest

from domain.ids import NULL_STEP_IDENTIFIER
from domain.navigation.direct import DirectNavigationRule
from domain.navigation.predicate import PredicateNavigationRule
from domain.navigation.result_predicate import AnswerInRange, ResultSelector
from infrastructure.task.base_loader import TaskLoadError
from infrastructure.task.yaml_loader import YamlTaskLoader

SAMPLE_TASK = Path(__file__).parent.parent.parent / "tasks" / "symptom_survey.yaml"


def test_yaml_loader_parses_sample_task() -> None:
    definition = YamlTaskLoader().load_from_file(SAMPLE_TASK)

    assert definition.task.identifier == "symptom_survey"
    assert definition.task.step_identifiers[0] == "intro"
    assert definition.task.step_with_identifier("has_pain").questions == ("has_pain",)
    assert set(definition.navigation_rules) == {"has_pain", "pain_level", "severe_pain", "mood"}

    pain_rule = definition.navigation_rules["pain_level"]
    assert isinstance(pain_rule, PredicateNavigationRule)
    assert pain_rule.result_predicates[0] == AnswerInRange(ResultSelector("pain_level"), minimum=8)
    assert pain_rule.default_step_identifier == "mood"
    assert definition.navigation_rules["severe_pain"] == DirectNavigationRule(NULL_STEP_IDENTIFIER)


def test_yaml_loader_without_rules(tmp_path: Path) -> None:
    path = tmp_path / "plain.yaml"
    path.write_text(
        "task:\n  identifier: plain\nsteps:\n  - id: a\n  - id: b\nnavigation_rules:\n",
        encoding="utf-8",
    )

    definition = YamlTaskLoader().load_from_file(path)

    assert definition.task.step_identifiers == ["a", "b"]
    assert definition.navigation_rules == {}


def test_yaml_loader_rejects_unknown_rule_type(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(
        "task:\n  identifier: bad\nsteps:\n  - id: a\nnavigation_rules:\n  a:\n    type: random\n",
        encoding="utf-8",
    )

    with pytest.raises(TaskLoadError, match="Unknown navigation rule type"):
        YamlTaskLoader().load_from_file(path)


def test_yaml_loader_rejects_rule_on_unknown_step(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(
        "task:\n  identifier: bad\nsteps:\n  - id: a\n"
        "navigation_rules:\n  zzz:\n    type: direct\n    destination_step_identifier: a\n",
        encoding="utf-8",
    )

    with pytest.raises(TaskLoadError):
        YamlTaskLoader().load_from_file(path)


def test_yaml_loader_rejects_duplicate_steps(tmp_path: Path) -> None:
    path = tmp_path / "dup.yaml"
    path.write_text("task:\n  identifier: dup\nsteps:\n  - id: a\n  - id: a\n", encoding="utf-8")

    with pytest.raises(TaskLoadError, match="Duplicate step id"):
        YamlTaskLoader().load_from_file(path)


def test_yaml_loader_missing_and_empty_files(tmp_path: Path) -> None:
    with pytest.raises(TaskLoadError, match="not found"):
        YamlTaskLoader().load_from_file(tmp_path / "missing.yaml")

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(TaskLoadError, match="empty"):
        YamlTaskLoader().load_from_file(empty)


def test_yaml_loader_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("steps: [a, b\n", encoding="utf-8")

    with pytest.raises(TaskLoadError, match="could not be parsed"):
        YamlTaskLoader().load_from_file(path)

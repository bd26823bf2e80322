from __future__ import annotations

from pathlib import Path

from infrastructure.task.file_finder import TaskFileFinder


def test_json_preferred_over_yaml(tmp_path: Path) -> None:
    (tmp_path / "survey.yaml").write_text("", encoding="utf-8")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "survey.json").write_text("{}", encoding="utf-8")

    found = TaskFileFinder(tmp_path).find_by_id("survey")

    assert found == nested / "survey.json"


def test_yml_found(tmp_path: Path) -> None:
    (tmp_path / "survey.yml").write_text("", encoding="utf-8")
    assert TaskFileFinder(tmp_path).find_by_id("survey") == tmp_path / "survey.yml"


def test_missing_task(tmp_path: Path) -> None:
    assert TaskFileFinder(tmp_path).find_by_id("survey") is None
    assert TaskFileFinder(tmp_path / "nope").find_by_id("survey") is None

#!/usr/bin/env python3
"""
Step navigation helper

Usage:
  python scripts/navigate.py next --task-file <path> --result-file <path> [--current-step <id>] [--additional <path> ...]
  python scripts/navigate.py walk --task-file <path> --answers-file <path> [--additional <path> ...]
  python scripts/navigate.py walk --task-id <id> --answers '<json>'

Answers for `walk` map step ids to {question id: answer}:
  {"has_pain": {"has_pain": true}, "pain_level": {"pain_level": 8}}
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

load_dotenv()

from infrastructure.logging.log_setup import setup_console_logging

setup_console_logging()

from application.navigation.navigable_task import NavigableTask
from domain.exceptions import ValidationError
from domain.results import QuestionResult, StepResult, TaskResult
from domain.task import TaskDefinition
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.results.task_result_codec import TaskResultCodec
from infrastructure.task.base_loader import TaskLoadError
from infrastructure.task.file_finder import TaskFileFinder
from infrastructure.task.loader_registry import TaskLoaderRegistry


TASKS_DIR = Path(os.getenv("NAVIGATION_TASKS_DIR", str(Path(__file__).parent.parent / "tasks")))
# a walk longer than this is treated as a navigation loop
MAX_WALK_STEPS = 500


def _parse_json_payload(raw: str, label: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON for {label}: {exc}") from exc


def _load_json_file(path: str, label: str) -> Any:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Unable to read {label} file: {exc}") from exc
    return _parse_json_payload(content, label)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Step navigation helper")
    subparsers = parser.add_subparsers(dest="command")

    next_parser = subparsers.add_parser("next", help="Decide the step after --current-step")
    next_parser.add_argument("--task-id", type=str)
    next_parser.add_argument("--task-file", type=str)
    next_parser.add_argument("--result-file", type=str, required=True)
    next_parser.add_argument("--current-step", type=str)
    next_parser.add_argument("--additional", type=str, action="append", default=[])

    walk_parser = subparsers.add_parser("walk", help="Replay answers from the first step to the end")
    walk_parser.add_argument("--task-id", type=str)
    walk_parser.add_argument("--task-file", type=str)
    walk_parser.add_argument("--answers", type=str)
    walk_parser.add_argument("--answers-file", type=str)
    walk_parser.add_argument("--additional", type=str, action="append", default=[])

    return parser


def _load_definition(args: argparse.Namespace) -> TaskDefinition:
    if args.task_file:
        task_path = Path(args.task_file)
    elif args.task_id:
        found = TaskFileFinder(TASKS_DIR).find_by_id(args.task_id)
        if found is None:
            raise ValueError(f"Task file not found: {args.task_id}")
        task_path = found
    else:
        raise ValueError("task-file or task-id is required")

    try:
        loader = TaskLoaderRegistry().get_loader(task_path)
        return loader.load_from_file(task_path)
    except TaskLoadError as e:
        raise ValueError(f"Failed to load task: {e}") from e


def _load_additional(paths: List[str]) -> List[TaskResult]:
    codec = TaskResultCodec()
    results: List[TaskResult] = []
    for path in paths:
        data = _load_json_file(path, "additional task result")
        if isinstance(data, list):
            results.extend(codec.decode_many(data))
        else:
            results.append(codec.decode(data))
    return results


def _build_navigable(definition: TaskDefinition, additional: List[TaskResult]) -> NavigableTask:
    navigable = NavigableTask.from_definition(definition, LoguruLogger())
    if additional:
        navigable.attach_additional_task_results(additional)
    return navigable


def _run_next(args: argparse.Namespace) -> int:
    definition = _load_definition(args)
    task_result = TaskResultCodec().decode(_load_json_file(args.result_file, "task result"))
    navigable = _build_navigable(definition, _load_additional(args.additional))

    outcome = navigable.decide_after(args.current_step, task_result)
    print(json.dumps({
        "next_step_id": outcome.next_step_id,
        "finished": outcome.finished,
        "source": outcome.source.value,
        "rule_type": outcome.rule_type,
    }, ensure_ascii=False))
    return 0


def _load_answers(args: argparse.Namespace) -> Dict[str, Dict[str, Any]]:
    if args.answers is not None and args.answers_file is not None:
        raise ValueError("Multiple answers sources provided")
    if args.answers_file is not None:
        answers = _load_json_file(args.answers_file, "answers")
    elif args.answers is not None:
        answers = _parse_json_payload(args.answers, "answers")
    else:
        answers = {}
    if not isinstance(answers, dict):
        raise ValueError("answers must be a JSON object")
    for step_id, step_answers in answers.items():
        if step_answers is not None and not isinstance(step_answers, dict):
            raise ValueError(f"answers for step '{step_id}' must be a JSON object")
    return answers


def _run_walk(args: argparse.Namespace) -> int:
    definition = _load_definition(args)
    answers = _load_answers(args)
    navigable = _build_navigable(definition, _load_additional(args.additional))

    task_result = TaskResult(identifier=definition.task.identifier)
    path: List[str] = []
    step = navigable.step_after(None, task_result)
    while step is not None:
        if len(path) >= MAX_WALK_STEPS:
            print(f"Path: {' -> '.join(path)}")
            raise ValueError(f"Walk exceeded {MAX_WALK_STEPS} steps; the navigation rules loop")
        path.append(step.id)
        step_answers = answers.get(step.id) or {}
        task_result = task_result.with_step_result(
            StepResult(
                identifier=step.id,
                results=tuple(QuestionResult(identifier=q, answer=a) for q, a in step_answers.items()),
            )
        )
        step = navigable.step_after(step.id, task_result)

    print(f"Task: {definition.task.identifier}")
    print(f"Path: {' -> '.join(path)}")
    print(f"Steps visited: {len(path)}")
    return 0


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:])

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "next":
            exit_code = _run_next(args)
        elif args.command == "walk":
            exit_code = _run_walk(args)
        else:
            raise ValueError(f"Unknown command: {args.command}")
    except (ValueError, ValidationError) as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

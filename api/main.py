"""FastAPI application - step navigation endpoints"""
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel, Field

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

load_dotenv(project_root / ".env")

from application.navigation.navigable_task import NavigableTask
from domain.exceptions import UnknownStepError, ValidationError
from domain.task import TaskDefinition
from infrastructure.codec_errors import DecodeError
from infrastructure.logging.console_logger import ConsoleLogger
from infrastructure.navigation.rule_codec import NavigationRuleCodec
from infrastructure.results.task_result_codec import TaskResultCodec
from infrastructure.task.base_loader import TaskLoadError
from infrastructure.task.file_finder import TaskFileFinder
from infrastructure.task.loader_registry import TaskLoaderRegistry


class NextStepRequest(BaseModel):
    """Next-step request"""
    current_step_id: Optional[str] = Field(
        default=None,
        description="Step that just completed. Omit to get the first step.",
    )
    task_result: Dict[str, Any] = Field(description="Up-to-date result of the ongoing task")
    additional_task_results: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Results of previously completed tasks available to predicates",
    )


class NextStepResponse(BaseModel):
    """Next-step decision"""
    next_step_id: Optional[str] = Field(default=None, description="Step to show next")
    finished: bool = Field(description="True when the task ends")
    source: str = Field(description="start | rule | sequential | end")
    rule_type: Optional[str] = Field(default=None, description="Rule that decided, if any")


class StepResponse(BaseModel):
    id: str
    title: str = ""
    questions: List[str] = Field(default_factory=list)


class TaskSummaryResponse(BaseModel):
    """Task definition summary"""
    task_id: str
    steps: List[StepResponse]
    navigation_rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


app = FastAPI(
    title="Step Navigation Service",
    description="Branching step navigation for ordered tasks",
    version="1.0.0",
)

# 設定
TASKS_DIR = Path(os.getenv("NAVIGATION_TASKS_DIR", str(project_root / "tasks")))

RULE_CODEC = NavigationRuleCodec()
TASK_RESULT_CODEC = TaskResultCodec()


@app.get("/")
def read_root():
    """ヘルスチェック"""
    return {"status": "ok", "service": "step-navigation"}


def _load_definition(task_id: str) -> TaskDefinition:
    finder = TaskFileFinder(TASKS_DIR)
    task_file = finder.find_by_id(task_id)

    if task_file is None:
        raise HTTPException(status_code=404, detail=f"Task file not found: {task_id}")

    registry = TaskLoaderRegistry()
    try:
        loader = registry.get_loader(task_file)
        return loader.load_from_file(task_file)
    except TaskLoadError as e:
        raise HTTPException(status_code=500, detail=f"Task definition is invalid: {e}")


@app.get("/tasks/{task_id}", response_model=TaskSummaryResponse)
def get_task(task_id: str) -> TaskSummaryResponse:
    definition = _load_definition(task_id)
    return TaskSummaryResponse(
        task_id=definition.task.identifier,
        steps=[
            StepResponse(id=s.id, title=s.title, questions=list(s.questions))
            for s in definition.task.steps
        ],
        navigation_rules={
            trigger_id: RULE_CODEC.encode(rule)
            for trigger_id, rule in definition.navigation_rules.items()
        },
    )


@app.post("/tasks/{task_id}/navigation/next", response_model=NextStepResponse)
def next_step(task_id: str, request: NextStepRequest = Body(...)) -> NextStepResponse:
    """
    Decide which step follows ``current_step_id`` given the answers so far.
    """
    logger = ConsoleLogger().bind(task_id=task_id)
    definition = _load_definition(task_id)

    try:
        task_result = TASK_RESULT_CODEC.decode(request.task_result)
        additional = TASK_RESULT_CODEC.decode_many(request.additional_task_results)
    except DecodeError as e:
        raise HTTPException(status_code=422, detail=str(e))

    navigable = NavigableTask.from_definition(definition, logger)
    if additional:
        navigable.attach_additional_task_results(additional)

    try:
        outcome = navigable.decide_after(request.current_step_id, task_result)
    except UnknownStepError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        logger.error("navigation.failed", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return NextStepResponse(
        next_step_id=outcome.next_step_id,
        finished=outcome.finished,
        source=outcome.source.value,
        rule_type=outcome.rule_type,
    )

from infrastructure.task.base_loader import TaskLoadError, TaskLoaderBase
from infrastructure.task.file_finder import TaskFileFinder
from infrastructure.task.json_loader import JsonTaskLoader
from infrastructure.task.loader_registry import TaskLoaderRegistry
from infrastructure.task.yaml_loader import YamlTaskLoader

__all__ = [
    "TaskLoadError",
    "TaskLoaderBase",
    "TaskLoaderRegistry",
    "TaskFileFinder",
    "YamlTaskLoader",
    "JsonTaskLoader",
]

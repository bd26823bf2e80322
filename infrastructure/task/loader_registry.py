# infrastructure/task/loader_registry.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

from infrastructure.task.base_loader import TaskLoaderBase, TaskLoadError
from infrastructure.task.json_loader import JsonTaskLoader
from infrastructure.task.yaml_loader import YamlTaskLoader


class TaskLoaderRegistry:
    def __init__(self) -> None:
        self._loaders: Dict[str, TaskLoaderBase] = {
            ".yaml": YamlTaskLoader(),
            ".yml": YamlTaskLoader(),
            ".json": JsonTaskLoader(),
        }

    def get_loader(self, path: Path) -> TaskLoaderBase:
        ext = path.suffix.lower()
        loader = self._loaders.get(ext)
        if loader is None:
            raise TaskLoadError(f"Unsupported task format: {ext}")
        return loader

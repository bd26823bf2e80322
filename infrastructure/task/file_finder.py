"""Find task definition files by ID."""
from pathlib import Path
from typing import Optional


class TaskFileFinder:
    """Search task definition files under the given base directory."""

    PRIORITY = [".json", ".yaml", ".yml"]

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def find_by_id(self, task_id: str) -> Optional[Path]:
        """
        Find a task definition file by task ID.

        Args:
            task_id: Task ID (e.g., "symptom_survey")

        Returns:
            The Path if found, otherwise None.
        """
        if not self.base_dir.is_dir():
            return None

        candidates: list[Path] = []
        # .json wins over the YAML variants for the same task_id
        for ext in self.PRIORITY:
            for file_path in self.base_dir.rglob(f"{task_id}{ext}"):
                if file_path.is_file():
                    candidates.append(file_path)

        if not candidates:
            return None

        candidates.sort(key=lambda path: (self.PRIORITY.index(path.suffix), str(path)))
        return candidates[0]

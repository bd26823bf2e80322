# application/outcome.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NavigationSource(str, Enum):
    START = "start"
    RULE = "rule"
    SEQUENTIAL = "sequential"
    END = "end"


@dataclass(frozen=True)
class NavigationOutcome:
    next_step_id: Optional[str]
    finished: bool
    source: NavigationSource
    rule_type: Optional[str] = None

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest


class FakeLogger:
    def __init__(self, bound: Optional[Dict[str, Any]] = None, events: Optional[List[Dict[str, Any]]] = None) -> None:
        self.bound = bound or {}
        self.events = [] if events is None else events

    def bind(self, **fields: Any) -> "FakeLogger":
        merged = dict(self.bound)
        merged.update(fields)
        return FakeLogger(bound=merged, events=self.events)

    def _record(self, level: str, event: str, fields: Dict[str, Any]) -> None:
        payload = dict(self.bound)
        payload.update(fields)
        payload["type"] = event
        payload["level"] = level
        self.events.append(payload)

    def debug(self, event: str, **fields: Any) -> None:
        self._record("debug", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._record("info", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._record("warning", event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._record("error", event, fields)

    def of_type(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["type"] == event]


@pytest.fixture
def fake_logger() -> FakeLogger:
    return FakeLogger()

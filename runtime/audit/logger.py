"""JSONL audit trail for tool calls and authorization changes.

Writes go through one lock so concurrent tool calls never interleave
lines; reads share the parsing in :mod:`runtime.audit.query` with the CLI.
"""

from __future__ import annotations

import threading
from pathlib import Path

from contracts.audit import AuditEntry, AuditEvent, AuditLogger
from runtime.audit import query


class JsonlAuditLogger(AuditLogger):
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def log(self, entry: AuditEntry) -> None:
        line = entry.model_dump_json() + "\n"
        with self._lock, self._path.open("a", encoding="utf-8") as f:
            f.write(line)

    def query_by_request(self, request_id: str) -> list[AuditEntry]:
        with self._lock:
            return query.query_by_request(self._path, request_id)

    def query_by_event(self, event: AuditEvent, limit: int = 100) -> list[AuditEntry]:
        with self._lock:
            return query.query_by_event(self._path, event, limit)

    def query_by_tool(self, tool: str, limit: int = 100) -> list[AuditEntry]:
        """Recent call, result and error entries for one tool name."""
        with self._lock:
            return query.query_by_tool(self._path, tool, limit)

    def tail(self, n: int = 20) -> list[AuditEntry]:
        with self._lock:
            return query.tail(self._path, n)

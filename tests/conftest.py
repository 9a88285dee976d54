"""Shared pytest fixtures for logscan tests."""
from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture()
def tmp_log_file(tmp_path: Path):
    """Return a factory that creates temporary NDJSON log files."""

    def _make(lines: list[str], name: str = "test.log") -> Path:
        p = tmp_path / name
        p.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return p

    return _make


@pytest.fixture()
def json_log_lines() -> list[str]:
    return [
        json.dumps({"timestamp": "2015-04-24T20:00:00", "level": "info", "message": "startup",
                    "user": {"name": "ada", "roles": ["admin", "dev"]}}),
        json.dumps({"timestamp": "2015-04-24T21:00:00", "level": "error", "message": "disk full",
                    "user": {"name": "bob"}}),
        json.dumps({"timestamp": "2015-04-24T21:57:50", "level": "warn", "message": "retry, later",
                    "user": None}),
    ]


@pytest.fixture()
def collect():
    """A sink that records every (record, row) pair it receives."""

    class _Collector:
        def __init__(self) -> None:
            self.calls: list[tuple[object, list[object]]] = []

        def __call__(self, record, fields) -> None:
            self.calls.append((record, [f.accessor(record) for f in fields]))

        @property
        def header(self) -> list[object]:
            return self.calls[0][1]

        @property
        def rows(self) -> list[list[object]]:
            return [row for _, row in self.calls[1:]]

        @property
        def records(self) -> list[object]:
            return [record for record, _ in self.calls[1:]]

    return _Collector()

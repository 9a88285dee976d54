"""JSON record decoder — one NDJSON line in, one record dict out."""
from __future__ import annotations

import json
from typing import Any

from ..errors import DecodeError

LogEntry = dict[str, Any]


class JsonParser:
    """Decode newline-delimited JSON (NDJSON) log lines.

    Unlike a lenient reader, every line is expected to hold one JSON object:
    blank lines, invalid JSON and non-object values all raise
    :class:`~logscan.errors.DecodeError` and leave the decision to skip or
    abort to the caller.
    """

    def parse_line(self, line: str, line_number: int | None = None) -> LogEntry:
        if not line.strip():
            raise DecodeError("blank line", line_number, line)
        try:
            entry = json.loads(line)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"invalid JSON ({exc.msg})", line_number, line) from exc
        if not isinstance(entry, dict):
            raise DecodeError(
                f"expected a JSON object, got {type(entry).__name__}", line_number, line
            )
        return entry

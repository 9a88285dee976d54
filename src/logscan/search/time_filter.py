"""Time-range filtering for log records."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from ..errors import ConfigurationError, MissingBound, TimestampDecodeError

# Formats tried in order when ISO-8601 parsing fails
_TIMESTAMP_FORMATS: list[str] = [
    "%Y-%m-%d %H:%M:%S.%f",
    "%d/%b/%Y:%H:%M:%S %z",  # Apache Combined
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
]


def _naive_utc(ts: datetime) -> datetime:
    """Aware values are converted to UTC; naive ones are taken as-is."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def parse_timestamp(raw: Any) -> datetime:
    """Parse a datetime or timestamp string, raising TimestampDecodeError."""
    if isinstance(raw, datetime):
        return _naive_utc(raw)
    if not isinstance(raw, str):
        raise TimestampDecodeError(f"unparseable timestamp: {raw!r}")

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _naive_utc(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return _naive_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue
    raise TimestampDecodeError(f"unparseable timestamp: {raw!r}")


class TimestampFilter:
    """Keep records whose ``timestamp`` falls within [from_, until].

    Both bounds are inclusive and either may be omitted, but not both.  The
    record timestamp is parsed per record; a missing or unparseable value
    raises :class:`TimestampDecodeError` instead of quietly failing.
    """

    def __init__(
        self,
        from_: datetime | str | None = None,
        until: datetime | str | None = None,
        timestamp_key: str = "timestamp",
    ) -> None:
        if not from_ and not until:
            raise MissingBound()
        try:
            self.start = parse_timestamp(from_) if from_ else None
            self.end = parse_timestamp(until) if until else None
        except TimestampDecodeError as exc:
            raise ConfigurationError(f"invalid timestamp bound: {exc}") from exc
        self._key = timestamp_key

    def matches(self, record: dict[str, Any]) -> bool:
        ts = parse_timestamp(record.get(self._key))
        if self.start is not None and ts < self.start:
            return False
        if self.end is not None and ts > self.end:
            return False
        return True

    __call__ = matches

    def __repr__(self) -> str:
        return f"TimestampFilter(start={self.start!r}, end={self.end!r})"


def timestamp_filter(
    from_: datetime | str | None = None,
    until: datetime | str | None = None,
) -> Callable[[dict[str, Any]], bool]:
    """Build the built-in timestamp predicate (see :class:`TimestampFilter`)."""
    return TimestampFilter(from_=from_, until=until)

"""The scan driver: stream an NDJSON file through filters, mappers and a sink.

Usage::

    scan = LogScan(filename="app.log", output="tabbed", quiet=True)
    scan.add_fields(["timestamp", "level", "user.id"])
    scan.filter(lambda r: r["level"] != "debug")
    scan.map(lambda r, n: {**r, "level": r["level"].upper()})
    scan.scan()

Options may also be given as a mapping (``LogScan({"filename": ..., "from":
...})``) or a :class:`~logscan.config.ScanOptions`.  A scanner runs exactly
once; calling :meth:`LogScan.scan` again raises ScanStateError.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Iterable, Mapping

from pydantic import ValidationError
from rich.console import Console

from .config import ScanOptions, settings
from .errors import ConfigurationError, DecodeError, MissingFilename, ScanStateError
from .fields.accessor import Field, header_fields, make_fields
from .outputs.registry import SinkRegistry, default_registry
from .parsers.json_parser import JsonParser
from .parsers.source import iter_lines
from .search.filter_chain import FilterChain, Predicate
from .search.time_filter import timestamp_filter
from .transform.mapper_chain import Mapper, MapperChain

logger = logging.getLogger(__name__)

console = Console()


class ScanState(str, enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    DONE = "done"


def _load_options(options: ScanOptions | Mapping[str, Any] | None, overrides: dict[str, Any]) -> ScanOptions:
    if isinstance(options, ScanOptions):
        if not overrides:
            return options
        data = {name: getattr(options, name) for name in ScanOptions.model_fields}
    else:
        data = dict(options or {})
    data.update(overrides)
    try:
        return ScanOptions.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


class LogScan:
    """Scan a newline-delimited JSON log, emitting one row per kept record.

    Every line is decoded, tagged with its 1-based ``_line`` number, run
    through the filter chain, then (if kept) the mapper chain, and finally
    handed to the output sink together with the field projection.
    """

    def __init__(
        self,
        options: ScanOptions | Mapping[str, Any] | None = None,
        *,
        registry: SinkRegistry | None = None,
        **kwargs: Any,
    ) -> None:
        opts = _load_options(options, kwargs)
        if not opts.filename:
            raise MissingFilename()

        self.options = opts
        self.filename = opts.filename
        self.quiet = opts.resolved_quiet()
        self.skip_invalid = opts.resolved_skip_invalid()
        self.encoding = opts.resolved_encoding()
        self.output: Callable[..., Any] = (registry or default_registry).resolve(
            opts.output, default=settings.default_output
        )

        self._filters = FilterChain()
        self._mappers = MapperChain()
        self._fields: list[Field] = []
        self._parser = JsonParser()
        self.state = ScanState.IDLE

        self.line_count = 0
        self.output_count = 0
        self.skipped_count = 0

        if opts.from_ or opts.until:
            self.filter(timestamp_filter(from_=opts.from_, until=opts.until))

        if opts.fields is not None:
            self.add_fields(opts.fields)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _ensure_idle(self) -> None:
        if self.state is not ScanState.IDLE:
            raise ScanStateError(f"scanner is {self.state.value}; configure it before scan()")

    def add_fields(self, fields: Any) -> "LogScan":
        """Append one field spec or a list of them to the projection.

        A spec is a key (``"level"``), a dotted path (``"user.address.city"``)
        or a callable taking the record.
        """
        self._ensure_idle()
        self._fields.extend(make_fields(fields))
        return self

    def filter(self, predicate: Predicate) -> "LogScan":
        """Keep only records for which ``predicate`` does not return False."""
        self._ensure_idle()
        self._filters.add(predicate)
        return self

    def map(self, mapper: Mapper) -> "LogScan":
        """Transform kept records with ``mapper(record, emitted_count)``."""
        self._ensure_idle()
        self._mappers.add(mapper)
        return self

    add_filter = filter
    add_mapper = map

    @property
    def fields(self) -> tuple[Field, ...]:
        return tuple(self._fields)

    @property
    def field_keys(self) -> list[str]:
        return [f.key for f in self._fields]

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _status(self, message: str) -> None:
        if not self.quiet:
            console.print(f"[dim]{message}[/dim]", highlight=False)

    def _start(self) -> None:
        self._ensure_idle()
        if not self._fields:
            self._fields.extend(make_fields(settings.default_fields))
        self.state = ScanState.SCANNING
        self.line_count = 0
        self.output_count = 0
        self.skipped_count = 0
        logger.debug("Scanning %s with fields %s", self.filename, self.field_keys)
        self._status("Starting scan...")

        # The header goes through the sink like any record, once, before data.
        header_record, header_projection = header_fields(self._fields)
        self.output(header_record, header_projection)

    def _process(self, line: str) -> None:
        self.line_count += 1
        try:
            record = self._parser.parse_line(line, self.line_count)
            record["_line"] = self.line_count
            if not self._filters.matches(record):
                return
        except DecodeError as exc:
            if not self.skip_invalid:
                raise
            self.skipped_count += 1
            logger.warning("Skipping %s", exc)
            return

        record = self._mappers.apply(record, self.output_count)
        self.output(record, list(self._fields))
        self.output_count += 1

    def scan(self, lines: Iterable[str] | None = None) -> "LogScan":
        """Run the scan to the end of the source.

        ``lines`` replaces reading ``filename`` with any iterable of raw
        lines.  Rows already written stay written if the scan aborts.
        """
        self._start()
        source = iter_lines(self.filename, self.encoding) if lines is None else lines
        try:
            for line in source:
                self._process(line)
        finally:
            self.state = ScanState.DONE

        summary = f"Done.  Scanned {self.line_count} lines, output {self.output_count}"
        if self.skipped_count:
            summary += f", skipped {self.skipped_count}"
        self._status(summary)
        logger.debug(summary)
        return self

    def __repr__(self) -> str:
        return (
            f"LogScan(filename={str(self.filename)!r}, fields={self.field_keys}, "
            f"filters={len(self._filters)}, mappers={len(self._mappers)}, state={self.state.value})"
        )

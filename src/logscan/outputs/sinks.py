"""Built-in output sinks.

A sink is any callable ``sink(record, fields)``.  It receives the record that
survived filtering and mapping together with the scanner's projection, and is
responsible for rendering and writing one row.  The scanner also calls it
once, before any data row, with the header pseudo-record.
"""
from __future__ import annotations

import json
from typing import IO, Any, Iterable, Protocol, runtime_checkable

import click

from ..fields.accessor import Field, project


@runtime_checkable
class Sink(Protocol):
    """Protocol for output sinks — duck-typed, no inheritance required."""

    def __call__(self, record: Any, fields: list[Field]) -> None: ...


def render_value(value: Any, none: str = "") -> str:
    """Render one projected value as text."""
    if value is None:
        return none
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def escape_delimited(value: Any) -> str:
    """Quote a value for the delimited sink.

    Strings holding a comma or newline are wrapped in double quotes with any
    inner double quote escaped as ``\\"``.  This is not RFC 4180 quoting and
    standard CSV readers will not round-trip such cells.
    """
    if isinstance(value, str) and ("," in value or "\n" in value):
        return '"' + value.replace('"', '\\"') + '"'
    return render_value(value)


def format_delimited(values: Iterable[Any]) -> str:
    return ",".join(escape_delimited(v) for v in values)


def format_tabbed(values: Iterable[Any]) -> str:
    return "\t".join(render_value(v, none="null") for v in values)


def format_raw(record: Any) -> str:
    return json.dumps(record, separators=(",", ":"), default=str)


class _EchoSink:
    """Shared plumbing: write one rendered line per call."""

    name = ""

    def __init__(self, file: IO[str] | None = None) -> None:
        self._file = file

    def write(self, line: str) -> None:
        click.echo(line, file=self._file)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DelimitedSink(_EchoSink):
    """Comma-separated projected values (the default sink)."""

    name = "csv"

    def __call__(self, record: Any, fields: list[Field]) -> None:
        self.write(format_delimited(project(record, fields)))


class TabbedSink(_EchoSink):
    """Tab-separated projected values for reading at a console."""

    name = "tabbed"

    def __call__(self, record: Any, fields: list[Field]) -> None:
        self.write(format_tabbed(project(record, fields)))


class RawSink(_EchoSink):
    """The whole record as compact JSON, ignoring the projection."""

    name = "raw"

    def __call__(self, record: Any, fields: list[Field]) -> None:
        self.write(format_raw(record))

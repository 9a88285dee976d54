"""Compile field specifications into record accessors.

A field spec is either a callable (used verbatim) or a string path such as
``"timestamp"`` or ``"request.headers.host"``.  Both compile once, at
registration time, into a :class:`Field` pairing a display key with an
accessor that never raises on missing intermediate keys::

    field = make_field("bar.baz.boom")
    field.accessor({"bar": {"baz": {"boom": "got it"}}})  # -> "got it"
    field.accessor({"bar": {"oops": 1}})                    # -> None
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from ..errors import InvalidFieldSpecification

Record = Any
Accessor = Callable[[Record], Any]


@dataclass(frozen=True)
class Field:
    """One output column: its header ``key`` and how to extract its value."""

    key: str
    accessor: Accessor

    def __call__(self, record: Record) -> Any:
        return self.accessor(record)


def _step(value: Any, segment: str) -> Any:
    """Look up one path segment, returning None when it does not resolve."""
    if isinstance(value, dict):
        return value.get(segment)
    if isinstance(value, (list, tuple)) and segment.isdecimal():
        index = int(segment)
        return value[index] if index < len(value) else None
    return None


def str_to_accessor(path: str) -> Accessor:
    """Build an accessor for a plain key or a dot-separated path."""
    segments = path.split(".")

    if len(segments) == 1:
        return lambda record: _step(record, path)

    def walk(record: Record) -> Any:
        value = record
        for segment in segments:
            if value is None:
                return None
            value = _step(value, segment)
        return value

    return walk


def display_key(spec: Any) -> str:
    """Header name for a spec: the path, the function name, or a lambda's source."""
    if isinstance(spec, str):
        return spec
    name = getattr(spec, "__name__", None)
    if name and name != "<lambda>":
        return name
    try:
        return inspect.getsource(spec).strip()
    except (OSError, TypeError):
        return getattr(spec, "__qualname__", None) or type(spec).__name__


def compile_accessor(spec: Any) -> Accessor:
    """Turn a field spec into an accessor, failing fast on unsupported types."""
    if isinstance(spec, Field):
        return spec.accessor
    if isinstance(spec, str):
        return str_to_accessor(spec)
    if callable(spec):
        return spec
    raise InvalidFieldSpecification(spec)


def make_field(spec: Any) -> Field:
    if isinstance(spec, Field):
        return spec
    return Field(key=display_key(spec), accessor=compile_accessor(spec))


def make_fields(specs: Any) -> list[Field]:
    """Compile one spec or a sequence of specs, preserving order."""
    if isinstance(specs, (list, tuple)):
        return [make_field(s) for s in specs]
    return [make_field(specs)]


def project(record: Record, fields: Iterable[Field]) -> list[Any]:
    """Extract each field's value from ``record`` in projection order."""
    return [f.accessor(record) for f in fields]


def header_fields(fields: Iterable[Field]) -> tuple[dict[str, str], list[Field]]:
    """Build the header pseudo-record and direct-key fields that read it.

    Every header cell renders as its own display key, whatever the field's own
    accessor would have made of a ``{key: key}`` record.
    """
    fields = list(fields)
    record = {f.key: f.key for f in fields}
    direct = [Field(key=f.key, accessor=_key_getter(f.key)) for f in fields]
    return record, direct


def _key_getter(key: str) -> Accessor:
    return lambda record: record.get(key)

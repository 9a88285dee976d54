"""Composable filter chain for log records.

Filters are callables that accept a record and return a verdict.  Only a
verdict that *is* ``False`` rejects the record: ``0``, ``""`` and ``None``
all let it through.  Chains short-circuit on the first rejection (AND
semantics).
"""
from __future__ import annotations

import logging
from typing import Any, Callable

from ..errors import InvalidFilterType

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], Any]


class FilterChain:
    """Apply multiple predicates in sequence (logical AND).

    Usage::

        chain = FilterChain()
        chain.add(timestamp_filter(from_="2015-04-24T20:55"))
        chain.add(lambda r: r.get("level") != "debug")

        if chain.matches(record):
            ...
    """

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []

    def add(self, predicate: Predicate) -> "FilterChain":
        """Append a predicate and return self for chaining."""
        if not callable(predicate):
            raise InvalidFilterType(predicate)
        self._predicates.append(predicate)
        logger.debug("Added filter #%d: %r", len(self._predicates), predicate)
        return self

    def matches(self, record: Any) -> bool:
        """Return False as soon as one predicate returns exactly False."""
        for predicate in self._predicates:
            if predicate(record) is False:
                return False
        return True

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        return f"FilterChain({len(self._predicates)} predicates)"

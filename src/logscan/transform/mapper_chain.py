"""Sequential record transforms applied after filtering."""
from __future__ import annotations

import logging
from typing import Any, Callable

from ..errors import InvalidMapperType

logger = logging.getLogger(__name__)

Mapper = Callable[[Any, int], Any]


class MapperChain:
    """Feed a record through each mapper in registration order.

    Each mapper is called as ``mapper(record, emitted_count)`` where
    ``emitted_count`` is how many records were output before this one.  The
    value it returns becomes the next mapper's input; shapes are not checked,
    so a mapper may replace the record entirely.
    """

    def __init__(self) -> None:
        self._mappers: list[Mapper] = []

    def add(self, mapper: Mapper) -> "MapperChain":
        if not callable(mapper):
            raise InvalidMapperType(mapper)
        self._mappers.append(mapper)
        logger.debug("Added mapper #%d: %r", len(self._mappers), mapper)
        return self

    def apply(self, record: Any, emitted_count: int) -> Any:
        for mapper in self._mappers:
            record = mapper(record, emitted_count)
        return record

    def __len__(self) -> int:
        return len(self._mappers)

    def __repr__(self) -> str:
        return f"MapperChain({len(self._mappers)} mappers)"

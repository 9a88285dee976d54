"""Sink registry — resolve, register, and discover output sinks.

Lookup order:
  1. Built-in sinks (csv, tabbed, raw and their legacy aliases).
  2. Entry-points under the "logscan.outputs" group (third-party packages),
     loaded by discover() or on the first resolve() of an unknown name.
  3. Sinks explicitly registered at runtime via SinkRegistry.register().

Later registrations under an existing name replace the earlier one.
"""
from __future__ import annotations

import importlib.metadata
import logging
from typing import IO, Any, Callable

from .sinks import DelimitedSink, RawSink, Sink, TabbedSink

logger = logging.getLogger(__name__)

SinkFactory = Callable[..., Sink]

DEFAULT_SINK = "csv"


class SinkRegistry:
    """Map sink names to factories producing ``sink(record, fields)`` callables.

    Usage::

        registry = SinkRegistry()
        registry.discover()  # loads entry-point sinks

        sink = registry.resolve("tabbed")
    """

    def __init__(self) -> None:
        self._factories: dict[str, SinkFactory] = {}
        self._discovered = False
        for factory in (DelimitedSink, TabbedSink, RawSink):
            self.register(factory.name, factory)
        self.register("consoleTabbed", TabbedSink)
        self.register("stringify", RawSink)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str, factory: SinkFactory) -> None:
        if not callable(factory):
            raise TypeError(f"{factory!r} is not a sink factory")
        self._factories[name] = factory
        logger.debug("Registered sink: %s", name)

    def discover(self) -> int:
        """Load sink factories from the 'logscan.outputs' entry-point group.

        Returns the number of sinks successfully loaded.
        """
        self._discovered = True
        loaded = 0
        try:
            eps = importlib.metadata.entry_points(group="logscan.outputs")
        except Exception as exc:
            logger.warning("Entry-point discovery failed: %s", exc)
            return 0

        for ep in eps:
            try:
                self.register(ep.name, ep.load())
                loaded += 1
            except Exception as exc:
                logger.warning("Failed to load sink %r: %s", ep.name, exc)

        return loaded

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> SinkFactory | None:
        return self._factories.get(name)

    def list_sinks(self) -> list[str]:
        return sorted(self._factories)

    def resolve(
        self,
        output: str | Callable[..., Any] | None,
        default: str = DEFAULT_SINK,
        file: IO[str] | None = None,
    ) -> Callable[..., Any]:
        """Return a ready-to-call sink.

        A callable ``output`` is used verbatim.  A name is looked up, loading
        entry-point sinks the first time a name is not already registered;
        unknown or missing names fall back to ``default`` (and then to csv).
        """
        if callable(output):
            return output
        if output and output not in self._factories and not self._discovered:
            self.discover()
        factory = self._factories.get(output) if output else None
        if factory is None:
            if output:
                logger.warning("Unknown output %r, falling back to %r", output, default)
            factory = self._factories.get(default) or self._factories[DEFAULT_SINK]
        return factory(file=file)


# Module-level singleton — shared across the application
default_registry = SinkRegistry()

"""Configuration via pydantic-settings — 12-factor app style.

``Settings`` holds process-wide defaults loaded from ``LOGSCAN_*`` env vars or
a ``.env`` file.  ``ScanOptions`` is the per-scanner option bundle; anything
left unset there falls back to ``settings``.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Logscan defaults — loaded from env vars / .env file."""

    default_output: str = Field(default="csv", description="Sink used when none is named (csv|tabbed|raw)")
    default_fields: list[str] = Field(
        default=["timestamp", "level", "message"],
        description="Projection installed when no field was added before scan()",
    )
    quiet: bool = Field(default=False, description="Suppress start/summary status lines")
    encoding: str = Field(default="utf-8", description="Text encoding of scanned files")
    skip_invalid: bool = Field(default=False, description="Skip malformed lines instead of aborting")

    class Config:
        env_prefix = "LOGSCAN_"
        env_file = ".env"


settings = Settings()


class ScanOptions(BaseModel):
    """Options for a single :class:`~logscan.scanner.LogScan`.

    ``from`` is a Python keyword, so the bound is stored as ``from_`` and
    accepted under either name.
    """

    filename: str | Path | None = None
    from_: datetime | str | None = Field(default=None, alias="from")
    until: datetime | str | None = None
    fields: Any = None
    output: str | Callable[..., Any] | None = None
    quiet: bool | None = None
    skip_invalid: bool | None = None
    encoding: str | None = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True
        frozen = True

    def resolved_quiet(self) -> bool:
        return settings.quiet if self.quiet is None else self.quiet

    def resolved_skip_invalid(self) -> bool:
        return settings.skip_invalid if self.skip_invalid is None else self.skip_invalid

    def resolved_encoding(self) -> str:
        return self.encoding or settings.encoding

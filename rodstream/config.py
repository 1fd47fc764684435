"""Reader settings.

Defaults live on the dataclass; ``ReaderSettings.from_env`` overlays
``RODSTREAM_*`` environment variables so batch scripts can tune a run
without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .core.errors import ConfigError

__all__ = ["ReaderSettings", "ENV_PREFIX"]

ENV_PREFIX = "RODSTREAM_"
_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class ReaderSettings:
	"""Knobs shared by every reader.

	Parameters
	----------
	encoding : str
		Text encoding of track files (gzip members included).
	max_records : int | None
		Stop each stream after this many records; handy for prototyping on
		a slice of a large file.
	line_preview : int
		Number of characters of an offending line quoted in diagnostics.
	log_level : str
		Default level for ``rodstream.utils.configure_logging`` in scripts.
	"""

	encoding: str = "utf-8"
	max_records: Optional[int] = None
	line_preview: int = 120
	log_level: str = "INFO"

	def __post_init__(self):
		if self.max_records is not None and self.max_records < 1:
			raise ConfigError(f"max_records must be positive, got {self.max_records}")
		if self.line_preview < 0:
			raise ConfigError(f"line_preview must be >= 0, got {self.line_preview}")
		if self.log_level.upper() not in _LEVELS:
			raise ConfigError(f"Unknown log level {self.log_level!r}; expected one of {', '.join(_LEVELS)}")

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional["ReaderSettings"] = None) -> "ReaderSettings":
		env = os.environ if environ is None else environ
		settings = base or cls()
		updates = {}
		if f"{ENV_PREFIX}ENCODING" in env:
			updates["encoding"] = env[f"{ENV_PREFIX}ENCODING"]
		if f"{ENV_PREFIX}MAX_RECORDS" in env:
			raw = env[f"{ENV_PREFIX}MAX_RECORDS"].strip()
			updates["max_records"] = None if raw in ("", "0", "none") else _to_int("MAX_RECORDS", raw)
		if f"{ENV_PREFIX}LINE_PREVIEW" in env:
			updates["line_preview"] = _to_int("LINE_PREVIEW", env[f"{ENV_PREFIX}LINE_PREVIEW"])
		if f"{ENV_PREFIX}LOG_LEVEL" in env:
			updates["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"].strip().upper()
		return replace(settings, **updates) if updates else settings

	def preview(self, line: str) -> str:
		if len(line) <= self.line_preview:
			return line
		return line[: self.line_preview] + "..."


def _to_int(key: str, raw: str) -> int:
	try:
		return int(raw)
	except ValueError:
		raise ConfigError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from None

"""Format capability contract.

A format plugin is a ``RecordFormat`` subclass. The registry stores the
class (or any callable with the same signature) as a factory; the reader
builds one instance per opened track:

1. ``RecordFormat(track_name)`` – blank capability bound to a track.
2. ``initialize(handle)`` – optional, one-shot; reads whatever header the
   format has and returns a ``HeaderInfo`` (header state + delimiter).
3. ``parse(header, fields)`` – called for every non-blank line with the
   tokenized fields; returns ``Ok``, ``Skip`` or ``Malformed``. Raising
   ``ValueError``/``IndexError``/``KeyError`` is also read as malformed.

Location access and ordering come from the records themselves
(``rodstream.core.record.Record``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, TextIO, Iterator

from ..core.outcome import ParseOutcome, Skip, SKIP

__all__ = ["HeaderInfo", "RecordFormat", "iter_header_lines", "comment_or_blank"]

TAB = "\t"


@dataclass(frozen=True)
class HeaderInfo:
	"""Per-track metadata produced once by ``RecordFormat.initialize``.

	``delimiter`` is a regular expression; ``None`` splits on whitespace.
	"""

	header: Any = None
	delimiter: Optional[str] = None


class RecordFormat:
	"""Base capability. Subclasses set ``name`` and implement ``parse``."""

	name = "generic"

	def __init__(self, track_name: str):
		self.track_name = track_name

	def initialize(self, handle: TextIO) -> HeaderInfo:
		return HeaderInfo()

	def parse(self, header: Any, fields: Sequence[str]) -> ParseOutcome:
		raise NotImplementedError

	def __repr__(self) -> str:
		return f"{type(self).__name__}(track={self.track_name!r})"


def comment_or_blank(fields: Sequence[str], prefixes: Sequence[str] = ("#",)) -> Optional[Skip]:
	"""Return ``SKIP`` for an empty token list or one starting with a comment prefix."""
	if not fields or not fields[0]:
		return SKIP if not any(fields) else None
	if fields[0].startswith(tuple(prefixes)):
		return SKIP
	return None


def iter_header_lines(handle: TextIO) -> Iterator[str]:
	"""Yield stripped, non-blank lines from the top of ``handle``."""
	for raw in handle:
		line = raw.rstrip("\r\n")
		if line.strip():
			yield line

"""Genomic locations.

``GenomeLoc`` is the ordering key for every record: contig first (natural
order, so ``chr2`` sorts before ``chr10``), then start, then stop.
Coordinates are 1-based and inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Optional, Tuple
import re

from .errors import MalformedLocation
from ..utils import natural_sort_key

__all__ = ["GenomeLoc"]

_LOC_RE = re.compile(r"^(?P<contig>[^:\s]+):(?P<start>[\d,]+)(?:-(?P<stop>[\d,]+))?$")


@total_ordering
@dataclass(frozen=True, eq=False)
class GenomeLoc:
	"""A contig interval ``[start, stop]``; a single position has stop == start."""

	contig: str
	start: int
	stop: Optional[int] = None
	_key: Tuple = field(init=False, repr=False, compare=False)

	def __post_init__(self):
		if not self.contig:
			raise MalformedLocation("Empty contig name")
		stop = self.start if self.stop is None else self.stop
		if self.start < 1:
			raise MalformedLocation(f"Start must be >= 1, got {self.contig}:{self.start}")
		if stop < self.start:
			raise MalformedLocation(f"Stop {stop} precedes start {self.start} on {self.contig}")
		object.__setattr__(self, "stop", stop)
		object.__setattr__(self, "_key", (tuple(natural_sort_key(self.contig)), self.contig, self.start, stop))

	@classmethod
	def parse(cls, text: str) -> "GenomeLoc":
		"""Parse ``contig:pos`` or ``contig:start-stop`` (commas allowed in numbers)."""
		m = _LOC_RE.match(text.strip()) if text else None
		if m is None:
			raise MalformedLocation(f"Failed to parse genome location {text!r}")
		start = int(m.group("start").replace(",", ""))
		stop_txt = m.group("stop")
		stop = int(stop_txt.replace(",", "")) if stop_txt else None
		return cls(m.group("contig"), start, stop)

	def sort_key(self) -> Tuple:
		return self._key

	@property
	def size(self) -> int:
		return self.stop - self.start + 1

	def contains(self, position: int) -> bool:
		return self.start <= position <= self.stop

	def overlaps(self, other: "GenomeLoc") -> bool:
		return self.contig == other.contig and self.start <= other.stop and other.start <= self.stop

	def __eq__(self, other):
		if not isinstance(other, GenomeLoc):
			return NotImplemented
		return self._key == other._key

	def __lt__(self, other):
		if not isinstance(other, GenomeLoc):
			return NotImplemented
		return self._key < other._key

	def __hash__(self):
		return hash(self._key)

	def __str__(self) -> str:
		if self.stop == self.start:
			return f"{self.contig}:{self.start}"
		return f"{self.contig}:{self.start}-{self.stop}"

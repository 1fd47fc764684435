"""Base record type shared by every format."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any

from .location import GenomeLoc

__all__ = ["Record"]


@dataclass(frozen=True)
class Record:
	"""An immutable, location-bearing record produced from one input line.

	Records sort by location (``a < b`` compares ``a.location``), so any list
	of records can go straight through ``sorted()``. Equality stays
	field-wise: two different rows at the same position are not equal.
	"""

	track: str
	location: GenomeLoc

	@property
	def contig(self) -> str:
		return self.location.contig

	@property
	def start(self) -> int:
		return self.location.start

	@property
	def stop(self) -> int:
		return self.location.stop

	def __lt__(self, other):
		if not isinstance(other, Record):
			return NotImplemented
		return self.location < other.location

	def to_line(self) -> str:
		"""Render the record as a line of text (no trailing newline)."""
		return str(self.location)

	def as_row(self) -> Dict[str, Any]:
		"""Format-specific fields for tabular export; location columns are added by the caller."""
		return {}

"""Interval lists.

Each data line is either a single ``contig:start-stop`` token or
``contig start stop [strand [name]]`` columns (Picard interval lists).
``@`` header lines and ``#`` comments are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..core.location import GenomeLoc
from ..core.outcome import Ok, Malformed, ParseOutcome
from ..core.record import Record
from ..utils import parse_int
from .base import RecordFormat, comment_or_blank

__all__ = ["IntervalRecord", "IntervalFormat"]


@dataclass(frozen=True)
class IntervalRecord(Record):
	strand: Optional[str] = None
	name: Optional[str] = None

	def as_row(self) -> Dict[str, Any]:
		return {"Strand": self.strand, "Name": self.name}

	def to_line(self) -> str:
		if self.strand is None and self.name is None:
			return str(self.location)
		cols = [self.contig, str(self.start), str(self.stop), self.strand or "+"]
		if self.name:
			cols.append(self.name)
		return "\t".join(cols)


class IntervalFormat(RecordFormat):
	name = "Intervals"

	def parse(self, header: Any, fields: Sequence[str]) -> ParseOutcome:
		skip = comment_or_blank(fields, ("#", "@"))
		if skip is not None:
			return skip
		if len(fields) == 1:
			return Ok(IntervalRecord(self.track_name, GenomeLoc.parse(fields[0])))
		if len(fields) == 2:
			return Malformed("expected contig:start-stop or contig start stop")
		loc = GenomeLoc(fields[0], parse_int(fields[1], "start"), parse_int(fields[2], "stop"))
		strand = fields[3] if len(fields) > 3 else None
		if strand is not None and strand not in ("+", "-"):
			return Malformed(f"invalid strand {strand!r}")
		name = fields[4] if len(fields) > 4 else None
		return Ok(IntervalRecord(self.track_name, loc, strand=strand, name=name))

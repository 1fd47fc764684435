"""UCSC dbSNP table dumps.

Columns: bin, chrom, chromStart, chromEnd, name, score, strand, refNCBI,
refUCSC, observed, molType, class, ... ``chromStart`` is 0-based, so the
record location is ``chromStart + 1 .. chromEnd``; insertions (start ==
end) collapse to the single base after ``chromStart``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, TextIO, Tuple

from ..core.location import GenomeLoc
from ..core.outcome import Ok, Malformed, ParseOutcome
from ..core.record import Record
from ..utils import parse_int
from .base import HeaderInfo, RecordFormat, TAB, comment_or_blank

__all__ = ["DbSnpRecord", "DbSnpFormat"]

MIN_COLUMNS = 5


@dataclass(frozen=True)
class DbSnpRecord(Record):
	name: str = ""
	strand: str = "+"
	observed: Optional[str] = None
	mol_type: Optional[str] = None
	var_class: Optional[str] = None
	raw: Tuple[str, ...] = ()

	@property
	def is_snp(self) -> bool:
		return self.var_class == "single"

	@property
	def is_indel(self) -> bool:
		return self.var_class in ("in-del", "insertion", "deletion")

	def observed_alleles(self):
		return self.observed.split("/") if self.observed else []

	def as_row(self) -> Dict[str, Any]:
		return {"Name": self.name, "Strand": self.strand, "Observed": self.observed, "Class": self.var_class}

	def to_line(self) -> str:
		return TAB.join(self.raw)


class DbSnpFormat(RecordFormat):
	name = "dbSNP"

	def initialize(self, handle: TextIO) -> HeaderInfo:
		return HeaderInfo(delimiter=TAB)

	def parse(self, header: Any, fields: Sequence[str]) -> ParseOutcome:
		skip = comment_or_blank(fields)
		if skip is not None:
			return skip
		if len(fields) < MIN_COLUMNS:
			return Malformed(f"dbSNP line has {len(fields)} columns, need at least {MIN_COLUMNS}")
		chrom_start = parse_int(fields[2], "chromStart")
		chrom_end = parse_int(fields[3], "chromEnd")
		if chrom_end < chrom_start:
			return Malformed(f"chromEnd {chrom_end} precedes chromStart {chrom_start}")
		start = chrom_start + 1
		# insertions: chromEnd == chromStart
		loc = GenomeLoc(fields[1], start, max(start, chrom_end))

		def col(i):
			return fields[i] if len(fields) > i else None

		return Ok(DbSnpRecord(
			self.track_name,
			loc,
			name=fields[4],
			strand=col(6) or "+",
			observed=col(9),
			mol_type=col(10),
			var_class=col(11),
			raw=tuple(fields),
		))

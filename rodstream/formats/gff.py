"""GFF/GTF feature annotations (nine tab-separated columns)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, TextIO

from ..core.location import GenomeLoc
from ..core.outcome import Ok, Malformed, ParseOutcome
from ..utils import parse_gff_attributes, parse_int
from ..core.record import Record
from .base import HeaderInfo, RecordFormat, TAB, comment_or_blank

__all__ = ["GffRecord", "GffFormat"]

GFF_COLUMNS = 9


@dataclass(frozen=True)
class GffRecord(Record):
	source: str = "."
	feature: str = "."
	score: Optional[float] = None
	strand: str = "."
	frame: str = "."
	attributes: Tuple[Tuple[str, str], ...] = ()

	def has_attribute(self, key: str) -> bool:
		return any(k == key for k, _ in self.attributes)

	def get_attribute(self, key: str, default: Optional[str] = None) -> Optional[str]:
		for k, v in self.attributes:
			if k == key:
				return v
		return default

	def as_row(self) -> Dict[str, Any]:
		return {
			"Source": self.source,
			"Feature": self.feature,
			"Score": self.score,
			"Strand": self.strand,
		}

	def to_line(self) -> str:
		attrs = ";".join(f"{k}={v}" if v else k for k, v in self.attributes) or "."
		return TAB.join([
			self.contig,
			self.source,
			self.feature,
			str(self.start),
			str(self.stop),
			"." if self.score is None else f"{self.score:g}",
			self.strand,
			self.frame,
			attrs,
		])


class GffFormat(RecordFormat):
	name = "GFF"

	def initialize(self, handle: TextIO) -> HeaderInfo:
		return HeaderInfo(delimiter=TAB)

	def parse(self, header: Any, fields: Sequence[str]) -> ParseOutcome:
		skip = comment_or_blank(fields)
		if skip is not None:
			return skip
		if len(fields) < GFF_COLUMNS - 1:
			return Malformed(f"GFF line has {len(fields)} columns, need {GFF_COLUMNS - 1} or {GFF_COLUMNS}")
		seqname, source, feature, start, end, score, strand, frame = fields[:8]
		attr_text = fields[8] if len(fields) > 8 else ""
		if strand not in ("+", "-", ".", "?"):
			return Malformed(f"invalid strand {strand!r}")
		loc = GenomeLoc(seqname, parse_int(start, "start"), parse_int(end, "end"))
		return Ok(GffRecord(
			self.track_name,
			loc,
			source=source,
			feature=feature,
			score=None if score == "." else float(score),
			strand=strand,
			frame=frame,
			attributes=tuple(parse_gff_attributes(attr_text).items()),
		))

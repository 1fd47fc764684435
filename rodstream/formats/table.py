"""Generic tabular tracks and HapMap genotype tables.

A ``Table`` file starts with a header line ``HEADER loc col2 col3 ...``;
every following row has one value per header column and its first column
is a location (``chr1:100`` or ``chr1:100-200``)::

	HEADER  loc        gene   score
	chr1:100           ABC    0.5

HapMap genotype tables have their own header (``rs# alleles chrom pos ...``)
with 11 fixed columns followed by one column per sample.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, TextIO, List

from ..core.errors import HeaderError
from ..core.location import GenomeLoc
from ..core.outcome import Ok, Malformed, SKIP, ParseOutcome
from ..core.record import Record
from ..utils import normalize_chrom, parse_int
from .base import HeaderInfo, RecordFormat, comment_or_blank, iter_header_lines

__all__ = [
	"TableRecord",
	"TableFormat",
	"HapMapGenotypeRecord",
	"HapMapGenotypeFormat",
	"HAPMAP_FIXED_COLUMNS",
]

HEADER_TOKEN = "HEADER"
HAPMAP_FIXED_COLUMNS = 11


@dataclass(frozen=True)
class TableRecord(Record):
	"""One row of a tabular track.

	``columns`` is the header tuple shared by every row of the track;
	``values`` lines up with it position by position.
	"""

	columns: Tuple[str, ...] = ()
	values: Tuple[str, ...] = ()

	def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
		try:
			return self.values[self.columns.index(key)]
		except ValueError:
			return default

	def __getitem__(self, key: str) -> str:
		value = self.get(key)
		if value is None:
			raise KeyError(key)
		return value

	def __contains__(self, key: str) -> bool:
		return key in self.columns

	def as_dict(self) -> Dict[str, str]:
		return dict(zip(self.columns, self.values))

	def as_row(self) -> Dict[str, Any]:
		return self.as_dict()

	def to_line(self) -> str:
		return "\t".join(self.values)


class TableFormat(RecordFormat):
	"""``HEADER``-prefixed whitespace-delimited table; first column is the location."""

	name = "Table"
	record_type = TableRecord

	def initialize(self, handle: TextIO) -> HeaderInfo:
		for line in iter_header_lines(handle):
			if line.startswith("#"):
				continue
			parts = line.split()
			if parts[0] != HEADER_TOKEN:
				raise HeaderError(
					f"Track '{self.track_name}': expected a '{HEADER_TOKEN}' line before data, got {line[:60]!r}"
				)
			columns = tuple(parts[1:])
			if not columns:
				raise HeaderError(f"Track '{self.track_name}': empty {HEADER_TOKEN} line")
			return HeaderInfo(header=columns)
		# nothing but blanks and comments: an empty track
		return HeaderInfo(header=())

	def parse(self, header: Tuple[str, ...], fields: Sequence[str]) -> ParseOutcome:
		skip = comment_or_blank(fields)
		if skip is not None:
			return skip
		if fields[0] == HEADER_TOKEN:
			return SKIP
		if len(fields) != len(header):
			return Malformed(f"expected {len(header)} columns, found {len(fields)}")
		loc = GenomeLoc.parse(fields[0])
		return Ok(self.record_type(self.track_name, loc, header, tuple(fields)))


@dataclass(frozen=True)
class HapMapGenotypeRecord(TableRecord):
	"""A HapMap genotype row: fixed SNP columns then one genotype per sample."""

	@property
	def rsid(self) -> Optional[str]:
		return self.get("rs#")

	@property
	def alleles(self) -> Optional[str]:
		return self.get("alleles")

	@property
	def sample_ids(self) -> Tuple[str, ...]:
		return self.columns[HAPMAP_FIXED_COLUMNS:]

	@property
	def genotypes(self) -> Tuple[str, ...]:
		return self.values[HAPMAP_FIXED_COLUMNS:]

	def genotype(self, sample_id: str) -> Optional[str]:
		if sample_id not in self.sample_ids:
			return None
		return self.get(sample_id)

	def as_row(self) -> Dict[str, Any]:
		return {"rsid": self.rsid, "alleles": self.alleles, "samples": len(self.sample_ids)}

	def to_line(self) -> str:
		return " ".join(self.values)


class HapMapGenotypeFormat(TableFormat):
	"""HapMap genotype dump (``rs# alleles chrom pos strand assembly# ...``)."""

	name = "HapMapGenotype"
	record_type = HapMapGenotypeRecord

	def initialize(self, handle: TextIO) -> HeaderInfo:
		for line in iter_header_lines(handle):
			columns = tuple(line.split())
			if columns[0] != "rs#":
				raise HeaderError(
					f"Track '{self.track_name}': HapMap header must start with 'rs#', got {line[:60]!r}"
				)
			missing = [c for c in ("chrom", "pos") if c not in columns]
			if missing or len(columns) < HAPMAP_FIXED_COLUMNS:
				raise HeaderError(
					f"Track '{self.track_name}': HapMap header needs {HAPMAP_FIXED_COLUMNS} fixed columns incl. chrom/pos"
				)
			return HeaderInfo(header=columns)
		return HeaderInfo(header=())

	def parse(self, header: Tuple[str, ...], fields: Sequence[str]) -> ParseOutcome:
		skip = comment_or_blank(fields)
		if skip is not None:
			return skip
		if fields[0] == "rs#":
			return SKIP
		if len(fields) != len(header):
			return Malformed(f"expected {len(header)} columns, found {len(fields)}")
		chrom = fields[header.index("chrom")]
		pos = parse_int(fields[header.index("pos")], "pos")
		loc = GenomeLoc(normalize_chrom(chrom), pos)
		return Ok(self.record_type(self.track_name, loc, header, tuple(fields)))

"""VCF variant rows.

The header pass collects the ``##`` meta lines and the sample ids from the
``#CHROM`` line; the streaming pass turns each data line into a
``VariantRecord``. POS and QUAL are kept as parsed values, per-sample
columns stay raw and are split on demand (``extract_sample_value``) to
avoid the cost on callers that only need sites.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Dict, Optional, Sequence, Tuple, TextIO, Any

from ..core.location import GenomeLoc
from ..core.outcome import Ok, Malformed, ParseOutcome, SKIP
from ..core.record import Record
from ..utils import parse_info_field, parse_format_sample, parse_int
from .base import HeaderInfo, RecordFormat, TAB

__all__ = ["VcfHeader", "VariantRecord", "VcfFormat", "FIXED_COLUMNS"]

FIXED_COLUMNS = ("CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO")


@dataclass(frozen=True)
class VcfHeader:
	meta: Tuple[str, ...] = ()
	samples: Tuple[str, ...] = ()

	@property
	def fileformat(self) -> Optional[str]:
		for line in self.meta:
			if line.startswith("##fileformat="):
				return line.split("=", 1)[1]
		return None


@dataclass(frozen=True)
class VariantRecord(Record):
	"""Container for a single VCF data line.

	Attributes
	----------
	id, ref, alts : str
		Basic variant fields; ``alts`` keeps the comma-joined ALT column.
	qual : float | None
		QUAL, or None when '.'.
	filter, info : str | None
		Raw FILTER and INFO columns.
	format_keys : Tuple[str, ...]
		FORMAT field keys in order.
	sample_fields : Tuple[str, ...]
		Raw colon-delimited field strings per sample.
	samples : Tuple[str, ...]
		Sample ids from the header, shared by all rows of the track.
	"""

	id: Optional[str] = None
	ref: str = ""
	alts: str = "."
	qual: Optional[float] = None
	filter: Optional[str] = None
	info: Optional[str] = None
	format_keys: Tuple[str, ...] = ()
	sample_fields: Tuple[str, ...] = ()
	samples: Tuple[str, ...] = ()

	@property
	def pos(self) -> int:
		return self.location.start

	@property
	def alt_alleles(self) -> List[str]:
		if not self.alts or self.alts == ".":
			return []
		return self.alts.split(",")

	def info_map(self) -> Dict[str, str]:
		return parse_info_field(self.info)

	def extract_sample_value(self, sample_index: int, key: str) -> Optional[str]:
		"""Extract a value (e.g., DP, GQ, GT) for a given sample.

		Returns None if key not in FORMAT or value is '.'
		"""
		try:
			fi = self.format_keys.index(key)
		except ValueError:
			return None
		parts = self.sample_fields[sample_index].split(":")
		if fi >= len(parts):
			return None
		val = parts[fi]
		return None if val in (".", "") else val

	def sample_dict(self, sample: str) -> Dict[str, Optional[str]]:
		idx = self.samples.index(sample)
		return parse_format_sample(":".join(self.format_keys), self.sample_fields[idx])

	def as_row(self) -> Dict[str, Any]:
		return {
			"ID": self.id,
			"REF": self.ref,
			"ALT": self.alts,
			"QUAL": self.qual,
			"FILTER": self.filter,
			"AlleleCount": 1 + len(self.alt_alleles),
		}

	def to_line(self) -> str:
		cols = [
			self.contig,
			str(self.pos),
			self.id or ".",
			self.ref,
			self.alts,
			"." if self.qual is None else f"{self.qual:g}",
			self.filter or ".",
			self.info or ".",
		]
		if self.format_keys:
			cols.append(":".join(self.format_keys))
			cols.extend(self.sample_fields)
		return TAB.join(cols)


class VcfFormat(RecordFormat):
	"""Tab-delimited VCF (plain or bgzipped)."""

	name = "VCF"

	def initialize(self, handle: TextIO) -> HeaderInfo:
		meta: List[str] = []
		samples: Tuple[str, ...] = ()
		for raw in handle:
			line = raw.rstrip("\r\n")
			if line.startswith("##"):
				meta.append(line)
				continue
			if line.startswith("#CHROM"):
				header_cols = line.split(TAB)
				# fixed columns, FORMAT, then samples from index 9
				samples = tuple(header_cols[9:])
			break
		return HeaderInfo(header=VcfHeader(tuple(meta), samples), delimiter=TAB)

	def parse(self, header: VcfHeader, fields: Sequence[str]) -> ParseOutcome:
		if not fields or fields[0].startswith("#"):
			return SKIP
		if len(fields) < len(FIXED_COLUMNS):
			return Malformed(f"VCF line has {len(fields)} columns, need at least {len(FIXED_COLUMNS)}")
		chrom, pos, vid, ref, alts, qual, flt, info = fields[:8]
		if not ref:
			return Malformed("empty REF")
		start = parse_int(pos, "POS")
		loc = GenomeLoc(chrom, start, start + len(ref) - 1)
		format_keys: Tuple[str, ...] = ()
		sample_fields: Tuple[str, ...] = ()
		if len(fields) > 8:
			format_keys = tuple(fields[8].split(":"))
			sample_fields = tuple(fields[9:])
			if header.samples and len(sample_fields) != len(header.samples):
				return Malformed(f"{len(sample_fields)} sample columns for {len(header.samples)} samples")
		return Ok(VariantRecord(
			self.track_name,
			loc,
			id=None if vid == "." else vid,
			ref=ref,
			alts=alts,
			qual=None if qual == "." else float(qual),
			filter=None if flt == "." else flt,
			info=None if info == "." else info,
			format_keys=format_keys,
			sample_fields=sample_fields,
			samples=header.samples,
		))

"""Parse ROD binding specifications.

Bindings come as a list of strings, each holding one or more triplets of
``<name>,<type>,<file>``::

	["dbsnp,dbSNP,/data/dbsnp.txt", "calls,VCF,a.vcf,genes,GFF,genes.gff"]

Both well-formedness checks (triplet count, unique names) and format
resolution happen here, before any file is touched. On error nothing is
returned: the caller gets either every binding or an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core import diagnostics
from ..core.errors import DuplicateBinding, MalformedBindingSpec
from .registry import FormatDescriptor, FormatRegistry, default_registry

__all__ = ["TrackBinding", "parse_bindings", "find_binding"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackBinding:
	"""A named track bound to a format and a source file."""

	name: str
	format: FormatDescriptor
	source: Path

	@property
	def format_name(self) -> str:
		return self.format.name

	def __str__(self) -> str:
		return f"{self.name} ({self.format.name}) <- {self.source}"


def _split_triplets(specs: Iterable[str]) -> List[Tuple[str, str, str]]:
	triplets: List[Tuple[str, str, str]] = []
	for spec in specs:
		if not spec or not spec.strip():
			continue
		tokens = [t.strip() for t in spec.split(",")]
		if len(tokens) % 3 != 0:
			raise MalformedBindingSpec(
				f"Invalid ROD specification: requires triplets of <name>,<type>,<file> but got {spec!r} "
				f"({len(tokens)} tokens)"
			)
		if any(not t for t in tokens):
			raise MalformedBindingSpec(f"Invalid ROD specification: empty token in {spec!r}")
		for i in range(0, len(tokens), 3):
			triplets.append((tokens[i], tokens[i + 1], tokens[i + 2]))
	return triplets


def parse_bindings(specs: Sequence[str], registry: Optional[FormatRegistry] = None) -> List[TrackBinding]:
	"""Turn binding strings into ``TrackBinding`` objects.

	Parameters
	----------
	specs : Sequence[str]
		Comma-separated ``name,type,file`` triplets; several strings may each
		carry several triplets. Blank strings are ignored.
	registry : FormatRegistry | None
		Where format names resolve; defaults to the process-wide registry.

	Raises
	------
	MalformedBindingSpec
		A string's token count is not a multiple of three, or a token is empty.
		Checked for every string before any triplet is resolved.
	DuplicateBinding
		Two triplets share a (case-insensitive) track name.
	UnknownFormat
		A type name is not registered.
	"""
	if isinstance(specs, str):
		specs = [specs]
	triplets = _split_triplets(specs)
	registry = registry if registry is not None else default_registry()

	bindings: List[TrackBinding] = []
	seen = set()
	for name, type_name, file_name in triplets:
		track = name.lower()
		if track in seen:
			diagnostics.emit(
				logger, logging.ERROR, diagnostics.DUPLICATE_BINDING,
				f"Found duplicate ROD binding for track '{track}'",
				track=track,
			)
			raise DuplicateBinding(track)
		seen.add(track)
		descriptor = registry.resolve(type_name)
		bindings.append(TrackBinding(track, descriptor, Path(file_name)))

	for b in bindings:
		diagnostics.emit(
			logger, logging.INFO, diagnostics.BINDING_CREATED,
			f"Created binding from {b.name} to {b.source} of type {b.format.name}",
			track=b.name, path=str(b.source), format_name=b.format.name,
		)
	return bindings


def find_binding(bindings: Iterable[TrackBinding], name: str) -> Optional[TrackBinding]:
	"""Case-insensitive lookup of a track by name."""
	key = name.lower()
	for b in bindings:
		if b.name == key:
			return b
	return None

"""rodstream – streaming access to reference-ordered genomic data (RODs).

Subpackages:
	core      – locations, records, parse outcomes, errors
	formats   – built-in format capabilities (Table, HapMapGenotype, VCF, GFF, Intervals, dbSNP)
	io        – format registry, binding parser, streaming reader, order validation
	metrics   – DataFrame summaries of tracks

The common entry points are re-exported here so users can simply::

	import rodstream as rod

	rod.initialize_registry()
	bindings = rod.parse_bindings(["calls,VCF,calls.vcf.gz"])
	for rec in rod.open_track(bindings[0]):
		...

Add new formats by subclassing ``rodstream.formats.RecordFormat`` and
registering them right after ``initialize_registry()``.
"""

from .config import ReaderSettings  # noqa: F401
from .core import (  # noqa: F401
	GenomeLoc,
	Record,
	Ok,
	Skip,
	Malformed,
	RodError,
	UnknownFormat,
	DuplicateBinding,
	MalformedBindingSpec,
	SourceUnavailable,
	HeaderError,
	OutOfOrder,
	RegistryNotInitialized,
)
from .io import (  # noqa: F401
	initialize_registry,
	register_format,
	resolve_format,
	parse_bindings,
	open_track,
	validate_order,
	validate_track,
)

__version__ = "0.1.0"
__all__ = [
	"ReaderSettings",
	"GenomeLoc",
	"Record",
	"Ok",
	"Skip",
	"Malformed",
	"RodError",
	"UnknownFormat",
	"DuplicateBinding",
	"MalformedBindingSpec",
	"SourceUnavailable",
	"HeaderError",
	"OutOfOrder",
	"RegistryNotInitialized",
	"initialize_registry",
	"register_format",
	"resolve_format",
	"parse_bindings",
	"open_track",
	"validate_order",
	"validate_track",
	"__version__",
]

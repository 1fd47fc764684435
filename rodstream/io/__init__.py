"""I/O subpackage.

Binding parsing, the format registry, the streaming track reader and
ordering validation. Typical use::

	initialize_registry()
	for binding in parse_bindings(["dbsnp,dbSNP,dbsnp.txt"]):
		reader = open_track(binding)
		validate_track(reader)
		for rec in reader:
			...
"""

from .registry import (  # noqa: F401
	FormatDescriptor,
	FormatRegistry,
	initialize_registry,
	default_registry,
	register_format,
	resolve_format,
)
from .binding import TrackBinding, parse_bindings, find_binding  # noqa: F401
from .reader import StreamStats, RecordStream, TrackReader, open_track, open_source  # noqa: F401
from .validate import validate_order, validate_track  # noqa: F401
from .bulk import read_all, sort_in_memory, write_records  # noqa: F401

__all__ = [
	"FormatDescriptor",
	"FormatRegistry",
	"initialize_registry",
	"default_registry",
	"register_format",
	"resolve_format",
	"TrackBinding",
	"parse_bindings",
	"find_binding",
	"StreamStats",
	"RecordStream",
	"TrackReader",
	"open_track",
	"open_source",
	"validate_order",
	"validate_track",
	"read_all",
	"sort_in_memory",
	"write_records",
]

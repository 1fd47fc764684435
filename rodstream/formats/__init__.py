"""Built-in format capabilities.

``BUILTIN_FORMATS`` lists the formats ``initialize_registry`` installs.
Add a format by subclassing ``RecordFormat`` and registering it at startup
with ``rodstream.io.registry.register_format``.
"""

from .base import HeaderInfo, RecordFormat  # noqa: F401
from .table import TableFormat, TableRecord, HapMapGenotypeFormat, HapMapGenotypeRecord  # noqa: F401
from .vcf import VcfFormat, VariantRecord, VcfHeader  # noqa: F401
from .gff import GffFormat, GffRecord  # noqa: F401
from .intervals import IntervalFormat, IntervalRecord  # noqa: F401
from .dbsnp import DbSnpFormat, DbSnpRecord  # noqa: F401

BUILTIN_FORMATS = (
	TableFormat,
	HapMapGenotypeFormat,
	VcfFormat,
	GffFormat,
	IntervalFormat,
	DbSnpFormat,
)

__all__ = [
	"HeaderInfo",
	"RecordFormat",
	"TableFormat",
	"TableRecord",
	"HapMapGenotypeFormat",
	"HapMapGenotypeRecord",
	"VcfFormat",
	"VariantRecord",
	"VcfHeader",
	"GffFormat",
	"GffRecord",
	"IntervalFormat",
	"IntervalRecord",
	"DbSnpFormat",
	"DbSnpRecord",
	"BUILTIN_FORMATS",
]

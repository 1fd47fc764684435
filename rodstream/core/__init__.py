"""Core data model: locations, records, parse outcomes and errors."""

from .errors import (  # noqa: F401
	RodError,
	UnknownFormat,
	DuplicateBinding,
	MalformedBindingSpec,
	SourceUnavailable,
	HeaderError,
	OutOfOrder,
	RegistryNotInitialized,
	ConfigError,
	MalformedLocation,
)
from .location import GenomeLoc  # noqa: F401
from .outcome import Ok, Skip, Malformed, ParseOutcome, SKIP  # noqa: F401
from .record import Record  # noqa: F401

__all__ = [
	"RodError",
	"UnknownFormat",
	"DuplicateBinding",
	"MalformedBindingSpec",
	"SourceUnavailable",
	"HeaderError",
	"OutOfOrder",
	"RegistryNotInitialized",
	"ConfigError",
	"MalformedLocation",
	"GenomeLoc",
	"Ok",
	"Skip",
	"Malformed",
	"ParseOutcome",
	"SKIP",
	"Record",
]

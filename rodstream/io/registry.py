"""Format registry: case-insensitive format name -> capability factory.

The process-wide registry is populated by one explicit call to
``initialize_registry()`` at startup, before any binding is parsed.
Nothing registers itself lazily on first use. After startup the registry
is only read, so readers on different threads can share it.

Registering a name that already exists replaces the previous entry (last
writer wins). This is how a site installation overrides a built-in format
with its own parser.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from ..core import diagnostics
from ..core.errors import UnknownFormat, RegistryNotInitialized
from ..formats import BUILTIN_FORMATS
from ..formats.base import RecordFormat

__all__ = [
	"FormatFactory",
	"FormatDescriptor",
	"FormatRegistry",
	"initialize_registry",
	"default_registry",
	"register_format",
	"resolve_format",
]

logger = logging.getLogger(__name__)

FormatFactory = Callable[[str], RecordFormat]


@dataclass(frozen=True)
class FormatDescriptor:
	"""A registered format: display name plus the factory building its capability."""

	name: str
	factory: FormatFactory

	def create(self, track_name: str) -> RecordFormat:
		return self.factory(track_name)


class FormatRegistry:
	"""Case-insensitive map of format names to ``FormatDescriptor``."""

	def __init__(self, formats: Optional[Iterable[type]] = None):
		self._formats: Dict[str, FormatDescriptor] = {}
		for fmt in formats or ():
			self.register(fmt.name, fmt)

	def register(self, name: str, factory: FormatFactory) -> FormatDescriptor:
		if not name or not name.strip():
			raise ValueError("Format name must be non-empty")
		key = name.strip().lower()
		descriptor = FormatDescriptor(name.strip(), factory)
		if key in self._formats:
			logger.debug("Replacing ROD format %s (was %s)", descriptor.name, self._formats[key].name)
		else:
			logger.debug("Adding ROD format %s", descriptor.name)
		self._formats[key] = descriptor
		return descriptor

	def resolve(self, name: str) -> FormatDescriptor:
		descriptor = self._formats.get(name.strip().lower()) if name else None
		if descriptor is None:
			known = self.known_formats()
			diagnostics.emit(
				logger, logging.ERROR, diagnostics.UNKNOWN_FORMAT,
				f"Unknown ROD format: {name} (known: {', '.join(known)})",
				format_name=name, known_formats=known,
			)
			raise UnknownFormat(name, known)
		return descriptor

	def known_formats(self) -> List[str]:
		return sorted((d.name for d in self._formats.values()), key=str.lower)

	def __contains__(self, name: object) -> bool:
		return isinstance(name, str) and name.strip().lower() in self._formats

	def __len__(self) -> int:
		return len(self._formats)

	def __repr__(self) -> str:
		return f"FormatRegistry({', '.join(self.known_formats())})"


_DEFAULT: Optional[FormatRegistry] = None
_INIT_LOCK = threading.Lock()


def initialize_registry() -> FormatRegistry:
	"""Create the process-wide registry with the built-in formats.

	Safe to call more than once; only the first call populates it.
	"""
	global _DEFAULT
	with _INIT_LOCK:
		if _DEFAULT is None:
			registry = FormatRegistry(BUILTIN_FORMATS)
			logger.debug("Format registry initialized with %s", ", ".join(registry.known_formats()))
			_DEFAULT = registry
		return _DEFAULT


def default_registry() -> FormatRegistry:
	if _DEFAULT is None:
		raise RegistryNotInitialized(
			"The ROD format registry is not initialized; call rodstream.initialize_registry() at startup"
		)
	return _DEFAULT


def register_format(name: str, factory: FormatFactory) -> FormatDescriptor:
	"""Register ``factory`` under ``name`` in the process-wide registry (last writer wins)."""
	return default_registry().register(name, factory)


def resolve_format(name: str) -> FormatDescriptor:
	return default_registry().resolve(name)

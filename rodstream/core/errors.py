"""Exception taxonomy for rodstream.

Configuration-level errors (unknown format, duplicate binding, malformed
binding text) are raised eagerly, before any streaming begins. A malformed
data line is *not* an exception at the stream level: the reader turns it
into a ``Malformed`` outcome and keeps going. ``MalformedLocation`` is the
one line-level error formats raise on purpose.
"""

from __future__ import annotations

from typing import Sequence, Any

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
]


class RodError(Exception):
	"""Base class for every error raised by rodstream."""


class UnknownFormat(RodError, KeyError):
	"""A format name does not resolve in the registry."""

	def __init__(self, name: str, known: Sequence[str]):
		self.name = name
		self.known = tuple(known)
		super().__init__(name)

	def __str__(self) -> str:
		known = ", ".join(self.known) if self.known else "<none registered>"
		return f"Unknown ROD format '{self.name}'. Known formats: {known}"


class DuplicateBinding(RodError):
	"""Two triplets in one binding set use the same track name."""

	def __init__(self, name: str):
		self.name = name
		super().__init__(f"Found duplicate ROD binding for track '{name}'")


class MalformedBindingSpec(RodError, ValueError):
	"""Binding text is not a clean sequence of name,type,file triplets."""


class SourceUnavailable(RodError, OSError):
	"""The file behind a binding cannot be opened."""

	def __init__(self, track: str, path: Any, reason: str = ""):
		self.track = track
		self.path = path
		self.reason = reason
		msg = f"Couldn't open file {path} for track '{track}'"
		if reason:
			msg += f": {reason}"
		super().__init__(msg)


class HeaderError(RodError):
	"""A format could not interpret the header of its source."""


class OutOfOrder(RodError):
	"""A record strictly precedes the record before it."""

	def __init__(self, previous: Any, current: Any, index: int = -1):
		self.previous = previous
		self.current = current
		self.index = index
		super().__init__(
			"Out of order elements at\n"
			f"  {previous.location} {_identity(previous)}\n"
			f"  {current.location} {_identity(current)}"
		)


class RegistryNotInitialized(RodError):
	"""The process-wide format registry was used before initialize_registry()."""


class ConfigError(RodError, ValueError):
	"""A settings value cannot be coerced."""


class MalformedLocation(RodError, ValueError):
	"""Text that should describe a genomic location does not."""


def _identity(record: Any) -> str:
	to_line = getattr(record, "to_line", None)
	text = to_line() if callable(to_line) else repr(record)
	if len(text) > 120:
		text = text[:117] + "..."
	return f"[{getattr(record, 'track', '?')}] {text}"

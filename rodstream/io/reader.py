"""Streaming reader for bound ROD tracks.

``open_track`` runs the format's header initializer once and returns a
``TrackReader``. Each call to ``TrackReader.records()`` opens its own file
handle and returns a lazy ``RecordStream``; nothing is materialized, and
two streams over the same track never share a cursor.

Malformed lines never stop a stream. The first line of each contiguous
malformed run is reported once (``malformed_run_onset``); the run ends when
a record parses again. If the file ends inside a run, one more warning
(``malformed_run_exhausted``) says no further valid data was found. Streams
read bytes and decode line by line, so a line that is not valid in the
configured encoding is just another malformed line.
"""

from __future__ import annotations

import gzip
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Iterator, List, Optional, TextIO, Union

from ..config import ReaderSettings
from ..core import diagnostics
from ..core.errors import SourceUnavailable
from ..core.outcome import Ok, Skip, Malformed, ParseOutcome
from ..core.record import Record
from ..formats.base import HeaderInfo, RecordFormat
from .binding import TrackBinding

__all__ = ["StreamStats", "RecordStream", "TrackReader", "open_track", "open_source"]

logger = logging.getLogger(__name__)

# Errors a format may raise while pulling fields apart; read as a malformed line.
LINE_ERRORS = (ValueError, IndexError, KeyError)


def open_source(path: Path, encoding: Optional[str] = "utf-8", errors: str = "replace") -> Union[TextIO, BinaryIO]:
	"""Open a track file, transparently gunzipping ``*.gz``.

	With ``encoding=None`` the handle yields raw byte lines.
	"""
	gz = str(path).endswith(".gz")
	if encoding is None:
		return gzip.open(path, "rb") if gz else open(path, "rb")
	if gz:
		return gzip.open(path, "rt", encoding=encoding, errors=errors)
	return open(path, "rt", encoding=encoding, errors=errors)


@dataclass
class StreamStats:
	"""Per-stream line accounting."""

	lines: int = 0
	records: int = 0
	skipped: int = 0
	malformed: int = 0
	malformed_runs: int = 0


class RecordStream:
	"""Lazy, forward-only sequence of records from one pass over a file.

	Iterate it, or use it as a context manager to guarantee the file handle
	is released when leaving the block early::

		with reader.records() as stream:
			for rec in stream:
				...
	"""

	def __init__(self, reader: "TrackReader"):
		self.reader = reader
		self.stats = StreamStats()
		self._handle = reader._open(binary=True)
		self._gen = self._generate()

	# -- iteration --------------------------------------------------------
	def __iter__(self) -> "RecordStream":
		return self

	def __next__(self) -> Record:
		return next(self._gen)

	def close(self) -> None:
		self._gen.close()
		self._handle.close()

	@property
	def closed(self) -> bool:
		return self._handle.closed

	def __enter__(self) -> "RecordStream":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

	def __del__(self):
		# a stream dropped before its first next() never entered the with block
		handle = getattr(self, "_handle", None)
		if handle is not None and not handle.closed:
			handle.close()

	# -- internal ---------------------------------------------------------
	def _generate(self) -> Iterator[Record]:
		reader = self.reader
		stats = self.stats
		limit = reader.settings.max_records
		encoding = reader.settings.encoding
		in_bad_run = False
		with self._handle as fh:
			for line_number, raw in enumerate(fh, 1):
				stats.lines += 1
				try:
					line = raw.decode(encoding).rstrip("\r\n")
				except UnicodeDecodeError as exc:
					line = raw.decode(encoding, "replace").rstrip("\r\n")
					outcome = Malformed(f"undecodable bytes: {exc}")
				else:
					if not line.strip():
						stats.skipped += 1
						continue
					outcome = reader.classify(reader.tokenize(line))
				if isinstance(outcome, Ok):
					in_bad_run = False
					stats.records += 1
					yield outcome.record
					if limit is not None and stats.records >= limit:
						return
				elif isinstance(outcome, Skip):
					stats.skipped += 1
				else:
					stats.malformed += 1
					if not in_bad_run:
						in_bad_run = True
						stats.malformed_runs += 1
						diagnostics.emit(
							logger, logging.WARNING, diagnostics.MALFORMED_RUN_ONSET,
							f"Failed to parse line {line_number} of track '{reader.name}' "
							f"({reader.settings.preview(line)!r}): {outcome.reason}. "
							"Skipping ahead to the next valid record.",
							track=reader.name, line_number=line_number, reason=outcome.reason,
						)
			if in_bad_run:
				diagnostics.emit(
					logger, logging.WARNING, diagnostics.MALFORMED_RUN_EXHAUSTED,
					f"Unable to find more valid reference-ordered data in track '{reader.name}' "
					f"({reader.source}). Giving up.",
					track=reader.name, line_number=stats.lines,
				)


class TrackReader:
	"""An opened track: capability + header state, ready to stream.

	Construction runs the header initializer exactly once. ``records()``
	can be called any number of times; each call is an independent pass.
	"""

	def __init__(self, binding: TrackBinding, settings: Optional[ReaderSettings] = None):
		self.binding = binding
		self.settings = settings or ReaderSettings()
		self.capability: RecordFormat = binding.format.create(binding.name)
		try:
			with self._open() as fh:
				info = self.capability.initialize(fh)
		except SourceUnavailable:
			raise
		except OSError as exc:
			# e.g. a '.gz' name on a file that is not gzip data
			raise SourceUnavailable(self.name, self.source, str(exc)) from exc
		if not isinstance(info, HeaderInfo):
			raise TypeError(
				f"{type(self.capability).__name__}.initialize must return HeaderInfo, got {type(info).__name__}"
			)
		self.header_info = info
		self._splitter: Optional["re.Pattern[str]"] = re.compile(info.delimiter) if info.delimiter else None
		diagnostics.emit(
			logger, logging.DEBUG, diagnostics.TRACK_OPENED,
			f"Opened track {self.name} ({binding.format.name}) from {self.source}",
			track=self.name, path=str(self.source), format_name=binding.format.name,
		)

	@property
	def name(self) -> str:
		return self.binding.name

	@property
	def source(self) -> Path:
		return self.binding.source

	@property
	def header(self) -> Any:
		return self.header_info.header

	def _open(self, binary: bool = False) -> Union[TextIO, BinaryIO]:
		try:
			return open_source(self.source, None if binary else self.settings.encoding)
		except OSError as exc:
			raise SourceUnavailable(self.name, self.source, exc.strerror or str(exc)) from exc

	def tokenize(self, line: str) -> List[str]:
		if self._splitter is None:
			return line.split()
		return self._splitter.split(line)

	def classify(self, fields: List[str]) -> ParseOutcome:
		"""Run the capability on one tokenized line and normalize the result."""
		try:
			outcome = self.capability.parse(self.header, fields)
		except LINE_ERRORS as exc:
			return Malformed(str(exc) or type(exc).__name__)
		if isinstance(outcome, Ok) and getattr(outcome.record, "location", None) is None:
			return Malformed("record has no genomic location")
		if not isinstance(outcome, (Ok, Skip, Malformed)):
			raise TypeError(
				f"{type(self.capability).__name__}.parse returned {type(outcome).__name__}, expected a ParseOutcome"
			)
		return outcome

	def records(self) -> RecordStream:
		return RecordStream(self)

	def __iter__(self) -> Iterator[Record]:
		return self.records()

	def __repr__(self) -> str:
		return f"TrackReader({self.binding})"


def open_track(binding: TrackBinding, settings: Optional[ReaderSettings] = None) -> TrackReader:
	"""Initialize a bound track for streaming.

	Raises
	------
	SourceUnavailable
		The file cannot be opened.
	HeaderError
		The format cannot make sense of the file's header.
	"""
	return TrackReader(binding, settings)

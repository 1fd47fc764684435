"""Unit tests for io.reader: header initialization, streaming and malformed-line recovery."""

from __future__ import annotations

import gc
import gzip
import warnings
from types import SimpleNamespace

import pytest

from rodstream.config import ReaderSettings
from rodstream.core.errors import HeaderError, SourceUnavailable
from rodstream.core.location import GenomeLoc
from rodstream.core.outcome import Ok, SKIP
from rodstream.core.record import Record
from rodstream.formats.base import HeaderInfo, RecordFormat
from rodstream.io.binding import TrackBinding
from rodstream.io.reader import open_track
from rodstream.io.registry import FormatRegistry

ONSET = "malformed_run_onset"
EXHAUSTED = "malformed_run_exhausted"


def _starts(records):
	return [r.start for r in records]


def test_malformed_lines_skipped_with_one_onset_per_run(write_track, bind, events) -> None:
	path = write_track("iv.list", ["chr1:10", "bad", "chr1:30", "chr1:40", "junk", "chr1:60"])
	stream = open_track(bind("iv", "Intervals", path)).records()

	assert next(stream).start == 10
	assert len(events(ONSET)) == 0
	assert next(stream).start == 30
	assert [d.line_number for d in events(ONSET)] == [2]
	assert next(stream).start == 40
	assert len(events(ONSET)) == 1
	assert next(stream).start == 60
	assert [d.line_number for d in events(ONSET)] == [2, 5]
	with pytest.raises(StopIteration):
		next(stream)
	assert events(EXHAUSTED) == []
	assert stream.stats.records == 4
	assert stream.stats.malformed == 2
	assert stream.stats.malformed_runs == 2


def test_contiguous_run_reported_once_even_across_comments(write_track, bind, events) -> None:
	path = write_track("iv.list", ["bad1", "bad2", "# note", "", "bad3", "chr2:5", "chr2:6"])
	assert _starts(open_track(bind("iv", "Intervals", path))) == [5, 6]
	assert len(events(ONSET)) == 1
	assert events(EXHAUSTED) == []


def test_empty_file_yields_nothing_and_stays_quiet(write_track, bind, events) -> None:
	path = write_track("empty.list", [])
	assert list(open_track(bind("iv", "Intervals", path))) == []
	assert events(ONSET) == [] and events(EXHAUSTED) == []


def test_undecodable_line_is_malformed_not_fatal(tmp_path, bind, events) -> None:
	path = tmp_path / "iv.list"
	path.write_bytes(b"chr1:1\n\xff\xfe bad bytes\nchr1:3\n")
	stream = open_track(bind("iv", "Intervals", path)).records()
	assert _starts(stream) == [1, 3]
	assert stream.stats.malformed == 1
	[onset] = events(ONSET)
	assert onset.line_number == 2
	assert "can't decode" in onset.reason


def test_undecodable_tail_reports_exhaustion(tmp_path, bind, events) -> None:
	path = tmp_path / "iv.list.gz"
	with gzip.open(path, "wb") as fh:
		fh.write(b"chr1:1\n\xff\n\xc3\x28\n")
	assert _starts(open_track(bind("iv", "Intervals", path))) == [1]
	assert len(events(ONSET)) == 1 and len(events(EXHAUSTED)) == 1


def test_dropped_stream_releases_handle_without_warning(write_track, bind) -> None:
	reader = open_track(bind("iv", "Intervals", write_track("iv.list", ["chr1:1"])))
	stream = reader.records()
	handle = stream._handle
	with warnings.catch_warnings(record=True) as caught:
		warnings.simplefilter("always")
		del stream
		gc.collect()
	assert handle.closed
	assert not [w for w in caught if issubclass(w.category, ResourceWarning)]


def test_all_malformed_file_one_onset_one_terminal(write_track, bind, events) -> None:
	path = write_track("bad.list", ["x", "y", "z", "chr1:abc"])
	assert list(open_track(bind("iv", "Intervals", path))) == []
	assert len(events(ONSET)) == 1
	[terminal] = events(EXHAUSTED)
	assert terminal.track == "iv"
	assert terminal.levelname == "WARNING"


def test_trailing_malformed_run_gets_terminal_diagnostic(write_track, bind, events) -> None:
	path = write_track("iv.list", ["chr1:1", "bad", "# trailing comment"])
	assert _starts(open_track(bind("iv", "Intervals", path))) == [1]
	assert len(events(ONSET)) == 1
	assert len(events(EXHAUSTED)) == 1


def test_independent_streams_interleave(write_track, bind) -> None:
	lines = [f"chr1:{p}" for p in range(1, 8)]
	path = write_track("iv.list", lines)
	binding = bind("iv", "Intervals", path)
	reader = open_track(binding)
	# two streams from one reader plus one from a second reader on the same binding
	streams = {"a": reader.records(), "b": open_track(binding).records(), "c": reader.records()}
	seen = {k: [] for k in streams}
	for key in "abbcaabccabbaccbacabc":
		seen[key].append(next(streams[key]).start)
	for key, stream in streams.items():
		assert list(stream) == []
		assert seen[key] == list(range(1, 8))


def test_close_releases_handle(write_track, bind) -> None:
	path = write_track("iv.list", ["chr1:1", "chr1:2", "chr1:3"])
	reader = open_track(bind("iv", "Intervals", path))

	stream = reader.records()
	next(stream)
	stream.close()
	assert stream.closed

	unstarted = reader.records()
	unstarted.close()
	assert unstarted.closed

	with pytest.raises(RuntimeError):
		with reader.records() as held:
			next(held)
			raise RuntimeError("consumer failed while holding a record")
	assert held.closed

	exhausted = reader.records()
	list(exhausted)
	assert exhausted.closed


def test_missing_source_is_unavailable(tmp_path, bind) -> None:
	binding = bind("iv", "Intervals", tmp_path / "nope.list")
	with pytest.raises(SourceUnavailable) as err:
		open_track(binding)
	assert err.value.track == "iv"
	assert isinstance(err.value, OSError)


def test_bad_gzip_is_unavailable(tmp_path, bind) -> None:
	path = tmp_path / "fake.vcf.gz"
	path.write_text("not gzip\n")
	with pytest.raises(SourceUnavailable):
		open_track(bind("calls", "VCF", path))


def test_gzip_sources_are_read_transparently(tmp_path, bind) -> None:
	path = tmp_path / "calls.vcf.gz"
	with gzip.open(path, "wt") as fh:
		fh.write("##fileformat=VCFv4.2\n")
		fh.write("#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n")
		fh.write("1\t100\trs1\tA\tG\t50\tPASS\tDP=10\n")
	[rec] = list(open_track(bind("calls", "VCF", path)))
	assert (rec.contig, rec.pos, rec.alts) == ("1", 100, "G")


def test_max_records_limits_each_stream(write_track, bind) -> None:
	path = write_track("iv.list", [f"chr1:{p}" for p in range(1, 10)])
	reader = open_track(bind("iv", "Intervals", path), ReaderSettings(max_records=3))
	stream = reader.records()
	assert _starts(stream) == [1, 2, 3]
	assert stream.closed
	assert _starts(reader) == [1, 2, 3]


def test_table_header_missing_is_header_error(write_track, bind) -> None:
	path = write_track("t.tsv", ["chr1:1 a b"])
	with pytest.raises(HeaderError):
		open_track(bind("t", "Table", path))


class _CountingFormat(RecordFormat):
	"""Comma-delimited ``contig,pos`` lines; counts header initializations."""

	name = "Counting"
	initialized = 0

	def initialize(self, handle):
		type(self).initialized += 1
		return HeaderInfo(header=("contig", "pos"), delimiter=",")

	def parse(self, header, fields):
		if fields[0] == "none":
			return Ok(SimpleNamespace(location=None))
		if fields[0] == "key":
			raise KeyError("missing column")
		if fields[0].startswith("#"):
			return SKIP
		return Ok(Record(self.track_name, GenomeLoc(fields[0], int(fields[1]))))


def test_header_initializer_runs_once_and_sets_delimiter(write_track, events) -> None:
	_CountingFormat.initialized = 0
	reg = FormatRegistry([_CountingFormat])
	path = write_track("c.csv", ["chr1,5", "none,1", "key,1", "chr1,6", "chr1,seven"])
	reader = open_track(TrackBinding("c", reg.resolve("counting"), path))
	assert _starts(reader) == [5, 6]
	assert _starts(reader.records()) == [5, 6]
	assert _CountingFormat.initialized == 1
	reasons = [d.reason for d in events(ONSET)]
	assert reasons[:2] == ["record has no genomic location", "invalid literal for int() with base 10: 'seven'"]


def test_shared_header_state(write_track, bind) -> None:
	path = write_track("t.tsv", ["HEADER loc gene", "chr1:5 A", "chr1:9 B"])
	reader = open_track(bind("t", "Table", path))
	recs = list(reader)
	assert recs[0].columns is reader.header
	assert recs[1].columns is reader.header

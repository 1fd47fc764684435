"""Tests for metrics.track_metrics."""

from __future__ import annotations

from rodstream.io.reader import StreamStats, open_track
from rodstream.metrics import contig_summary, records_to_frame, stream_report


def _gff_line(contig: str, start: int, stop: int, feature: str = "exon") -> str:
	return "\t".join([contig, "src", feature, str(start), str(stop), ".", "+", ".", f"ID={feature}{start}"])


def test_records_to_frame_includes_format_columns(write_track, bind) -> None:
	path = write_track("g.gff", [_gff_line("chr1", 10, 20, "gene"), _gff_line("chr2", 5, 9)])
	df = records_to_frame(open_track(bind("genes", "GFF", path)))
	assert list(df.columns[:4]) == ["Track", "Contig", "Start", "Stop"]
	assert df["Feature"].tolist() == ["gene", "exon"]
	assert df["Start"].tolist() == [10, 5]
	assert set(df["Track"]) == {"genes"}


def test_records_to_frame_empty_and_limit(write_track, bind) -> None:
	empty = records_to_frame([])
	assert empty.empty and list(empty.columns) == ["Track", "Contig", "Start", "Stop"]
	path = write_track("iv.list", ["chr1:1", "chr1:2", "chr1:3"])
	assert len(records_to_frame(open_track(bind("iv", "Intervals", path)), limit=2)) == 2


def test_contig_summary_natural_order(write_track, bind) -> None:
	path = write_track("iv.list", ["chr10:1-5", "chr2:100-200", "chr2:50", "chr1:7", "chr10:40-41"])
	summary = contig_summary(open_track(bind("iv", "Intervals", path)))
	assert summary["Contig"].tolist() == ["chr1", "chr2", "chr10"]
	assert summary["Records"].tolist() == [1, 2, 2]
	row = summary.set_index("Contig").loc["chr2"]
	assert (row["FirstStart"], row["LastStop"], row["Span"]) == (50, 200, 151)
	assert contig_summary([]).empty


def test_stream_report_rates(write_track, bind) -> None:
	path = write_track("iv.list", ["chr1:1", "bad", "# c", "chr1:2", "bad", "bad"])
	stream = open_track(bind("iv", "Intervals", path)).records()
	list(stream)
	report = stream_report(stream.stats)
	assert report["Lines"] == 6
	assert report["Records"] == 2
	assert report["Skipped"] == 1
	assert report["Malformed"] == 3
	assert report["MalformedRuns"] == 2
	assert report["MalformedRate"] == 3 / 5
	assert stream_report(StreamStats())["MalformedRate"] == 0.0

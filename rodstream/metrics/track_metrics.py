"""Track-level summaries.

Converts record streams into DataFrames and produces per-contig and
per-stream summaries. Materializes the whole stream, so use on tracks (or
``max_records`` slices) that fit in memory.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional
import pandas as pd

from ..core.record import Record
from ..io.reader import StreamStats
from ..utils import natural_sort_key

__all__ = [
	"LOCATION_COLUMNS",
	"records_to_frame",
	"contig_summary",
	"stream_report",
]

LOCATION_COLUMNS = ["Track", "Contig", "Start", "Stop"]


def records_to_frame(records: Iterable[Record], limit: Optional[int] = None) -> pd.DataFrame:
	"""Return DataFrame with columns Track, Contig, Start, Stop plus format-specific fields."""
	rows = []
	for i, rec in enumerate(records):
		row = {"Track": rec.track, "Contig": rec.contig, "Start": rec.start, "Stop": rec.stop}
		row.update(rec.as_row())
		rows.append(row)
		if limit and i + 1 >= limit:
			break
	if not rows:
		return pd.DataFrame(columns=LOCATION_COLUMNS)
	df = pd.DataFrame(rows)
	for col in ("Start", "Stop"):
		df[col] = pd.to_numeric(df[col], errors="coerce").astype("int64")
	return df


def contig_summary(records) -> pd.DataFrame:
	"""Per-contig counts and extent.

	Accepts a record iterable or a frame from ``records_to_frame``.

	Columns returned:
		Contig, Records, FirstStart, LastStop, Span

	Span is ``LastStop - FirstStart + 1``. Rows follow natural contig order
	(chr1, chr2, ..., chr10).
	"""
	df = records if isinstance(records, pd.DataFrame) else records_to_frame(records)
	cols = ["Contig", "Records", "FirstStart", "LastStop", "Span"]
	if df.empty:
		return pd.DataFrame(columns=cols)
	grouped = df.groupby("Contig", sort=False).agg(
		Records=("Start", "size"),
		FirstStart=("Start", "min"),
		LastStop=("Stop", "max"),
	).reset_index()
	grouped["Span"] = grouped["LastStop"] - grouped["FirstStart"] + 1
	order = sorted(grouped["Contig"], key=natural_sort_key)
	grouped["Contig"] = pd.Categorical(grouped["Contig"], categories=order, ordered=True)
	grouped = grouped.sort_values("Contig").reset_index(drop=True)
	grouped["Contig"] = grouped["Contig"].astype(str)
	return grouped[cols]


def stream_report(stats: StreamStats) -> Dict[str, float]:
	"""Summarize one stream's line accounting.

	MalformedRate is malformed lines over non-blank, non-skipped lines
	(records + malformed); 0 when there were none.
	"""
	considered = stats.records + stats.malformed
	return {
		"Lines": stats.lines,
		"Records": stats.records,
		"Skipped": stats.skipped,
		"Malformed": stats.malformed,
		"MalformedRuns": stats.malformed_runs,
		"MalformedRate": stats.malformed / considered if considered else 0.0,
	}

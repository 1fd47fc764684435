"""Metric computation subpackage."""

from .track_metrics import records_to_frame, contig_summary, stream_report  # noqa: F401

__all__ = ["records_to_frame", "contig_summary", "stream_report"]

"""Whole-track helpers: materialize, sort in memory, write back out.

These trade the streaming guarantees for convenience and are meant for
tracks that fit in memory (e.g. fixing up a small unsorted annotation file
before handing it to a range join).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from ..core.record import Record

__all__ = ["read_all", "sort_in_memory", "write_records"]


def read_all(records: Iterable[Record]) -> List[Record]:
	return list(records)


def sort_in_memory(records: Iterable[Record]) -> List[Record]:
	"""Return records sorted by location; ties keep their input order."""
	return sorted(records, key=lambda r: r.location.sort_key())


def write_records(records: Iterable[Record], output: Union[str, Path]) -> int:
	"""Write one ``to_line()`` per record; returns the number written."""
	n = 0
	with open(output, "wt", encoding="utf-8") as out:
		for rec in records:
			out.write(rec.to_line() + "\n")
			n += 1
	return n

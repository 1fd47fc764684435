"""Ordering validation.

Range-based joins downstream assume every track is sorted by location.
``validate_order`` checks that assumption in one streaming pass; it never
sorts or repairs (see ``rodstream.io.bulk.sort_in_memory`` for that).
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core import diagnostics
from ..core.errors import OutOfOrder
from ..core.record import Record
from .reader import TrackReader

__all__ = ["validate_order", "validate_track"]

logger = logging.getLogger(__name__)


def validate_order(records: Iterable[Record]) -> int:
	"""Assert ``records`` is non-decreasing by location.

	Equal locations are allowed. Returns the number of records checked.

	Raises
	------
	OutOfOrder
		On the first record that strictly precedes its predecessor; the
		error carries both records.
	"""
	previous: Optional[Record] = None
	count = 0
	for index, current in enumerate(records):
		if previous is not None and current.location < previous.location:
			diagnostics.emit(
				logger, logging.ERROR, diagnostics.OUT_OF_ORDER,
				f"Out of order elements: {previous.location} followed by {current.location} "
				f"(track '{current.track}', record #{index + 1})",
				track=current.track, previous=str(previous.location), current=str(current.location),
			)
			raise OutOfOrder(previous, current, index)
		previous = current
		count += 1
	return count


def validate_track(reader: TrackReader) -> int:
	"""Validate ordering over a fresh pass of an opened track."""
	with reader.records() as stream:
		count = validate_order(stream)
	logger.info("Track %s is sorted (%d records)", reader.name, count)
	return count

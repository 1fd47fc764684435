"""Structured diagnostic events.

Every diagnostic goes through the standard ``logging`` module with the
event name attached as ``record.event`` so callers (and tests) can filter on
it without parsing messages.
"""

from __future__ import annotations

import logging
from typing import Any

MALFORMED_RUN_ONSET = "malformed_run_onset"
MALFORMED_RUN_EXHAUSTED = "malformed_run_exhausted"
OUT_OF_ORDER = "out_of_order"
UNKNOWN_FORMAT = "unknown_format"
DUPLICATE_BINDING = "duplicate_binding"
BINDING_CREATED = "binding_created"
TRACK_OPENED = "track_opened"

__all__ = [
	"MALFORMED_RUN_ONSET",
	"MALFORMED_RUN_EXHAUSTED",
	"OUT_OF_ORDER",
	"UNKNOWN_FORMAT",
	"DUPLICATE_BINDING",
	"BINDING_CREATED",
	"TRACK_OPENED",
	"emit",
]


def emit(logger: logging.Logger, level: int, event: str, message: str, **fields: Any) -> None:
	"""Log ``message`` with ``event`` and ``fields`` as record attributes."""
	extra = {"event": event}
	extra.update(fields)
	logger.log(level, message, extra=extra)

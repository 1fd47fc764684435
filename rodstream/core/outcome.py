"""Result of parsing one tokenized line: Ok, Skip or Malformed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union, Any

__all__ = ["Ok", "Skip", "Malformed", "ParseOutcome", "SKIP"]


@dataclass(frozen=True)
class Ok:
	record: Any


@dataclass(frozen=True)
class Skip:
	"""The line is intentionally not data (comment, header, blank)."""

	reason: str = ""


@dataclass(frozen=True)
class Malformed:
	reason: str


ParseOutcome = Union[Ok, Skip, Malformed]

SKIP = Skip()

"""Small utility helpers used across the rodstream package.

This module intentionally keeps a tiny surface area of pure-Python helpers that
are easy to unit-test and have no heavy dependencies.
"""
import logging
import re
import sys
from typing import Dict, List, Optional, Union

_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
_LOG_DATEFMT = "%H:%M:%S"
_DIGITS = re.compile(r"(\d+)")


def parse_info_field(info: Optional[str]) -> Dict[str, str]:
	"""Parse a VCF INFO column (key[=value];... ) into a dict.

	Values are returned as strings; keys without value map to empty string.
	An INFO field of '.' returns an empty dict.
	"""
	out: Dict[str, str] = {}
	if not info or info == ".":
		return out
	for token in info.split(";"):
		if not token:
			continue
		if "=" in token:
			k, v = token.split("=", 1)
			out[k] = v
		else:
			out[token] = ""
	return out


def parse_format_sample(fmt: str, sample: str) -> Dict[str, Optional[str]]:
	"""Parse FORMAT and a sample column into a dict mapping keys->values.

	Example: fmt='GT:AD:DP' sample='0/1:10,5:15' -> {'GT':'0/1','AD':'10,5','DP':'15'}
	Missing fields are mapped to None.
	"""
	keys = fmt.split(":") if fmt else []
	vals = sample.split(":") if sample else []
	out: Dict[str, Optional[str]] = {}
	for i, k in enumerate(keys):
		out[k] = vals[i] if i < len(vals) and vals[i] not in ("", ".") else None
	return out


def parse_gff_attributes(text: str) -> Dict[str, str]:
	"""Parse a GFF attribute column.

	Accepts both GFF3 ``key=value;key2=value2`` and GTF/GFF2
	``key "value"; key2 value2`` styles. A bare '.' gives an empty dict.
	"""
	out: Dict[str, str] = {}
	if not text or text == ".":
		return out
	for token in text.split(";"):
		token = token.strip()
		if not token:
			continue
		if "=" in token:
			k, v = token.split("=", 1)
		elif " " in token:
			k, v = token.split(" ", 1)
		else:
			k, v = token, ""
		out[k.strip()] = v.strip().strip('"')
	return out


def normalize_chrom(chrom: Optional[str]) -> str:
	"""Lightweight normalization for chromosome names.

	Examples: 'chr1' -> '1', '1' -> '1', 'MT'->'MT'
	This is intentionally conservative and only strips a leading 'chr' or 'CHR'.
	"""
	if chrom is None:
		return ""
	c = str(chrom)
	if c.lower().startswith("chr"):
		return c[3:]
	return c


def natural_sort_key(item: str) -> List[Union[int, str]]:
	"""Generate sort key for natural sorting (chr1, chr2, ..., chr10)."""
	def convert(text):
		if text.isdigit():
			return int(text)
		return text.lower()

	return [convert(c) for c in _DIGITS.split(item)]


def parse_int(text: str, what: str = "value") -> int:
	"""int() that tolerates thousands separators ('1,000') and names the field on failure."""
	try:
		return int(text.replace(",", ""))
	except (ValueError, AttributeError):
		raise ValueError(f"Invalid {what}: {text!r}") from None


def configure_logging(level: Optional[Union[int, str]] = None, stream=None, settings=None) -> logging.Logger:
	"""Attach a console handler to the ``rodstream`` logger.

	The library itself never configures handlers; call this from scripts.
	Calling it twice replaces the handler rather than stacking a second one.
	Without an explicit ``level`` the ``log_level`` of ``settings`` is used,
	falling back to ``ReaderSettings.from_env()``.
	"""
	if level is None:
		from .config import ReaderSettings

		level = (settings or ReaderSettings.from_env()).log_level
	logger = logging.getLogger("rodstream")
	for handler in list(logger.handlers):
		if getattr(handler, "_rodstream_console", False):
			logger.removeHandler(handler)
	handler = logging.StreamHandler(stream or sys.stderr)
	handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT))
	handler._rodstream_console = True  # type: ignore[attr-defined]
	logger.addHandler(handler)
	logger.setLevel(level.upper() if isinstance(level, str) else level)
	return logger


__all__ = [
	"parse_info_field",
	"parse_format_sample",
	"parse_gff_attributes",
	"normalize_chrom",
	"natural_sort_key",
	"parse_int",
	"configure_logging",
]

"""Tests for config.ReaderSettings and utils.configure_logging."""

from __future__ import annotations

import io
import logging

import pytest

from rodstream.config import ReaderSettings
from rodstream.core.errors import ConfigError
from rodstream.utils import configure_logging, natural_sort_key, normalize_chrom, parse_int


def test_defaults() -> None:
	s = ReaderSettings()
	assert (s.encoding, s.max_records, s.line_preview, s.log_level) == ("utf-8", None, 120, "INFO")


def test_from_env_overlays_values() -> None:
	env = {
		"RODSTREAM_ENCODING": "latin-1",
		"RODSTREAM_MAX_RECORDS": "500",
		"RODSTREAM_LINE_PREVIEW": "10",
		"RODSTREAM_LOG_LEVEL": "debug",
		"UNRELATED": "x",
	}
	s = ReaderSettings.from_env(env)
	assert (s.encoding, s.max_records, s.line_preview, s.log_level) == ("latin-1", 500, 10, "DEBUG")
	assert s.preview("x" * 20) == "x" * 10 + "..."
	assert ReaderSettings.from_env({"RODSTREAM_MAX_RECORDS": "0"}).max_records is None
	assert ReaderSettings.from_env({}) == ReaderSettings()


@pytest.mark.parametrize(
	"env",
	[
		{"RODSTREAM_MAX_RECORDS": "many"},
		{"RODSTREAM_MAX_RECORDS": "-3"},
		{"RODSTREAM_LINE_PREVIEW": "-1"},
		{"RODSTREAM_LOG_LEVEL": "chatty"},
	],
)
def test_from_env_rejects_bad_values(env) -> None:
	with pytest.raises(ConfigError):
		ReaderSettings.from_env(env)


def test_configure_logging_does_not_stack_handlers() -> None:
	buf = io.StringIO()
	logger = configure_logging("WARNING", stream=buf)
	configure_logging("WARNING", stream=buf)
	try:
		ours = [h for h in logger.handlers if getattr(h, "_rodstream_console", False)]
		assert len(ours) == 1
		logging.getLogger("rodstream.io.reader").warning("hello")
		assert "[WARNING] hello" in buf.getvalue()
	finally:
		for h in list(logger.handlers):
			if getattr(h, "_rodstream_console", False):
				logger.removeHandler(h)
		logger.setLevel(logging.NOTSET)


def test_small_helpers() -> None:
	assert sorted(["chr10", "chr2", "chr1"], key=natural_sort_key) == ["chr1", "chr2", "chr10"]
	assert normalize_chrom("chrX") == "X" and normalize_chrom(None) == ""
	assert parse_int("1,000") == 1000
	with pytest.raises(ValueError, match="Invalid pos"):
		parse_int("x", "pos")


def test_configure_logging_takes_level_from_settings(monkeypatch) -> None:
	buf = io.StringIO()
	try:
		logger = configure_logging(stream=buf, settings=ReaderSettings(log_level="ERROR"))
		assert logger.level == logging.ERROR
		monkeypatch.setenv("RODSTREAM_LOG_LEVEL", "debug")
		assert configure_logging(stream=buf).level == logging.DEBUG
		assert configure_logging("WARNING", stream=buf, settings=ReaderSettings(log_level="ERROR")).level == logging.WARNING
	finally:
		logger = logging.getLogger("rodstream")
		for h in list(logger.handlers):
			if getattr(h, "_rodstream_console", False):
				logger.removeHandler(h)
		logger.setLevel(logging.NOTSET)

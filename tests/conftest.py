"""Shared fixtures for rodstream tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List

import pytest

from rodstream.io.registry import FormatRegistry, initialize_registry
from rodstream.io.binding import TrackBinding


@pytest.fixture(scope="session")
def registry() -> FormatRegistry:
	return initialize_registry()


@pytest.fixture
def write_track(tmp_path: Path) -> Callable[..., Path]:
	def _write(name: str, lines: List[str]) -> Path:
		path = tmp_path / name
		path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
		return path

	return _write


@pytest.fixture
def bind(registry: FormatRegistry) -> Callable[..., TrackBinding]:
	def _bind(name: str, fmt: str, path: Path) -> TrackBinding:
		return TrackBinding(name, registry.resolve(fmt), path)

	return _bind


@pytest.fixture
def events(caplog: pytest.LogCaptureFixture) -> Callable[[str], List[logging.LogRecord]]:
	caplog.set_level(logging.DEBUG, logger="rodstream")

	def _events(name: str) -> List[logging.LogRecord]:
		return [r for r in caplog.records if getattr(r, "event", None) == name]

	return _events

"""
Pytest configuration and shared fixtures for tidydir tests.

This module provides common fixtures that can be used across all test
modules in the project.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator, Iterable
from pathlib import Path

import pytest

from tidydir.cli.common.context import clear_cli_context
from tidydir.core.reporting import NullReportSink


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Remove the handlers setup_logging installs during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TIDYDIR_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("TIDYDIR_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_files() -> Callable[[Path, Iterable[str]], list[Path]]:
    """Return a helper that creates files whose content is their own name."""

    def _make(directory: Path, names: Iterable[str]) -> list[Path]:
        created = []
        for name in names:
            path = directory / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"content of {name}")
            created.append(path)
        return created

    return _make


@pytest.fixture
def null_sink() -> NullReportSink:
    return NullReportSink()


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Environment for CLI runs: file logging under tmp_path, no console logging."""
    monkeypatch.setenv("TIDYDIR_LOGGING__FILE", str(tmp_path / "logs" / "tidydir.log"))
    monkeypatch.setenv("TIDYDIR_LOGGING__CONSOLE_OUTPUT", "false")
    clear_cli_context()
    yield
    clear_cli_context()

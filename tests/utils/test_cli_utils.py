"""Tests for CLI and logging utility functions."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from rich.logging import RichHandler

from foxguard.check.errors import VerificationError
from foxguard.git.repository import GitError
from foxguard.utils.cli_utils import (
	EXIT_INTERNAL_ERROR,
	EXIT_INTERRUPTED,
	describe_error_origin,
	exit_with_error,
	handle_keyboard_interrupt,
	loading_spinner,
)
from foxguard.utils.log_setup import setup_logging


def _raise_git_error() -> None:
	msg = "object store unreadable"
	raise GitError(msg)


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
	"""Put the root logger back the way pytest configured it."""
	root = logging.getLogger()
	handlers = root.handlers[:]
	level = root.level
	yield
	root.handlers[:] = handlers
	root.setLevel(level)


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
class TestLogSetup:
	"""Root logger configuration."""

	def test_verbose_uses_debug(self) -> None:
		setup_logging(is_verbose=True)

		root = logging.getLogger()
		assert root.level == logging.DEBUG
		assert any(isinstance(handler, RichHandler) for handler in root.handlers)

	def test_default_uses_warning(self) -> None:
		setup_logging()
		assert logging.getLogger().level == logging.WARNING

	def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
		setup_logging()
		setup_logging()
		assert len(logging.getLogger().handlers) == 1

	def test_log_file(self, tmp_path: Path) -> None:
		log_file = tmp_path / "logs" / "foxguard.log"

		setup_logging(log_file_path=log_file)
		logging.getLogger("foxguard.test").warning("written to file")
		for handler in logging.getLogger().handlers:
			handler.flush()

		assert "written to file" in log_file.read_text(encoding="utf-8")


@pytest.mark.unit
class TestErrorReporting:
	"""Error origin and exit helpers."""

	def test_describe_error_origin_uses_cause(self) -> None:
		try:
			try:
				_raise_git_error()
			except GitError as e:
				raise VerificationError("walk-chain", str(e)) from e
		except VerificationError as outer:
			origin = describe_error_origin(outer)

		assert "test_cli_utils.py" in origin
		assert origin.endswith("in _raise_git_error")

	def test_describe_error_origin_without_traceback(self) -> None:
		assert describe_error_origin(GitError("never raised")) == "unknown location"

	def test_exit_with_error(self) -> None:
		with patch("foxguard.utils.cli_utils.display_error_summary") as mock_summary:
			with pytest.raises(typer.Exit) as excinfo:
				exit_with_error("boom", exception=GitError("details"))

		assert excinfo.value.exit_code == EXIT_INTERNAL_ERROR
		summary = mock_summary.call_args[0][0]
		assert "boom" in summary
		assert "details" in summary

	def test_handle_keyboard_interrupt(self) -> None:
		with pytest.raises(typer.Exit) as excinfo:
			handle_keyboard_interrupt()

		assert excinfo.value.exit_code == EXIT_INTERRUPTED

	def test_loading_spinner_is_silent_under_pytest(self) -> None:
		with patch("foxguard.utils.cli_utils.err_console.status") as mock_status, loading_spinner("working"):
			pass

		mock_status.assert_not_called()

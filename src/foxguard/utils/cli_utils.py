"""Utility functions for CLI operations in foxguard."""

from __future__ import annotations

import contextlib
import logging
import os
import traceback
from typing import TYPE_CHECKING

import typer
from rich.console import Console

from foxguard.utils.log_setup import console as err_console
from foxguard.utils.log_setup import display_error_summary

if TYPE_CHECKING:
	from collections.abc import Iterator

console = Console()
logger = logging.getLogger(__name__)

EXIT_FOXTROT = 1
EXIT_INTERNAL_ERROR = 3
EXIT_INTERRUPTED = 130


@contextlib.contextmanager
def loading_spinner(message: str = "Processing...") -> Iterator[None]:
	"""
	Display a loading spinner while executing a task.

	Args:
	    message: Message to display alongside the spinner

	Yields:
	    None

	"""
	# In test environments and CI, don't display a spinner
	if os.environ.get("PYTEST_CURRENT_TEST") or os.environ.get("CI") or not err_console.is_terminal:
		yield
		return

	with err_console.status(message):
		yield


def describe_error_origin(exception: BaseException) -> str:
	"""
	Describe where an exception was raised as ``file:line in function``.

	The innermost frame of the original cause is used when the exception
	was chained with ``raise ... from``.

	"""
	origin = exception.__cause__ or exception
	frames = traceback.extract_tb(origin.__traceback__)
	if not frames:
		return "unknown location"
	frame = frames[-1]
	return f"{frame.filename}:{frame.lineno} in {frame.name}"


def show_error(message: str, exception: BaseException | None = None) -> None:
	"""
	Display an error summary with standardized formatting.

	Args:
	        message: The error message to display
	        exception: Optional exception that caused the error

	"""
	error_text = message
	if exception:
		error_text += f"\n\nDetails: {exception!s}"
		logger.debug("Error occurred", exc_info=exception)

	display_error_summary(error_text)


def exit_with_error(message: str, exit_code: int = EXIT_INTERNAL_ERROR, exception: BaseException | None = None) -> None:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error

	"""
	show_error(message, exception)
	raise typer.Exit(exit_code) from exception


def handle_keyboard_interrupt() -> None:
	"""Handles KeyboardInterrupt by printing a message and exiting cleanly."""
	err_console.print("\n[yellow]Operation cancelled by user.[/yellow]")
	raise typer.Exit(EXIT_INTERRUPTED)

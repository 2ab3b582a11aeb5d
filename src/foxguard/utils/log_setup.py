"""
Logging setup for foxguard.

Log records go to a rich console handler and, optionally, to a log file.
User-facing summaries are printed on the shared ``console``.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

console = Console(stderr=True)


def setup_logging(
	is_verbose: bool = False,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Set up logging configuration.

	Args:
	    is_verbose: Enable verbose logging
	    log_file_path: Optional path to a file for logging. If None, no file logging.

	"""
	log_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(log_level)

	# Clear existing handlers to avoid duplicate logs if called multiple times
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	console_handler = RichHandler(
		console=console,
		level=log_level,
		rich_tracebacks=True,
		show_time=True,
		show_path=is_verbose,
	)
	root_logger.addHandler(console_handler)

	if log_file_path:
		try:
			file_handler_path = Path(log_file_path)
			file_handler_path.parent.mkdir(parents=True, exist_ok=True)

			file_handler = logging.FileHandler(file_handler_path, mode="a", encoding="utf-8")
			file_handler.setLevel(logging.DEBUG)
			file_formatter = logging.Formatter(
				"%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"
			)
			file_handler.setFormatter(file_formatter)
			root_logger.addHandler(file_handler)
			root_logger.debug(f"Logging to file: {file_handler_path}")
		except OSError as e:
			root_logger.critical("Failed to set up file logging to %s: %s", log_file_path, e)


def log_environment_info() -> None:
	"""Log information about the execution environment."""
	import platform

	import pygit2

	from foxguard import __version__

	logger = logging.getLogger(__name__)
	logger.debug("foxguard version: %s", __version__)
	logger.debug("pygit2 version: %s (libgit2 %s)", pygit2.__version__, pygit2.LIBGIT2_VERSION)
	logger.debug("Python version: %s", platform.python_version())
	logger.debug("Platform: %s", platform.platform())


def display_error_summary(error_message: str, title: str = "Error Summary") -> None:
	"""
	Display an error summary with a divider and a title.

	Args:
	        error_message: The error message to display
	        title: Title shown in the divider

	"""
	console.print()
	console.print(Rule(Text(title, style="bold red"), style="red"))
	console.print(f"\n{error_message}\n", highlight=False)
	console.print(Rule(style="red"))
	console.print()

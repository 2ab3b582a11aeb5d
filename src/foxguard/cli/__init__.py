"""Command-line interface package for foxguard."""

from __future__ import annotations

import datetime
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from foxguard import __version__
from foxguard.utils.log_setup import log_environment_info, setup_logging

from .check_cmd import CliOptions, run_check
from .check_cmd import register_command as register_check_command

logger = logging.getLogger(__name__)

# .env.local wins over .env
for env_file in (Path(".env.local"), Path(".env")):
	if env_file.exists():
		load_dotenv(dotenv_path=env_file)
		logger.debug("Loaded environment variables from %s", env_file)
		break

app = typer.Typer(
	help=(
		f"foxguard - refuse foxtrot merges\n\nVersion: {__version__}\n\n"
		"Run without a command to check that the base branch tip is on the "
		"first-parent history of HEAD."
	),
	no_args_is_help=False,
	context_settings={"help_option_names": ["-h", "--help"]},
)

# --- Global Options Callback ---


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"foxguard version: {__version__}")
		raise typer.Exit


@app.callback(invoke_without_command=True)
def global_options(
	ctx: typer.Context,
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	is_output_log: Annotated[
		bool,
		typer.Option(
			"--save-log",
			help="Enable logging to a file. Logs to logs/foxguard_{datetime}.log.",
		),
	] = False,
	is_debug: Annotated[
		bool,
		typer.Option(
			"--debug",
			envvar="FOXGUARD_DEBUG",
			help="Print the resolved base reference and its tip before checking.",
		),
	] = False,
	workdir: Annotated[
		Path | None,
		typer.Option(
			"--workdir",
			"-C",
			envvar="FOXGUARD_WORKDIR",
			help="Run as if started in this directory.",
			file_okay=False,
		),
	] = None,
	config_file: Annotated[
		Path | None,
		typer.Option("--config", help="Path to a foxguard YAML configuration file.", dir_okay=False),
	] = None,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	log_file_path_to_use: Path | None = None
	if is_output_log:
		current_time = datetime.datetime.now(tz=datetime.timezone.utc).strftime("%Y-%m-%d_%H-%M-%S")
		log_file_path_to_use = Path("logs") / f"foxguard_{current_time}.log"

	setup_logging(is_verbose=is_verbose, log_file_path=log_file_path_to_use)
	log_environment_info()

	options = CliOptions(is_debug=is_debug, workdir=workdir, config_file=config_file)
	ctx.meta["options"] = options

	# A bare `foxguard` runs the check with configured defaults
	if ctx.invoked_subcommand is None:
		run_check(options)


register_check_command(app)


# --- Main Entry Point ---
def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())

"""Commands that run the foxtrot merge check."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
	from foxguard.check import BaseSnapshot, ForwardMergeVerifier, Verdict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CliOptions:
	"""Global options collected by the CLI callback."""

	is_debug: bool = False
	workdir: Path | None = None
	config_file: Path | None = None


# --- Command Argument Annotations ---

BaseOpt = Annotated[
	str | None,
	typer.Option(
		"--base",
		"-b",
		envvar="FOXGUARD_BASE",
		help="Base reference to check against. Skips automatic base resolution.",
	),
]

HeadOpt = Annotated[
	str | None,
	typer.Option("--head", help="Revision whose first-parent history is checked. Defaults to HEAD."),
]

JsonFlag = Annotated[bool, typer.Option("--json", help="Print the verdict as JSON.")]

TimeoutOpt = Annotated[
	float | None,
	typer.Option("--timeout", min=0, help="Give up after this many seconds of history walking (0 for no limit)."),
]

# --- Registration Function ---


def register_command(app: typer.Typer) -> None:
	"""Register the check commands with the CLI app."""

	@app.command(name="check")
	def check_command(
		ctx: typer.Context,
		base: BaseOpt = None,
		head: HeadOpt = None,
		as_json: JsonFlag = False,
		timeout: TimeoutOpt = None,
	) -> None:
		"""
		Check that HEAD has no foxtrot merge against its base branch.

		Exits with 0 when the base tip is on the first-parent history of HEAD,
		1 when it is not, and 3 when the repository could not be queried.

		"""
		run_check(_options(ctx), base=base, head=head, as_json=as_json, timeout=timeout)

	@app.command(name="base")
	def base_command(
		ctx: typer.Context,
		base: BaseOpt = None,
		as_json: JsonFlag = False,
	) -> None:
		"""Show which base reference the check would use, and its tip."""
		run_show_base(_options(ctx), base=base, as_json=as_json)


def _options(ctx: typer.Context) -> CliOptions:
	return ctx.meta.get("options") or CliOptions()


# --- Implementation Functions ---


def _build_verifier(
	options: CliOptions,
	base: str | None,
	head: str | None,
	timeout: float | None,
) -> ForwardMergeVerifier:
	"""Open the repository and assemble a verifier from CLI flags and configuration (CLI > Config > Default)."""
	from foxguard.check import AncestryChainComputer, BaseResolver, ForwardMergeVerifier
	from foxguard.check.models import ResolutionStrategy
	from foxguard.check.resolver import DEFAULT_STRATEGIES, make_symbolic_default_strategy
	from foxguard.config import ConfigLoader
	from foxguard.git import GitRepoContext

	accessor = GitRepoContext(options.workdir)
	config = ConfigLoader.get_instance(config_file=options.config_file, reload=True, repo_root=accessor.workdir)
	if config.config_file:
		logger.debug("Using configuration file %s", config.config_file)
	else:
		logger.debug("No configuration file found, using defaults")
	check_config = config.get.check

	strategies = DEFAULT_STRATEGIES
	if check_config.remote_default_only:
		strategies = tuple(
			(kind, make_symbolic_default_strategy(remote_only=True))
			if kind is ResolutionStrategy.SYMBOLIC_DEFAULT
			else (kind, strategy)
			for kind, strategy in DEFAULT_STRATEGIES
		)

	resolver = BaseResolver(accessor, explicit_base=base or check_config.base, strategies=strategies)
	chain_computer = AncestryChainComputer(
		accessor,
		timeout_seconds=timeout if timeout is not None else check_config.timeout_seconds,
	)
	return ForwardMergeVerifier(
		accessor,
		resolver=resolver,
		chain_computer=chain_computer,
		head=head or check_config.head,
	)


def _print_snapshot(snapshot: BaseSnapshot) -> None:
	from foxguard.utils.log_setup import console as err_console

	err_console.print(f"[dim]base:[/dim] {snapshot.ref_name} [dim]({snapshot.strategy.value})[/dim]", highlight=False)
	err_console.print(f"[dim]tip:[/dim]  {snapshot.tip_id}", highlight=False)


def _warn_if_degenerate(snapshot: BaseSnapshot) -> None:
	from foxguard.check import ResolutionStrategy

	if snapshot.strategy is ResolutionStrategy.CURRENT_BRANCH:
		logger.warning(
			"No upstream or default branch found; checking '%s' against itself. "
			"Set --base or check.base to check against a real base.",
			snapshot.ref_name,
		)


def remediation_message(verdict: Verdict) -> str:
	"""Build the message shown when a foxtrot merge is detected."""
	base = verdict.base.ref_name
	return (
		f"The tip of '{base}' ({verdict.offending_base_tip}) is not on the first-parent\n"
		f"history of {verdict.head_id}.\n\n"
		f"It was merged in as a side branch (a foxtrot merge). Pushing this would\n"
		f"rewrite the first-parent history of '{base}'.\n\n"
		f"Rebase your work onto the base instead of merging it in:\n\n"
		f"    git rebase {base}"
	)


def run_check(
	options: CliOptions,
	base: str | None = None,
	head: str | None = None,
	as_json: bool = False,
	timeout: float | None = None,
) -> None:
	"""Run the check and exit with the code matching the verdict."""
	from foxguard.check import VerificationError
	from foxguard.config import ConfigError
	from foxguard.git import GitError
	from foxguard.utils.cli_utils import (
		EXIT_FOXTROT,
		console,
		describe_error_origin,
		exit_with_error,
		handle_keyboard_interrupt,
		loading_spinner,
	)
	from foxguard.utils.log_setup import display_error_summary

	def on_snapshot(snapshot: BaseSnapshot) -> None:
		_warn_if_degenerate(snapshot)
		if options.is_debug:
			_print_snapshot(snapshot)

	try:
		verifier = _build_verifier(options, base, head, timeout)
		with loading_spinner("Checking first-parent history..."):
			verdict = verifier.verify(on_snapshot=on_snapshot)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
		return
	except VerificationError as e:
		exit_with_error(
			f"Check failed in step '{e.step}' ({describe_error_origin(e)}):\n{e.message}",
			exception=e,
		)
		return
	except (GitError, ConfigError) as e:
		exit_with_error(f"Could not start the check ({describe_error_origin(e)}):\n{e}", exception=e)
		return

	if as_json:
		typer.echo(json.dumps(verdict.to_dict(), indent=2))
	elif verdict.passed:
		console.print(
			f"[green]OK[/green] no foxtrot merge: {verdict.base.ref_name} ({verdict.base.tip_id[:12]}) "
			f"is on the first-parent history of {verdict.head_id[:12]}",
			highlight=False,
		)
	else:
		display_error_summary(remediation_message(verdict), title="Foxtrot Merge Detected")

	if not verdict.passed:
		raise typer.Exit(EXIT_FOXTROT)


def run_show_base(options: CliOptions, base: str | None = None, as_json: bool = False) -> None:
	"""Resolve and print the base reference without running the check."""
	from foxguard.check import VerificationError
	from foxguard.config import ConfigError
	from foxguard.git import GitError
	from foxguard.utils.cli_utils import console, describe_error_origin, exit_with_error

	try:
		snapshot = _build_verifier(options, base, None, None).snapshot_base()
	except VerificationError as e:
		exit_with_error(
			f"Could not resolve the base in step '{e.step}' ({describe_error_origin(e)}):\n{e.message}",
			exception=e,
		)
		return
	except (GitError, ConfigError) as e:
		exit_with_error(f"Could not open the repository ({describe_error_origin(e)}):\n{e}", exception=e)
		return

	if as_json:
		payload = {
			"base": snapshot.ref_name,
			"tip": snapshot.tip_id,
			"strategy": snapshot.strategy.value,
			"boundary": snapshot.boundary_id,
		}
		typer.echo(json.dumps(payload, indent=2))
		return

	console.print(f"{snapshot.ref_name}\t{snapshot.tip_id}\t{snapshot.strategy.value}", highlight=False)

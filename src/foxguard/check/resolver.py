"""
Base reference resolution.

The base is the branch the current work must stay a linear, first-parent
descendant of. It is chosen by an ordered list of strategies; the first one
that returns a name wins. The last strategy (the current branch) always
returns a name, so resolution never fails on its own.

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from foxguard.check.models import ResolutionStrategy, ResolvedBase
from foxguard.git.repository import GitError, RepositoryAccessor

logger = logging.getLogger(__name__)

StrategyFunc = Callable[[RepositoryAccessor], str | None]


def upstream_strategy(accessor: RepositoryAccessor) -> str | None:
	"""Use the upstream tracking branch of the checked-out branch."""
	try:
		branch = accessor.current_branch()
		if branch == "HEAD":
			return None
		return accessor.resolve_upstream(branch)
	except GitError as e:
		logger.debug("Upstream lookup failed: %s", e)
		return None


def make_symbolic_default_strategy(*, remote_only: bool = False) -> StrategyFunc:
	"""
	Build the strategy that picks the target of a symbolic branch alias.

	Args:
		remote_only: Ignore symbolic aliases among local branches

	Returns:
		A strategy function

	"""

	def symbolic_default_strategy(accessor: RepositoryAccessor) -> str | None:
		try:
			entries = accessor.list_branches()
		except GitError as e:
			logger.debug("Branch listing failed: %s", e)
			return None
		for entry in entries:
			if not entry.is_symbolic_target:
				continue
			if remote_only and not entry.is_remote:
				continue
			return entry.name
		return None

	return symbolic_default_strategy


def current_branch_strategy(accessor: RepositoryAccessor) -> str | None:
	"""Fall back to the checked-out branch itself."""
	return accessor.current_branch()


DEFAULT_STRATEGIES: tuple[tuple[ResolutionStrategy, StrategyFunc], ...] = (
	(ResolutionStrategy.UPSTREAM, upstream_strategy),
	(ResolutionStrategy.SYMBOLIC_DEFAULT, make_symbolic_default_strategy()),
	(ResolutionStrategy.CURRENT_BRANCH, current_branch_strategy),
)


class BaseResolver:
	"""Pick the base reference with first-success semantics over a strategy list."""

	def __init__(
		self,
		accessor: RepositoryAccessor,
		explicit_base: str | None = None,
		strategies: Sequence[tuple[ResolutionStrategy, StrategyFunc]] | None = None,
	) -> None:
		"""
		Initialize the resolver.

		Args:
			accessor: Repository to query
			explicit_base: Base reference configured by the user. When set it
				takes priority over every other strategy.
			strategies: Strategy list to use instead of ``DEFAULT_STRATEGIES``

		"""
		self.accessor = accessor
		self.explicit_base = explicit_base or None
		self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

	def resolve(self) -> ResolvedBase:
		"""
		Resolve the base reference.

		Returns:
			The first name produced by a strategy, with the strategy that produced it

		Raises:
			GitError: If the final strategy cannot read HEAD at all

		"""
		if self.explicit_base:
			logger.debug("Using explicitly configured base '%s'", self.explicit_base)
			return ResolvedBase(self.explicit_base, ResolutionStrategy.EXPLICIT)

		for kind, strategy in self.strategies:
			name = strategy(self.accessor)
			if name:
				logger.debug("Base '%s' resolved by %s strategy", name, kind.value)
				return ResolvedBase(name, kind)
			logger.debug("Strategy %s found no base", kind.value)

		# Only reachable with a custom strategy list that has no total fallback.
		branch = self.accessor.current_branch()
		return ResolvedBase(branch, ResolutionStrategy.CURRENT_BRANCH)

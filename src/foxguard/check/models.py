"""Value objects produced by the foxtrot merge check."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResolutionStrategy(str, Enum):
	"""Which base resolution strategy produced a base reference."""

	EXPLICIT = "explicit"
	UPSTREAM = "upstream"
	SYMBOLIC_DEFAULT = "symbolic-default"
	CURRENT_BRANCH = "current-branch"


class VerdictStatus(str, Enum):
	"""Outcome of a check."""

	PASS = "pass"
	FAIL = "fail"


@dataclass(frozen=True)
class ResolvedBase:
	"""A base reference name together with the strategy that chose it."""

	ref_name: str
	strategy: ResolutionStrategy


@dataclass(frozen=True)
class BaseSnapshot:
	"""
	The base reference and its tip, captured once per run.

	The tip is never re-read after the snapshot is taken, so a branch that
	moves mid-check does not change the outcome of that check.

	"""

	ref_name: str
	"""Name of the base reference."""

	tip_id: str
	"""Commit id the base pointed at when the snapshot was taken."""

	strategy: ResolutionStrategy
	"""Strategy that picked the base."""

	boundary_id: str | None = None
	"""First parent of the tip, or None when the tip is a root commit."""


@dataclass(frozen=True)
class AncestryChain:
	"""Ordered first-parent chain of commit ids, head first."""

	start: str
	boundary: str | None
	commits: tuple[str, ...] = ()
	_members: frozenset[str] = field(init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		"""Index the chain for membership tests."""
		object.__setattr__(self, "_members", frozenset(self.commits))

	def __contains__(self, commit_id: object) -> bool:
		return commit_id in self._members

	def __iter__(self) -> Iterator[str]:
		return iter(self.commits)

	def __len__(self) -> int:
		return len(self.commits)


@dataclass(frozen=True)
class Verdict:
	"""Result of a single foxtrot merge check."""

	status: VerdictStatus
	base: BaseSnapshot
	head_id: str
	chain_length: int
	offending_base_tip: str | None = None

	@property
	def passed(self) -> bool:
		"""Whether the head keeps the base on its first-parent chain."""
		return self.status is VerdictStatus.PASS

	def to_dict(self) -> dict[str, Any]:
		"""Render the verdict as a JSON-compatible dictionary."""
		return {
			"status": self.status.value,
			"base": self.base.ref_name,
			"base_tip": self.base.tip_id,
			"strategy": self.base.strategy.value,
			"boundary": self.base.boundary_id,
			"head": self.head_id,
			"chain_length": self.chain_length,
			"offending_base_tip": self.offending_base_tip,
		}

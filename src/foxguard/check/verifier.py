"""Foxtrot merge verification."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from foxguard.check.ancestry import AncestryChainComputer
from foxguard.check.errors import VerificationError
from foxguard.check.models import BaseSnapshot, Verdict, VerdictStatus
from foxguard.check.resolver import BaseResolver
from foxguard.git.repository import GitError, RepositoryAccessor

logger = logging.getLogger(__name__)

STEP_RESOLVE_BASE = "resolve-base"
STEP_SNAPSHOT_BASE = "snapshot-base"
STEP_COMPUTE_BOUNDARY = "compute-boundary"
STEP_RESOLVE_HEAD = "resolve-head"
STEP_WALK_CHAIN = "walk-chain"


@contextmanager
def _step(name: str) -> Iterator[None]:
	"""Re-raise repository errors as a VerificationError naming the step."""
	try:
		yield
	except GitError as e:
		raise VerificationError(name, str(e)) from e


class ForwardMergeVerifier:
	"""
	Check that the base tip lies on the head's first-parent chain.

	A run resolves the base, snapshots its tip once, computes the exclusion
	boundary (the tip's first parent) and walks the head's first-parent chain
	down to it. The verdict is PASS when the tip is on that chain. Otherwise
	the base history reached the head only through a merge parent, which is
	a foxtrot merge.

	"""

	def __init__(
		self,
		accessor: RepositoryAccessor,
		resolver: BaseResolver | None = None,
		chain_computer: AncestryChainComputer | None = None,
		head: str = "HEAD",
	) -> None:
		"""
		Initialize the verifier.

		Args:
			accessor: Repository to query
			resolver: Base resolver, defaults to one with no explicit base
			chain_computer: Chain computer, defaults to one without deadline
			head: Revision to verify

		"""
		self.accessor = accessor
		self.resolver = resolver or BaseResolver(accessor)
		self.chain_computer = chain_computer or AncestryChainComputer(accessor)
		self.head = head

	def snapshot_base(self, on_snapshot: Callable[[BaseSnapshot], None] | None = None) -> BaseSnapshot:
		"""
		Resolve the base reference and capture its tip and boundary.

		Args:
			on_snapshot: Called with the snapshot as soon as it is taken

		Returns:
			The captured snapshot

		Raises:
			VerificationError: If a repository query fails

		"""
		with _step(STEP_RESOLVE_BASE):
			resolved = self.resolver.resolve()

		with _step(STEP_SNAPSHOT_BASE):
			tip_id = self.accessor.resolve_tip(resolved.ref_name)

		with _step(STEP_COMPUTE_BOUNDARY):
			parents = self.accessor.parents_of(tip_id)
		boundary_id = parents[0] if parents else None
		if boundary_id is None:
			logger.debug("Base tip %s is a root commit, scanning the whole chain", tip_id)

		snapshot = BaseSnapshot(
			ref_name=resolved.ref_name,
			tip_id=tip_id,
			strategy=resolved.strategy,
			boundary_id=boundary_id,
		)
		if on_snapshot is not None:
			on_snapshot(snapshot)
		return snapshot

	def verify(self, on_snapshot: Callable[[BaseSnapshot], None] | None = None) -> Verdict:
		"""
		Run the check.

		Args:
			on_snapshot: Called with the base snapshot before the chain walk starts

		Returns:
			PASS, or FAIL with the offending base tip

		Raises:
			VerificationError: If a repository query fails

		"""
		base = self.snapshot_base(on_snapshot)

		with _step(STEP_RESOLVE_HEAD):
			head_id = self.accessor.resolve_tip(self.head)

		with _step(STEP_WALK_CHAIN):
			chain = self.chain_computer.compute(head_id, base.boundary_id)

		if base.tip_id in chain:
			logger.info("Base %s (%s) is on the first-parent chain of %s", base.ref_name, base.tip_id, head_id)
			return Verdict(
				status=VerdictStatus.PASS,
				base=base,
				head_id=head_id,
				chain_length=len(chain),
			)

		logger.info("Base %s (%s) is not on the first-parent chain of %s", base.ref_name, base.tip_id, head_id)
		return Verdict(
			status=VerdictStatus.FAIL,
			base=base,
			head_id=head_id,
			chain_length=len(chain),
			offending_base_tip=base.tip_id,
		)

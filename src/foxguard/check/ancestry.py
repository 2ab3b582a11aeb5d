"""First-parent ancestry walk bounded by the ancestry of a boundary commit."""

from __future__ import annotations

import logging
import time

from foxguard.check.errors import CheckTimeoutError
from foxguard.check.models import AncestryChain
from foxguard.git.repository import RepositoryAccessor

logger = logging.getLogger(__name__)


class AncestryChainComputer:
	"""
	Compute the first-parent chain of a commit down to an exclusion boundary.

	Starting at ``start`` the walk follows parent index 0 only. It stops
	before the first commit that is the boundary or one of its ancestors
	(through any parent edge), or after a root commit. Once the walk reaches
	the boundary's ancestry every further first parent is also in it, so
	stopping there covers the same set as excluding the whole ancestry.

	"""

	def __init__(self, accessor: RepositoryAccessor, timeout_seconds: float | None = None) -> None:
		"""
		Initialize the computer.

		Args:
			accessor: Repository to query
			timeout_seconds: Abort the walk after this many seconds. ``None``
				or ``0`` disables the deadline.

		"""
		self.accessor = accessor
		self.timeout_seconds = timeout_seconds or None

	def compute(self, start: str, boundary: str | None) -> AncestryChain:
		"""
		Walk the first-parent chain of ``start``.

		Args:
			start: Commit id to start from (normally the head)
			boundary: Commit id whose ancestry ends the walk, or None to walk to the root

		Returns:
			The chain, head first

		Raises:
			CommitNotFoundError: If ``start``, ``boundary`` or a visited commit is missing
			CheckTimeoutError: If the deadline passes during the walk

		"""
		deadline = time.monotonic() + self.timeout_seconds if self.timeout_seconds else None
		commits: list[str] = []
		current: str | None = start

		while current is not None:
			if deadline is not None and time.monotonic() > deadline:
				msg = f"First-parent walk from {start} exceeded {self.timeout_seconds}s after {len(commits)} commits"
				raise CheckTimeoutError(msg)

			if boundary is not None and self.accessor.is_ancestor(current, boundary):
				break

			commits.append(current)
			parents = self.accessor.parents_of(current)
			current = parents[0] if parents else None

		logger.debug("First-parent chain from %s has %d commits (boundary %s)", start, len(commits), boundary)
		return AncestryChain(start=start, boundary=boundary, commits=tuple(commits))

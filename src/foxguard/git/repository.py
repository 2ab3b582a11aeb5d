"""Read-only access to the commit graph of a Git repository."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from pygit2 import Commit, discover_repository
from pygit2 import GitError as Pygit2GitError
from pygit2.enums import ReferenceType
from pygit2.repository import Repository

logger = logging.getLogger(__name__)

LOCAL_BRANCH_PREFIX = "refs/heads/"
REMOTE_BRANCH_PREFIX = "refs/remotes/"


class GitError(Exception):
	"""Custom exception for Git-related errors."""


class ReferenceNotFoundError(GitError):
	"""A reference name could not be resolved to a commit."""


class CommitNotFoundError(GitError):
	"""A commit id does not exist in the object database."""


@dataclass(frozen=True)
class BranchEntry:
	"""One line of a local and remote branch listing."""

	name: str
	"""Short branch name, e.g. ``main`` or ``origin/main``."""

	is_symbolic_target: bool = False
	"""Whether this name is the target of a symbolic alias such as ``origin/HEAD``."""

	is_remote: bool = False
	"""Whether the entry comes from a remote-tracking reference."""


def shorten_ref_name(ref_name: str) -> str:
	"""Strip the ``refs/heads/`` or ``refs/remotes/`` prefix from a reference name."""
	for prefix in (LOCAL_BRANCH_PREFIX, REMOTE_BRANCH_PREFIX):
		if ref_name.startswith(prefix):
			return ref_name[len(prefix) :]
	return ref_name


class RepositoryAccessor(ABC):
	"""
	Query interface over a commit graph.

	All implementations are read-only. Commit ids are exchanged as full
	hexadecimal strings.

	"""

	@abstractmethod
	def resolve_upstream(self, branch: str) -> str | None:
		"""
		Get the upstream tracking branch configured for a local branch.

		Args:
			branch: Local branch name

		Returns:
			Short name of the upstream branch, or None if none is configured

		"""

	@abstractmethod
	def list_branches(self) -> list[BranchEntry]:
		"""
		List all local and remote-tracking branches.

		Symbolic aliases (``origin/HEAD -> origin/main``) are reported as an
		entry for their target with ``is_symbolic_target`` set.

		"""

	@abstractmethod
	def current_branch(self) -> str:
		"""
		Get the name of the checked-out branch.

		Returns:
			Branch name, or ``HEAD`` when the head is detached

		Raises:
			ReferenceNotFoundError: If HEAD cannot be read

		"""

	@abstractmethod
	def resolve_tip(self, ref_name: str) -> str:
		"""
		Resolve a reference or revision to the id of the commit it points at.

		Raises:
			ReferenceNotFoundError: If the name does not resolve to a commit

		"""

	@abstractmethod
	def parents_of(self, commit_id: str) -> list[str]:
		"""
		Get the ordered parent ids of a commit, first parent first.

		Raises:
			CommitNotFoundError: If the commit does not exist

		"""

	@abstractmethod
	def is_ancestor(self, candidate: str, of_commit: str) -> bool:
		"""
		Check whether ``candidate`` is reachable from ``of_commit`` through any parent edge.

		A commit counts as its own ancestor.

		Raises:
			CommitNotFoundError: If either commit does not exist

		"""


class GitRepoContext(RepositoryAccessor):
	"""Repository accessor backed by pygit2."""

	@classmethod
	def get_repo_root(cls, path: Path | None = None) -> Path:
		"""
		Get the Git directory of the repository containing ``path``.

		Raises:
			GitError: If ``path`` is not inside a Git repository or discovery fails

		"""
		search_path = path or Path.cwd()
		try:
			git_dir = discover_repository(str(search_path))
		except Pygit2GitError as e:
			msg = f"Failed to discover a git repository from {search_path}: {e}"
			raise GitError(msg) from e
		if git_dir is None:
			msg = f"Not a git repository: {search_path}"
			logger.error(msg)
			raise GitError(msg)
		return Path(git_dir)

	def __init__(self, path: Path | None = None) -> None:
		"""Open the repository that contains ``path`` (defaults to the current directory)."""
		self.repo_root = self.get_repo_root(path)
		try:
			self.repo = Repository(str(self.repo_root))
		except Pygit2GitError as e:
			msg = f"Failed to open repository at {self.repo_root}: {e}"
			raise GitError(msg) from e
		logger.debug("Opened repository at %s", self.repo.path)

	@property
	def workdir(self) -> Path:
		"""Working tree of the repository, or the Git directory for a bare repository."""
		if self.repo.workdir:
			return Path(self.repo.workdir)
		return self.repo_root

	def resolve_upstream(self, branch: str) -> str | None:
		try:
			local_branch = self.repo.branches.local.get(branch)
			if local_branch is None:
				logger.debug("No local branch named '%s'", branch)
				return None
			upstream = local_branch.upstream
		except (Pygit2GitError, KeyError, ValueError) as e:
			logger.debug("Could not read upstream of '%s': %s", branch, e)
			return None
		if upstream is None:
			return None
		return upstream.branch_name

	def list_branches(self) -> list[BranchEntry]:
		entries: list[BranchEntry] = []
		try:
			for ref_name in self.repo.references:
				is_local = ref_name.startswith(LOCAL_BRANCH_PREFIX)
				is_remote = ref_name.startswith(REMOTE_BRANCH_PREFIX)
				if not is_local and not is_remote:
					continue
				reference = self.repo.references[ref_name]
				if reference.type == ReferenceType.SYMBOLIC:
					target = shorten_ref_name(str(reference.target))
					entries.append(BranchEntry(name=target, is_symbolic_target=True, is_remote=is_remote))
				else:
					entries.append(BranchEntry(name=shorten_ref_name(ref_name), is_remote=is_remote))
		except Pygit2GitError as e:
			msg = f"Failed to list branches: {e}"
			raise GitError(msg) from e
		return entries

	def current_branch(self) -> str:
		try:
			if self.repo.head_is_unborn:
				msg = "HEAD does not point to a commit yet"
				raise ReferenceNotFoundError(msg)
			if self.repo.head_is_detached:
				logger.debug("HEAD is detached")
				return "HEAD"
			return self.repo.head.shorthand
		except Pygit2GitError as e:
			msg = f"Failed to read HEAD: {e}"
			raise ReferenceNotFoundError(msg) from e

	def resolve_tip(self, ref_name: str) -> str:
		try:
			obj = self.repo.revparse_single(ref_name)
			commit = obj.peel(Commit)
		except (KeyError, ValueError, Pygit2GitError) as e:
			msg = f"Could not resolve '{ref_name}' to a commit"
			raise ReferenceNotFoundError(msg) from e
		return str(commit.id)

	def _get_commit(self, commit_id: str) -> Commit:
		try:
			obj = self.repo.get(commit_id)
		except (ValueError, Pygit2GitError) as e:
			msg = f"Invalid commit id '{commit_id}'"
			raise CommitNotFoundError(msg) from e
		if not isinstance(obj, Commit):
			msg = f"Commit '{commit_id}' not found"
			raise CommitNotFoundError(msg)
		return obj

	def parents_of(self, commit_id: str) -> list[str]:
		commit = self._get_commit(commit_id)
		return [str(parent_id) for parent_id in commit.parent_ids]

	def is_ancestor(self, candidate: str, of_commit: str) -> bool:
		candidate_commit = self._get_commit(candidate)
		of = self._get_commit(of_commit)
		if candidate_commit.id == of.id:
			return True
		try:
			# descendant_of(A, B) means "is A a descendant of B?"
			return self.repo.descendant_of(of.id, candidate_commit.id)
		except Pygit2GitError as e:
			msg = f"Failed to compare '{candidate}' with '{of_commit}': {e}"
			raise GitError(msg) from e

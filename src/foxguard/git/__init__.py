"""Git access for foxguard."""

from .repository import (
	BranchEntry,
	CommitNotFoundError,
	GitError,
	GitRepoContext,
	ReferenceNotFoundError,
	RepositoryAccessor,
)

__all__ = [
	"BranchEntry",
	"CommitNotFoundError",
	"GitError",
	"GitRepoContext",
	"ReferenceNotFoundError",
	"RepositoryAccessor",
]

"""Errors raised while running the foxtrot merge check."""

from __future__ import annotations

from foxguard.git.repository import GitError


class CheckTimeoutError(GitError):
	"""The first-parent walk ran past its deadline."""


class VerificationError(Exception):
	"""
	A repository query failed during one step of the check.

	The underlying error is available as ``__cause__``.

	"""

	def __init__(self, step: str, message: str) -> None:
		"""
		Initialize the error.

		Args:
			step: Name of the verifier step that failed
			message: Human readable description of the failure

		"""
		super().__init__(f"{step}: {message}")
		self.step = step
		self.message = message

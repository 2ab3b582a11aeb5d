"""Schema for the foxguard configuration file."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CheckSchema(BaseModel):
	"""Configuration for the foxtrot merge check."""

	base: str | None = None
	"""Explicit base reference. Skips automatic base resolution when set."""

	head: str = "HEAD"
	"""Revision whose first-parent chain is verified."""

	timeout_seconds: float = Field(default=0, ge=0)
	"""Deadline for the first-parent walk in seconds, 0 for none."""

	remote_default_only: bool = False
	"""Only accept symbolic default branches from remote-tracking references."""


class AppConfigSchema(BaseModel):
	"""Top level configuration."""

	check: CheckSchema = Field(default_factory=CheckSchema)

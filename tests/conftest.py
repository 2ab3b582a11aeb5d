"""Global test fixtures and configuration."""

from collections.abc import Generator
from pathlib import Path

import pytest

from foxguard.config import ConfigLoader
from tests.base import FakeRepository, RepoBuilder


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
	"""Drop the cached config loader between tests."""
	ConfigLoader._instance = None  # noqa: SLF001
	yield
	ConfigLoader._instance = None  # noqa: SLF001


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
	"""Keep user environment variables and config files out of the tests."""
	for name in ("FOXGUARD_BASE", "FOXGUARD_DEBUG", "FOXGUARD_WORKDIR"):
		monkeypatch.delenv(name, raising=False)
	monkeypatch.setattr("foxguard.config.config_loader.xdg_config_home", str(tmp_path / "xdg"))
	monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
	"""Create an empty real repository."""
	return RepoBuilder(tmp_path / "repo")


@pytest.fixture
def linear_repo() -> FakeRepository:
	"""
	In-memory repository with local work on top of the upstream tip.

	main: b1 - b2 - b3, feature: b3 - h4 - h5, feature tracks origin/main at b3.
	"""
	return FakeRepository(
		commits={
			"b1": [],
			"b2": ["b1"],
			"b3": ["b2"],
			"h4": ["b3"],
			"h5": ["h4"],
		},
		refs={"main": "b3", "origin/main": "b3", "feature": "h5"},
		current="feature",
		upstreams={"feature": "origin/main"},
	)

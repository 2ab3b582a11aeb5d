"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from foxguard.config import AppConfigSchema, ConfigLoader, ConfigParsingError


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
	"""Path for a temporary config file."""
	return tmp_path / "project" / ".foxguard.yml"


def _write(path: Path, content: dict) -> Path:
	path.parent.mkdir(parents=True, exist_ok=True)
	with path.open("w", encoding="utf-8") as f:
		yaml.dump(content, f)
	return path


@pytest.mark.unit
class TestConfigLoader:
	"""Config file discovery, parsing and validation."""

	def test_defaults_without_file(self, tmp_path: Path) -> None:
		loader = ConfigLoader(repo_root=tmp_path)

		assert loader.config_file is None
		assert loader.get == AppConfigSchema()
		assert loader.get.check.base is None
		assert loader.get.check.head == "HEAD"
		assert loader.get.check.timeout_seconds == 0
		assert loader.get.check.remote_default_only is False

	def test_repo_root_file(self, temp_config_file: Path) -> None:
		_write(temp_config_file, {"check": {"base": "origin/trunk", "timeout_seconds": 2.5}})

		loader = ConfigLoader(repo_root=temp_config_file.parent)

		assert loader.config_file == temp_config_file
		assert loader.get.check.base == "origin/trunk"
		assert loader.get.check.timeout_seconds == 2.5

	def test_explicit_file_wins(self, tmp_path: Path, temp_config_file: Path) -> None:
		_write(temp_config_file, {"check": {"base": "from-repo"}})
		explicit = _write(tmp_path / "elsewhere.yml", {"check": {"base": "from-explicit"}})

		loader = ConfigLoader(config_file=explicit, repo_root=temp_config_file.parent)

		assert loader.get.check.base == "from-explicit"

	def test_missing_explicit_file_uses_defaults(self, tmp_path: Path) -> None:
		loader = ConfigLoader(config_file=tmp_path / "missing.yml", repo_root=tmp_path)

		assert loader.get == AppConfigSchema()

	def test_xdg_file(self, tmp_path: Path) -> None:
		_write(tmp_path / "xdg" / "foxguard" / "config.yml", {"check": {"head": "main"}})

		loader = ConfigLoader(repo_root=tmp_path / "project")

		assert loader.get.check.head == "main"

	def test_empty_file(self, temp_config_file: Path) -> None:
		temp_config_file.parent.mkdir(parents=True)
		temp_config_file.write_text("", encoding="utf-8")

		assert ConfigLoader(repo_root=temp_config_file.parent).get == AppConfigSchema()

	def test_non_mapping_file(self, temp_config_file: Path) -> None:
		temp_config_file.parent.mkdir(parents=True)
		temp_config_file.write_text("- a\n- b\n", encoding="utf-8")

		with pytest.raises(ConfigParsingError):
			ConfigLoader(repo_root=temp_config_file.parent)

	def test_invalid_yaml(self, temp_config_file: Path) -> None:
		temp_config_file.parent.mkdir(parents=True)
		temp_config_file.write_text("check: [unclosed\n", encoding="utf-8")

		with pytest.raises(ConfigParsingError):
			ConfigLoader(repo_root=temp_config_file.parent)

	def test_negative_timeout_rejected(self, temp_config_file: Path) -> None:
		_write(temp_config_file, {"check": {"timeout_seconds": -1}})

		with pytest.raises(ConfigParsingError):
			ConfigLoader(repo_root=temp_config_file.parent)

	def test_singleton_reload(self, tmp_path: Path, temp_config_file: Path) -> None:
		first = ConfigLoader.get_instance(repo_root=tmp_path)
		assert first.get.check.base is None

		_write(temp_config_file, {"check": {"base": "main"}})
		second = ConfigLoader.get_instance(reload=True, repo_root=temp_config_file.parent)

		assert second is first
		assert second.get.check.base == "main"

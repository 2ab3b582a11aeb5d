"""
Configuration loader for foxguard.

This module provides functionality for loading and managing
configuration settings.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from foxguard.config.config_schema import AppConfigSchema

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".foxguard.yml"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""


class ConfigLoader:
	"""
	Loads and manages configuration for foxguard using Pydantic schemas.

	This class handles loading configuration from files, applying defaults
	from Pydantic models, with proper error handling and path
	resolution.

	"""

	_instance: ConfigLoader | None = None

	@classmethod
	def get_instance(
		cls, config_file: Path | None = None, reload: bool = False, repo_root: Path | None = None
	) -> ConfigLoader:
		"""
		Get the singleton instance of ConfigLoader.

		Args:
			config_file: Path to configuration file (optional)
			reload: Whether to reload config even if already loaded
			repo_root: Directory to look for ``.foxguard.yml`` in (optional)

		Returns:
			ConfigLoader: Singleton instance

		"""
		if cls._instance is None:
			cls._instance = cls(config_file, repo_root=repo_root)
		elif reload:
			cls._instance.reload_config(config_file, repo_root)
		return cls._instance

	def __init__(self, config_file: Path | None = None, repo_root: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
			config_file: Path to configuration file (optional)
			repo_root: Directory to look for ``.foxguard.yml`` in (optional)

		"""
		self.repo_root = repo_root
		self._config_file = config_file
		self._resolved_config_file = self._resolve_config_file(config_file)
		self._app_config = self._load_config()

	def reload_config(self, config_file: Path | None = None, repo_root: Path | None = None) -> None:
		"""
		Reload configuration with new settings.

		Args:
			config_file: New configuration file path
			repo_root: New directory to look for ``.foxguard.yml`` in
		"""
		if config_file is not None:
			self._config_file = config_file
		if repo_root is not None:
			self.repo_root = repo_root
		self._resolved_config_file = self._resolve_config_file(self._config_file)
		self._app_config = self._load_config()
		logger.debug("Configuration reloaded")

	def _resolve_config_file(self, config_file: Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. .foxguard.yml in the repository root (or current directory)
		2. $XDG_CONFIG_HOME/foxguard/config.yml
		3. ~/.foxguard/config.yml

		Args:
			config_file: Explicitly provided config file path (optional)

		Returns:
			Optional[Path]: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			path = config_file.expanduser().resolve()
			if not path.exists():
				logger.warning("Specified config file not found: %s", path)
			return path

		local_config = (self.repo_root or Path.cwd()) / CONFIG_FILE_NAME
		if local_config.exists():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "foxguard" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		legacy_config = Path.home() / ".foxguard" / "config.yml"
		if legacy_config.exists():
			return legacy_config

		return None

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file into a dictionary.

		Raises:
			yaml.YAMLError: If the file is not valid YAML or not a mapping
		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
			if content is None:
				return {}
			if not isinstance(content, dict):
				msg = f"File {file_path} does not contain a valid YAML dictionary"
				raise yaml.YAMLError(msg)
			return content

	def _load_config(self) -> AppConfigSchema:
		"""
		Load configuration from file and parse it into AppConfigSchema.

		Returns:
			AppConfigSchema: Loaded and parsed configuration.

		Raises:
			ConfigParsingError: If configuration file exists but cannot be loaded or parsed.

		"""
		file_config_dict: dict[str, Any] = {}
		if self._resolved_config_file:
			try:
				if self._resolved_config_file.exists():
					try:
						file_config_dict = self._parse_yaml_file(self._resolved_config_file)
						logger.info("Loaded configuration from %s", self._resolved_config_file)
					except yaml.YAMLError as e:
						msg = f"Configuration file {self._resolved_config_file} does not contain a valid YAML dictionary."
						logger.exception(msg)
						raise ConfigParsingError(msg) from e
				else:
					logger.info("Configuration file not found: %s. Using default configuration.", self._resolved_config_file)
			except OSError as e:
				error_msg = f"Error accessing configuration file {self._resolved_config_file}: {e}"
				logger.exception(error_msg)
				raise ConfigParsingError(error_msg) from e
		else:
			logger.info("No configuration file specified or found. Using default configuration.")

		try:
			return AppConfigSchema(**file_config_dict)
		except ValidationError as e:
			error_msg = f"Error parsing configuration into schema: {e}"
			logger.exception(error_msg)
			raise ConfigParsingError(error_msg) from e

	@property
	def config_file(self) -> Path | None:
		"""Path of the configuration file in use, if any."""
		return self._resolved_config_file

	@property
	def get(self) -> AppConfigSchema:
		"""
		Get the current application configuration.

		Returns:
			AppConfigSchema: The current configuration
		"""
		return self._app_config

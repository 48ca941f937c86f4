"""Configuration file loading and enablement resolution."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from stylehound.config.settings import (
  REPO_CONFIG_FILE,
  CheckerConfig,
  EnablementConfig,
  Settings,
  default_enablement,
)
from stylehound.errors import ConfigResolutionFailure, ContentFetchFailure, ContentNotFound

if TYPE_CHECKING:
  from stylehound.sources.base import ContentStore, Submission

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ["stylehound.yaml", "stylehound.yml", ".stylehound.yaml"]

# Spellings accepted for checker keys in repository config files
CHECKER_ALIASES = {
  "coffee_script": "coffeescript",
  "coffee-script": "coffeescript",
  "coffee": "coffeescript",
  "java_script": "javascript",
  "java-script": "javascript",
  "js": "javascript",
}


def _find_config_file(config_path: Path | None = None) -> Path | None:
  """Find config file path, or None if no config exists."""
  if config_path:
    return config_path

  for filename in CONFIG_FILENAMES:
    path = Path.cwd() / filename
    if path.exists():
      return path

  return None


def load_config(config_path: Path | None = None) -> Settings:
  """Load application settings from file or defaults."""
  path = _find_config_file(config_path)
  if path:
    return _load_from_file(path)
  return Settings()


def _load_from_file(path: Path) -> Settings:
  """Load settings from a YAML file."""
  if not path.exists():
    raise FileNotFoundError(f"Config file not found: {path}")

  with open(path) as f:
    data = yaml.safe_load(f) or {}

  return Settings(**data)


def normalize_checker_name(name: str) -> str:
  key = str(name).strip().lower()
  return CHECKER_ALIASES.get(key, key)


def parse_enablement(
  text: str | None,
  defaults: EnablementConfig | None = None,
) -> EnablementConfig:
  """Merge a repository config file over the default enablement.

  Each top-level key names a checker. Its value is either a mapping
  (enabled, command, timeout and checker options) or a bare boolean.

  Args:
    text: Raw YAML, or None when the repository has no config file.
    defaults: Enablement to merge over. Built-in defaults if None.

  Raises:
    ConfigResolutionFailure: If the YAML is invalid or has the wrong shape.
  """
  base = defaults or default_enablement()
  if text is None:
    return base

  try:
    data = yaml.safe_load(text)
  except yaml.YAMLError as e:
    raise ConfigResolutionFailure(f"Invalid YAML in repository config: {e}") from e

  if data is None:
    return base
  if not isinstance(data, dict):
    raise ConfigResolutionFailure("Repository config must be a mapping of checker names")

  checkers: dict[str, CheckerConfig] = dict(base.checkers)
  for raw_name, value in data.items():
    name = normalize_checker_name(raw_name)
    current = checkers.get(name, CheckerConfig())
    checkers[name] = _merge_entry(name, current, value)

  return EnablementConfig(checkers=checkers)


def _merge_entry(name: str, current: CheckerConfig, value: Any) -> CheckerConfig:
  if isinstance(value, bool):
    overrides: dict[str, Any] = {"enabled": value}
  elif isinstance(value, dict):
    overrides = {str(k): v for k, v in value.items()}
  elif value is None:
    overrides = {}
  else:
    raise ConfigResolutionFailure(
      f"Config for '{name}' must be a mapping or a boolean, got {type(value).__name__}"
    )

  merged = current.model_dump()
  merged.update(overrides)
  try:
    return CheckerConfig(**merged)
  except ValidationError as e:
    raise ConfigResolutionFailure(f"Invalid config for '{name}': {e}") from e


class RepositoryConfigStore:
  """Reads the enablement config file from the submission's head revision."""

  def __init__(
    self,
    content_store: "ContentStore",
    path: str = REPO_CONFIG_FILE,
    defaults: EnablementConfig | None = None,
  ):
    self._content_store = content_store
    self._path = path
    self._defaults = defaults

  def enablement_for(self, submission: "Submission") -> EnablementConfig:
    try:
      text: str | None = self._content_store.fetch(self._path)
    except ContentNotFound:
      logger.debug("No %s in repository, using defaults", self._path)
      text = None
    except ContentFetchFailure as e:
      raise ConfigResolutionFailure(f"Could not read {self._path}: {e}") from e

    return parse_enablement(text, self._defaults)


class StaticConfigStore:
  """ConfigStore that always returns the same snapshot."""

  def __init__(self, config: EnablementConfig | None = None):
    self._config = config or default_enablement()

  def enablement_for(self, submission: "Submission") -> EnablementConfig:
    return self._config

"""Configuration management."""

from stylehound.config.loader import (
  RepositoryConfigStore,
  StaticConfigStore,
  load_config,
  parse_enablement,
)
from stylehound.config.settings import (
  CheckerConfig,
  EnablementConfig,
  Settings,
  default_enablement,
)

__all__ = [
  "CheckerConfig",
  "EnablementConfig",
  "RepositoryConfigStore",
  "Settings",
  "StaticConfigStore",
  "default_enablement",
  "load_config",
  "parse_enablement",
]

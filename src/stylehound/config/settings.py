"""Application settings and per-repository checker enablement."""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


REPO_CONFIG_FILE = ".stylehound.yml"


class Settings(BaseModel):
  """Application configuration."""

  base: str = "main"
  max_workers: int = Field(default=4, ge=1)
  file_timeout: float = Field(default=60.0, gt=0)
  fetch_timeout: float = Field(default=10.0, gt=0)
  include_context_lines: bool = True
  repo_config: str = REPO_CONFIG_FILE
  github_api_url: str = "https://api.github.com"
  format: str = "terminal"


class CheckerConfig(BaseModel):
  """Enablement and options for one checker.

  Unknown keys are kept as checker options. Options shared by the
  built-in checkers are declared here so bad values fail validation.
  """

  model_config = ConfigDict(frozen=True, extra="allow")

  enabled: bool = True
  command: str | None = None
  timeout: float = Field(default=30.0, gt=0)
  max_line_length: int | None = Field(default=None, gt=0)

  @property
  def options(self) -> dict[str, Any]:
    options = dict(self.model_extra or {})
    if self.max_line_length is not None:
      options["max_line_length"] = self.max_line_length
    return options

  def option(self, key: str, default: Any = None) -> Any:
    return self.options.get(key, default)


class EnablementConfig(BaseModel):
  """Immutable snapshot of which checkers run for one submission."""

  model_config = ConfigDict(frozen=True)

  checkers: Mapping[str, CheckerConfig] = Field(default_factory=dict)

  def for_checker(self, name: str) -> CheckerConfig | None:
    return self.checkers.get(name)

  def is_enabled(self, name: str) -> bool:
    config = self.for_checker(name)
    return config is not None and config.enabled


DEFAULT_CHECKERS = ("ruby", "coffeescript", "javascript")


def default_enablement() -> EnablementConfig:
  """Enablement used when a repository has no config file."""
  return EnablementConfig(
    checkers={name: CheckerConfig() for name in DEFAULT_CHECKERS},
  )

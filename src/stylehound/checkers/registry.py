"""Checker registration and filename dispatch."""

import re
import shlex
from dataclasses import dataclass
from typing import Callable, Sequence

from stylehound.checkers.base import UNSUPPORTED, Checker
from stylehound.checkers.command import CommandChecker
from stylehound.config.settings import CheckerConfig, EnablementConfig

CheckerFactory = Callable[[CheckerConfig], Checker]

# Suffixes are dot-joined runs of plain alphanumeric extensions
_SUFFIX = re.compile(r"^[a-z0-9]+(?:\.[a-z0-9]+)*$")


@dataclass(frozen=True)
class _Registration:
  name: str
  factory: CheckerFactory


_checkers: dict[str, CheckerFactory] = {}
_suffixes: dict[str, _Registration] = {}


def register_checker(
  name: str,
  suffixes: Sequence[str],
  factory: CheckerFactory,
) -> None:
  """Register a checker factory for a set of filename suffixes.

  Args:
    name: Checker name, matching its key in the enablement config.
    suffixes: Lower-case suffixes without a leading dot. Compound
              suffixes such as 'coffee.erb' are allowed.
    factory: Callable that builds the checker from its config entry.
  """
  _checkers[name] = factory
  registration = _Registration(name=name, factory=factory)
  for suffix in suffixes:
    _suffixes[suffix.lower().lstrip(".")] = registration


def list_checkers() -> list[str]:
  """List all registered checker names."""
  return list(_checkers.keys())


def checker_for_suffix(suffix: str) -> str | None:
  """Name of the checker registered for a suffix, if any."""
  registration = _suffixes.get(suffix)
  return registration.name if registration else None


def candidate_suffixes(filename: str) -> list[str]:
  """Suffixes to try for a filename, most specific first.

  Compound suffixes come first, longest to shortest, followed by the
  inner extensions moving inward. For 'app/test.coffee.erb' this is
  ['coffee.erb', 'erb', 'coffee'], so a template wrapping CoffeeScript
  is checked as CoffeeScript whenever nothing claims the full suffix.
  """
  basename = filename.replace("\\", "/").rsplit("/", 1)[-1].lower()
  parts = basename.split(".")
  if len(parts) < 2:
    return []

  extensions = parts[1:]
  candidates = [".".join(extensions[i:]) for i in range(len(extensions))]
  candidates.extend(reversed(extensions[:-1]))

  seen: set[str] = set()
  result: list[str] = []
  for candidate in candidates:
    if candidate not in seen and _SUFFIX.match(candidate):
      seen.add(candidate)
      result.append(candidate)
  return result


def resolve_checker(filename: str, config: EnablementConfig) -> Checker:
  """Pick the checker for a file.

  The first candidate suffix with both a registered checker and an
  enabled config entry wins. Anything else gets the Unsupported
  checker. This never raises and performs no I/O.

  Args:
    filename: Path of the file as it appears in the submission.
    config: Enablement snapshot for the submission.

  Returns:
    A Checker instance; UNSUPPORTED if nothing applies.
  """
  for suffix in candidate_suffixes(filename):
    registration = _suffixes.get(suffix)
    if registration is None:
      continue

    checker_config = config.for_checker(registration.name)
    if checker_config is None or not checker_config.enabled:
      continue

    return _build(registration, checker_config)

  return UNSUPPORTED


def _build(registration: _Registration, checker_config: CheckerConfig) -> Checker:
  if checker_config.command:
    return CommandChecker(
      name=registration.name,
      command=shlex.split(checker_config.command),
      timeout=checker_config.timeout,
    )
  return registration.factory(checker_config)


class CheckerRegistry:
  """Registry for lazy checker loading."""

  @staticmethod
  def load_all() -> None:
    """Load all checker modules to trigger registration.

    Call this before resolve_checker() to ensure the built-in
    checkers are registered.
    """
    # Each module registers its checkers at import time
    from stylehound.checkers import (
      coffeescript,  # noqa: F401
      javascript,  # noqa: F401
      ruby,  # noqa: F401
    )

"""File-type checkers and their registry."""

from stylehound.checkers.base import UNSUPPORTED, Checker, LineChecker, RawFinding
from stylehound.checkers.command import CommandChecker
from stylehound.checkers.registry import (
  CheckerRegistry,
  candidate_suffixes,
  list_checkers,
  register_checker,
  resolve_checker,
)

__all__ = [
  "Checker",
  "CheckerRegistry",
  "CommandChecker",
  "LineChecker",
  "RawFinding",
  "UNSUPPORTED",
  "candidate_suffixes",
  "list_checkers",
  "register_checker",
  "resolve_checker",
]

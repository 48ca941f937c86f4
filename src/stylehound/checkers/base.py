"""Checker abstractions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence


@dataclass(frozen=True)
class RawFinding:
  """A single finding reported by a checker.

  This is an intermediate representation that gets converted to a
  Violation by the StyleChecker, and only when its line is part of
  the file's diff. Keeping it separate allows checkers to remain
  unaware of diffs entirely.
  """

  line: int
  message: str


class Checker(Protocol):
  """Protocol for file-type checkers.

  Each checker handles one language. Checkers receive the full
  current file content, never a diff, because many issues can only
  be seen with the whole file in view.

  Example:
    class MyChecker:
      @property
      def name(self) -> str:
        return "fortran"

      def run(self, content: str) -> Sequence[RawFinding]:
        # Analyze content, return findings
        return []
  """

  @property
  def name(self) -> str:
    """Checker name, as used in the enablement config (e.g., 'ruby')."""
    ...

  def run(self, content: str) -> Sequence[RawFinding]:
    """Analyze content.

    Args:
      content: Full file content at the head revision.

    Returns:
      Findings with 1-based line numbers, in the order detected.

    Raises:
      CheckerFailure: If the content could not be analyzed at all.
    """
    ...


class UnsupportedChecker:
  """Checker for files no enabled checker claims. Finds nothing."""

  @property
  def name(self) -> str:
    return "unsupported"

  def run(self, content: str) -> Sequence[RawFinding]:
    return ()


UNSUPPORTED = UnsupportedChecker()


class LineChecker(ABC):
  """Base for checkers whose rules look at one line at a time."""

  @property
  @abstractmethod
  def name(self) -> str:
    ...

  @abstractmethod
  def check_line(self, line: str) -> Iterable[str]:
    """Yield a message for every rule the line breaks."""
    ...

  def run(self, content: str) -> Sequence[RawFinding]:
    findings: list[RawFinding] = []

    for i, line in enumerate(content.split("\n"), start=1):
      for message in self.check_line(line.rstrip("\r")):
        findings.append(RawFinding(line=i, message=message))

    return findings

"""Checker that delegates to an external lint command."""

import logging
import re
import subprocess
from typing import Sequence

from stylehound.checkers.base import RawFinding
from stylehound.errors import CheckerFailure

logger = logging.getLogger(__name__)

# path:line[:column]: message, as printed by most linters in emacs/gcc style
_OUTPUT_LINE = re.compile(r"^[^:\n]*:(\d+)(?::\d+)?:\s*(.+?)\s*$")


class CommandChecker:
  """Runs a lint command with file content on stdin.

  The command's stdout is scanned for 'path:line:col: message' lines.
  Most linters exit non-zero when they find something, so the exit
  code alone is not treated as a failure.
  """

  DEFAULT_TIMEOUT = 30.0

  def __init__(
    self,
    name: str,
    command: Sequence[str],
    timeout: float = DEFAULT_TIMEOUT,
  ):
    if not command:
      raise ValueError("command must not be empty")
    self._name = name
    self._command = list(command)
    self._timeout = timeout

  @property
  def name(self) -> str:
    return self._name

  @property
  def command(self) -> list[str]:
    return list(self._command)

  def run(self, content: str) -> Sequence[RawFinding]:
    """Run the command and parse its findings."""
    tool = self._command[0]
    try:
      result = subprocess.run(
        self._command,
        input=content,
        capture_output=True,
        text=True,
        timeout=self._timeout,
      )
    except FileNotFoundError as e:
      raise CheckerFailure(f"{tool} is not installed") from e
    except subprocess.TimeoutExpired as e:
      raise CheckerFailure(f"{tool} timed out after {self._timeout:.1f}s") from e

    findings = parse_command_output(result.stdout)

    if result.returncode != 0 and not findings and result.stderr.strip():
      stderr = result.stderr.strip().split("\n")[-1]
      raise CheckerFailure(f"{tool} exited with {result.returncode}: {stderr}")

    logger.debug("%s reported %d finding(s)", tool, len(findings))
    return findings


def parse_command_output(output: str) -> list[RawFinding]:
  """Extract findings from 'path:line[:col]: message' output lines."""
  findings: list[RawFinding] = []
  for line in output.split("\n"):
    match = _OUTPUT_LINE.match(line)
    if match:
      findings.append(RawFinding(line=int(match.group(1)), message=match.group(2)))
  return findings

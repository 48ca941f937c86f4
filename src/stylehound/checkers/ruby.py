"""Ruby style checks."""

import re
from typing import Iterator

from stylehound.checkers.base import LineChecker
from stylehound.checkers.registry import register_checker
from stylehound.config.settings import CheckerConfig


class RubyChecker(LineChecker):
  """Line-level Ruby style rules.

  Covers:
  - trailing whitespace
  - spaces just inside parentheses
  - single-quoted strings that need no escaping protection
  - long lines (default 80 characters)
  - hard tabs
  """

  DEFAULT_MAX_LINE_LENGTH = 80

  TRAILING_WHITESPACE = re.compile(r"[ \t]+$")
  SPACE_INSIDE_PARENS = re.compile(r"\(\s+\S|\S\s+\)")
  # A single-quoted literal containing no quote, backslash or interpolation
  SINGLE_QUOTED = re.compile(r"(?<![\w?])'[^'\"\\#]*'")
  COMMENT = re.compile(r"^\s*#")

  def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
    self._max_line_length = max_line_length

  @property
  def name(self) -> str:
    return "ruby"

  def check_line(self, line: str) -> Iterator[str]:
    if self.TRAILING_WHITESPACE.search(line):
      yield "Trailing whitespace detected."

    if len(line) > self._max_line_length:
      yield f"Line is too long. [{len(line)}/{self._max_line_length}]"

    if "\t" in line:
      yield "Tab detected."

    if self.COMMENT.match(line):
      return

    code = _strip_double_quoted(line)
    if self.SPACE_INSIDE_PARENS.search(code):
      yield "Space inside parentheses detected."

    if self.SINGLE_QUOTED.search(code):
      yield (
        "Prefer double-quoted strings unless you need single quotes "
        "to avoid extra backslashes for escaping."
      )


def _strip_double_quoted(line: str) -> str:
  """Blank out double-quoted literals so their text is not linted."""
  return re.sub(r'"(?:[^"\\]|\\.)*"', '""', line)


def _create_ruby(config: CheckerConfig) -> RubyChecker:
  return RubyChecker(
    max_line_length=int(config.option("max_line_length", RubyChecker.DEFAULT_MAX_LINE_LENGTH)),
  )


register_checker("ruby", ["rb", "rake", "gemspec", "ru"], _create_ruby)

"""JavaScript style checks."""

import re
from typing import Iterator

from stylehound.checkers.base import LineChecker
from stylehound.checkers.registry import register_checker
from stylehound.config.settings import CheckerConfig


class JavaScriptChecker(LineChecker):
  """Line-level JavaScript rules: whitespace, loose equality, debugger."""

  TRAILING_WHITESPACE = re.compile(r"[ \t]+$")
  LOOSE_EQUALITY = re.compile(r"(?<![=!<>])(==|!=)(?!=)")
  DEBUGGER = re.compile(r"^\s*debugger\s*;?\s*$")
  LINE_COMMENT = re.compile(r"^\s*//")
  STRING = re.compile(r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'")

  @property
  def name(self) -> str:
    return "javascript"

  def check_line(self, line: str) -> Iterator[str]:
    if self.TRAILING_WHITESPACE.search(line):
      yield "Trailing whitespace."

    if self.LINE_COMMENT.match(line):
      return

    code = self.STRING.sub("''", line)
    for match in self.LOOSE_EQUALITY.finditer(code):
      operator = match.group(1)
      yield f"Expected '{operator}=' and instead saw '{operator}'."

    if self.DEBUGGER.match(code):
      yield "Forgotten 'debugger' statement?"


def _create_javascript(config: CheckerConfig) -> JavaScriptChecker:
  return JavaScriptChecker()


register_checker("javascript", ["js", "js.erb", "es6"], _create_javascript)

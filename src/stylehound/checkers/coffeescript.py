"""CoffeeScript style checks."""

import re
from typing import Iterator

from stylehound.checkers.base import LineChecker
from stylehound.checkers.registry import register_checker
from stylehound.config.settings import CheckerConfig


class CoffeeScriptChecker(LineChecker):
  """Line-level CoffeeScript style rules.

  Class names must be UpperCamelCased; leading underscores are
  allowed and namespaced names are judged by their last segment.
  """

  DEFAULT_MAX_LINE_LENGTH = 80

  CLASS_DECLARATION = re.compile(r"^\s*class\s+([\w$.@]+)")
  CAMEL_CASE_CLASS = re.compile(r"^_*[A-Z][a-zA-Z0-9]*$")
  TRAILING_WHITESPACE = re.compile(r"[ \t]+$")
  TAB_INDENTATION = re.compile(r"^ *\t")
  THROWN_STRING = re.compile(r"\bthrow\s+[\"']")

  def __init__(self, max_line_length: int = DEFAULT_MAX_LINE_LENGTH):
    self._max_line_length = max_line_length

  @property
  def name(self) -> str:
    return "coffeescript"

  def check_line(self, line: str) -> Iterator[str]:
    declaration = self.CLASS_DECLARATION.match(line)
    if declaration:
      class_name = declaration.group(1).split(".")[-1].lstrip("@")
      if not self.CAMEL_CASE_CLASS.match(class_name):
        yield "Class name should be UpperCamelCased"

    if self.TRAILING_WHITESPACE.search(line):
      yield "Line ends with trailing whitespace"

    if len(line) > self._max_line_length:
      yield "Line exceeds maximum allowed length"

    if self.TAB_INDENTATION.match(line):
      yield "Line contains tab indentation"

    if self.THROWN_STRING.search(line):
      yield "Throwing strings is forbidden"


def _create_coffeescript(config: CheckerConfig) -> CoffeeScriptChecker:
  return CoffeeScriptChecker(
    max_line_length=int(
      config.option("max_line_length", CoffeeScriptChecker.DEFAULT_MAX_LINE_LENGTH)
    ),
  )


register_checker(
  "coffeescript",
  ["coffee", "coffee.erb", "coffee.js", "coffee.js.erb", "js.coffee"],
  _create_coffeescript,
)

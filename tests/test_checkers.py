"""Tests for the built-in checkers."""

import subprocess
from unittest.mock import patch

import pytest
from stylehound.checkers import UNSUPPORTED, CommandChecker, RawFinding
from stylehound.checkers.coffeescript import CoffeeScriptChecker
from stylehound.checkers.command import parse_command_output
from stylehound.checkers.javascript import JavaScriptChecker
from stylehound.checkers.ruby import RubyChecker
from stylehound.errors import CheckerFailure

DOUBLE_QUOTES_MESSAGE = (
  "Prefer double-quoted strings unless you need single quotes "
  "to avoid extra backslashes for escaping."
)


class TestUnsupportedChecker:
  def test_finds_nothing(self) -> None:
    assert UNSUPPORTED.run('PRINT *, "Hello World!"\nEND') == ()

  def test_name(self) -> None:
    assert UNSUPPORTED.name == "unsupported"


class TestRubyChecker:
  @pytest.fixture
  def checker(self) -> RubyChecker:
    return RubyChecker()

  def messages(self, checker: RubyChecker, content: str) -> list[str]:
    return [f.message for f in checker.run(content)]

  def test_trailing_whitespace(self, checker: RubyChecker) -> None:
    findings = checker.run("def bad(a ); a; end  \n")

    assert RawFinding(line=1, message="Trailing whitespace detected.") in findings

  def test_space_inside_parentheses(self, checker: RubyChecker) -> None:
    assert "Space inside parentheses detected." in self.messages(checker, "def bad(a ); a; end")

  def test_clean_code(self, checker: RubyChecker) -> None:
    assert checker.run("def good; end\n") == []
    assert checker.run("puts 123\n") == []

  def test_single_quoted_string(self, checker: RubyChecker) -> None:
    assert self.messages(checker, "'wrong quotes'") == [DOUBLE_QUOTES_MESSAGE]

  def test_single_quotes_needed_for_escaping(self, checker: RubyChecker) -> None:
    assert checker.run("puts 'say \"hi\"'") == []

  def test_double_quoted_string_with_apostrophe(self, checker: RubyChecker) -> None:
    assert checker.run('puts "it\'s fine"') == []

  def test_comments_are_not_linted_for_code_rules(self, checker: RubyChecker) -> None:
    assert checker.run("# it's a 'comment' ( here )") == []

  def test_long_line(self, checker: RubyChecker) -> None:
    assert self.messages(checker, "x" * 81) == ["Line is too long. [81/80]"]

  def test_custom_line_length(self) -> None:
    checker = RubyChecker(max_line_length=120)

    assert checker.run("x" * 100) == []

  def test_tab(self, checker: RubyChecker) -> None:
    assert self.messages(checker, "\tputs 1") == ["Tab detected."]

  def test_line_numbers_are_one_based(self, checker: RubyChecker) -> None:
    findings = checker.run("puts 1\nputs 2 \nputs 3")

    assert [f.line for f in findings] == [2]

  def test_windows_line_endings(self, checker: RubyChecker) -> None:
    assert checker.run("puts 1\r\nputs 2\r\n") == []


class TestCoffeeScriptChecker:
  @pytest.fixture
  def checker(self) -> CoffeeScriptChecker:
    return CoffeeScriptChecker()

  def messages(self, checker: CoffeeScriptChecker, content: str) -> list[str]:
    return [f.message for f in checker.run(content)]

  def test_class_name_not_camel_cased(self, checker: CoffeeScriptChecker) -> None:
    assert self.messages(checker, "class strange_ClassNAME\n") == [
      "Class name should be UpperCamelCased",
    ]

  def test_camel_cased_class_names(self, checker: CoffeeScriptChecker) -> None:
    assert checker.run("class UserView extends Backbone.View") == []
    assert checker.run("class App.Models.User") == []
    assert checker.run("class @Widget") == []
    assert checker.run("class _Private") == []

  def test_namespaced_lower_case_class(self, checker: CoffeeScriptChecker) -> None:
    assert self.messages(checker, "class App.user") == ["Class name should be UpperCamelCased"]

  def test_clean_code(self, checker: CoffeeScriptChecker) -> None:
    assert checker.run("alert('Hello World')\n") == []

  def test_trailing_whitespace(self, checker: CoffeeScriptChecker) -> None:
    assert self.messages(checker, "x = 1 ") == ["Line ends with trailing whitespace"]

  def test_long_line(self, checker: CoffeeScriptChecker) -> None:
    assert self.messages(checker, "x" * 81) == ["Line exceeds maximum allowed length"]

  def test_tab_indentation(self, checker: CoffeeScriptChecker) -> None:
    assert self.messages(checker, "\tx = 1") == ["Line contains tab indentation"]

  def test_throwing_strings(self, checker: CoffeeScriptChecker) -> None:
    assert self.messages(checker, 'throw "oops"') == ["Throwing strings is forbidden"]
    assert checker.run("throw new Error('oops')") == []


class TestJavaScriptChecker:
  @pytest.fixture
  def checker(self) -> JavaScriptChecker:
    return JavaScriptChecker()

  def messages(self, checker: JavaScriptChecker, content: str) -> list[str]:
    return [f.message for f in checker.run(content)]

  def test_loose_equality(self, checker: JavaScriptChecker) -> None:
    assert self.messages(checker, "if (a == b) {}") == ["Expected '===' and instead saw '=='."]
    assert self.messages(checker, "if (a != b) {}") == ["Expected '!==' and instead saw '!='."]

  def test_strict_equality(self, checker: JavaScriptChecker) -> None:
    assert checker.run("if (a === b && c !== d && e <= f) {}") == []

  def test_operators_inside_strings(self, checker: JavaScriptChecker) -> None:
    assert checker.run("var s = 'a == b';") == []

  def test_debugger(self, checker: JavaScriptChecker) -> None:
    assert self.messages(checker, "  debugger;") == ["Forgotten 'debugger' statement?"]

  def test_trailing_whitespace(self, checker: JavaScriptChecker) -> None:
    assert self.messages(checker, "var a = 1; ") == ["Trailing whitespace."]

  def test_comment_lines(self, checker: JavaScriptChecker) -> None:
    assert checker.run("// if (a == b) debugger") == []


class TestParseCommandOutput:
  def test_emacs_format(self) -> None:
    output = "x.rb:3:5: C: Trailing whitespace detected.\nx.rb:7: W: Useless assignment.\n"

    assert parse_command_output(output) == [
      RawFinding(line=3, message="C: Trailing whitespace detected."),
      RawFinding(line=7, message="W: Useless assignment."),
    ]

  def test_ignores_other_lines(self) -> None:
    assert parse_command_output("Inspecting 1 file\n\n1 file inspected\n") == []


class TestCommandChecker:
  def _completed(self, returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["lint"], returncode, stdout=stdout, stderr=stderr)

  def test_rejects_empty_command(self) -> None:
    with pytest.raises(ValueError):
      CommandChecker("ruby", [])

  @patch("stylehound.checkers.command.subprocess.run")
  def test_passes_content_on_stdin(self, mock_run) -> None:
    mock_run.return_value = self._completed(1, stdout="-:2:1: bad\n")
    checker = CommandChecker("ruby", ["lint", "-"], timeout=5.0)

    findings = checker.run("a\nb\n")

    assert findings == [RawFinding(line=2, message="bad")]
    args, kwargs = mock_run.call_args
    assert args[0] == ["lint", "-"]
    assert kwargs["input"] == "a\nb\n"
    assert kwargs["timeout"] == 5.0

  @patch("stylehound.checkers.command.subprocess.run")
  def test_missing_tool(self, mock_run) -> None:
    mock_run.side_effect = FileNotFoundError("lint")

    with pytest.raises(CheckerFailure, match="not installed"):
      CommandChecker("ruby", ["lint"]).run("x")

  @patch("stylehound.checkers.command.subprocess.run")
  def test_timeout(self, mock_run) -> None:
    mock_run.side_effect = subprocess.TimeoutExpired(["lint"], 1.0)

    with pytest.raises(CheckerFailure, match="timed out"):
      CommandChecker("ruby", ["lint"], timeout=1.0).run("x")

  @patch("stylehound.checkers.command.subprocess.run")
  def test_crash_without_findings(self, mock_run) -> None:
    mock_run.return_value = self._completed(2, stderr="syntax error, unexpected end\n")

    with pytest.raises(CheckerFailure, match="syntax error"):
      CommandChecker("ruby", ["lint"]).run("def")

  @patch("stylehound.checkers.command.subprocess.run")
  def test_clean_exit_without_findings(self, mock_run) -> None:
    mock_run.return_value = self._completed(0)

    assert CommandChecker("ruby", ["lint"]).run("x") == []

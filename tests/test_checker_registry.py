"""Tests for checker registration and filename dispatch."""

from typing import Sequence

import pytest
from stylehound.checkers import UNSUPPORTED, CommandChecker, RawFinding
from stylehound.checkers.coffeescript import CoffeeScriptChecker
from stylehound.checkers.javascript import JavaScriptChecker
from stylehound.checkers.registry import (
  candidate_suffixes,
  checker_for_suffix,
  list_checkers,
  register_checker,
  resolve_checker,
)
from stylehound.checkers.ruby import RubyChecker
from stylehound.config import CheckerConfig, EnablementConfig, default_enablement, parse_enablement


class MockChecker:
  """Mock checker for testing."""

  def __init__(self, findings: list[RawFinding] | None = None):
    self._findings = findings or []

  @property
  def name(self) -> str:
    return "mock"

  def run(self, content: str) -> Sequence[RawFinding]:
    return self._findings


class TestCandidateSuffixes:
  def test_single_extension(self) -> None:
    assert candidate_suffixes("app/models/user.rb") == ["rb"]

  def test_compound_suffix_peeling_order(self) -> None:
    assert candidate_suffixes("test.coffee.erb") == ["coffee.erb", "erb", "coffee"]

  def test_three_extensions(self) -> None:
    assert candidate_suffixes("a.coffee.js.erb") == [
      "coffee.js.erb",
      "js.erb",
      "erb",
      "js",
      "coffee",
    ]

  def test_lower_cases_filename(self) -> None:
    assert candidate_suffixes("Test.Coffee.ERB") == ["coffee.erb", "erb", "coffee"]

  def test_no_extension(self) -> None:
    assert candidate_suffixes("Makefile") == []

  def test_bracketed_placeholder(self) -> None:
    assert candidate_suffixes("[:facebook]") == []

  def test_directories_with_dots_are_ignored(self) -> None:
    assert candidate_suffixes("vendor.d/lib/tool") == []

  def test_garbage_suffixes_are_dropped(self) -> None:
    assert candidate_suffixes("weird.[x]") == []
    assert candidate_suffixes("trailing.") == []


class TestResolveChecker:
  @pytest.fixture
  def config(self) -> EnablementConfig:
    return default_enablement()

  def test_ruby(self, config: EnablementConfig) -> None:
    assert isinstance(resolve_checker("app/user.rb", config), RubyChecker)

  def test_rakefile_extension(self, config: EnablementConfig) -> None:
    assert isinstance(resolve_checker("lib/tasks/db.rake", config), RubyChecker)

  def test_coffee_erb_resolves_to_coffeescript(self, config: EnablementConfig) -> None:
    assert isinstance(resolve_checker("test.coffee.erb", config), CoffeeScriptChecker)

  def test_resolution_is_case_insensitive(self, config: EnablementConfig) -> None:
    assert isinstance(resolve_checker("test.coffee.ERB", config), CoffeeScriptChecker)
    assert isinstance(resolve_checker("USER.RB", config), RubyChecker)

  def test_coffee_js_is_not_javascript(self, config: EnablementConfig) -> None:
    assert isinstance(resolve_checker("app.coffee.js", config), CoffeeScriptChecker)

  def test_js_erb_is_javascript(self, config: EnablementConfig) -> None:
    assert isinstance(resolve_checker("app.js.erb", config), JavaScriptChecker)

  def test_unknown_extension_is_unsupported(self, config: EnablementConfig) -> None:
    assert resolve_checker("fortran.f", config) is UNSUPPORTED

  def test_bare_erb_is_unsupported(self, config: EnablementConfig) -> None:
    assert resolve_checker("index.html.erb", config) is UNSUPPORTED

  def test_placeholder_name_is_unsupported(self, config: EnablementConfig) -> None:
    assert resolve_checker("[:facebook]", config) is UNSUPPORTED

  def test_disabled_checker_is_unsupported(self) -> None:
    config = parse_enablement("ruby:\n  enabled: false\n")

    assert resolve_checker("user.rb", config) is UNSUPPORTED

  def test_checker_missing_from_config_is_unsupported(self) -> None:
    config = EnablementConfig(checkers={"ruby": CheckerConfig()})

    assert resolve_checker("app.coffee", config) is UNSUPPORTED

  def test_disabled_coffeescript_does_not_fall_back(self) -> None:
    config = parse_enablement("coffeescript: false\n")

    assert resolve_checker("test.coffee.erb", config) is UNSUPPORTED

  def test_options_reach_the_checker(self) -> None:
    config = parse_enablement("ruby:\n  max_line_length: 3\n")
    checker = resolve_checker("user.rb", config)

    assert [f.message for f in checker.run("1234")] == ["Line is too long. [4/3]"]

  def test_command_option_builds_command_checker(self) -> None:
    config = parse_enablement("ruby:\n  command: rubocop --stdin x.rb\n  timeout: 5\n")
    checker = resolve_checker("user.rb", config)

    assert isinstance(checker, CommandChecker)
    assert checker.name == "ruby"
    assert checker.command == ["rubocop", "--stdin", "x.rb"]

  def test_is_deterministic(self, config: EnablementConfig) -> None:
    first = resolve_checker("a.coffee.erb", config)
    second = resolve_checker("a.coffee.erb", config)

    assert type(first) is type(second)


class TestRegistration:
  def test_builtins_registered(self) -> None:
    assert {"ruby", "coffeescript", "javascript"} <= set(list_checkers())

  def test_suffix_lookup(self) -> None:
    assert checker_for_suffix("coffee.erb") == "coffeescript"
    assert checker_for_suffix("erb") is None

  def test_register_new_checker(self) -> None:
    register_checker("mocklang", [".MOCK"], lambda config: MockChecker())
    config = EnablementConfig(checkers={"mocklang": CheckerConfig()})

    checker = resolve_checker("thing.mock", config)

    assert checker.name == "mock"
    assert checker.run("x") == []

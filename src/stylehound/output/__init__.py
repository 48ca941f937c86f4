"""Output formatting."""

from stylehound.output.formatter import (
  GitHubFormatter,
  JsonFormatter,
  MarkdownFormatter,
  OutputFormatter,
  TerminalFormatter,
  get_formatter,
  summarize,
)

__all__ = [
  "GitHubFormatter",
  "JsonFormatter",
  "MarkdownFormatter",
  "OutputFormatter",
  "TerminalFormatter",
  "get_formatter",
  "summarize",
]

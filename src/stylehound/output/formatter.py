"""Rendering of review summaries for people and tools."""

import json
from abc import ABC, abstractmethod

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stylehound.models import FileStatus, ReviewSummary


def summarize(summary: ReviewSummary) -> str:
  """One-line human summary of a review pass."""
  if not summary.outcomes:
    return "No changes to review."

  violations = len(summary.violations)
  files = len(summary.file_reviews)
  if violations:
    text = (
      f"Found {violations} violation{'s' if violations != 1 else ''} "
      f"in {files} file{'s' if files != 1 else ''}."
    )
  else:
    text = "No violations found."

  failed = len(summary.with_status(FileStatus.FAILED))
  unanalyzable = len(summary.with_status(FileStatus.UNANALYZABLE))
  if failed or unanalyzable:
    text += f" {failed + unanalyzable} file(s) could not be analyzed."
  return text


class OutputFormatter(ABC):
  """Turns a ReviewSummary into text."""

  @abstractmethod
  def format(self, summary: ReviewSummary) -> str:
    """Render the summary. An empty string means nothing left to print."""
    ...


class TerminalFormatter(OutputFormatter):
  """Prints a panel and a violations table straight to the console."""

  def __init__(self, console: Console | None = None):
    self.console = console or Console()

  def format(self, summary: ReviewSummary) -> str:
    self.console.print()
    self.console.print(Panel(
      summarize(summary),
      title="[bold]Style Review[/bold]",
      border_style="blue",
    ))
    self._print_violations(summary)
    self._print_skipped(summary)
    return ""

  def _print_violations(self, summary: ReviewSummary) -> None:
    if not summary.violations:
      return

    table = Table(show_header=True, header_style="bold")
    table.add_column("File", min_width=20)
    table.add_column("Line", width=6, justify="right")
    table.add_column("Position", width=8, justify="right")
    table.add_column("Message", min_width=40)

    for violation in summary.violations:
      table.add_row(
        violation.filename,
        str(violation.line),
        str(violation.position),
        violation.message,
      )

    self.console.print()
    self.console.print(table)

  def _print_skipped(self, summary: ReviewSummary) -> None:
    for outcome in summary.outcomes:
      if outcome.status in (FileStatus.FAILED, FileStatus.UNANALYZABLE):
        self.console.print(
          f"[yellow]Not analyzed:[/yellow] {outcome.filename} [dim]({outcome.error})[/dim]"
        )


class JsonFormatter(OutputFormatter):
  """One JSON document with every file outcome."""

  def format(self, summary: ReviewSummary) -> str:
    data = {
      "summary": summarize(summary),
      "files": [
        {
          "filename": o.filename,
          "status": o.status.value,
          "error": o.error,
          "violations": [
            {
              "line": v.line,
              "position": v.position,
              "message": v.message,
              "revision_id": v.revision_id,
            }
            for v in (o.review.violations if o.review else ())
          ],
        }
        for o in summary.outcomes
      ],
    }
    return json.dumps(data, indent=2)


class MarkdownFormatter(OutputFormatter):
  """Markdown report grouped by file, suitable for a PR comment."""

  def format(self, summary: ReviewSummary) -> str:
    lines = [
      "# Style Review",
      "",
      summarize(summary),
      "",
    ]

    for review in summary.file_reviews:
      lines.extend([f"## {review.filename}", ""])
      for violation in review.violations:
        lines.append(f"- Line {violation.line}: {violation.message}")
      lines.append("")

    return "\n".join(lines)


class GitHubFormatter(OutputFormatter):
  """`::warning` workflow commands, one per violation."""

  def format(self, summary: ReviewSummary) -> str:
    lines = []
    for violation in summary.violations:
      message = violation.message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
      lines.append(f"::warning file={violation.filename},line={violation.line}::{message}")
    return "\n".join(lines)


FORMATTERS: dict[str, type[OutputFormatter]] = {
  "terminal": TerminalFormatter,
  "json": JsonFormatter,
  "markdown": MarkdownFormatter,
  "github": GitHubFormatter,
}


def get_formatter(format_type: str) -> OutputFormatter:
  try:
    return FORMATTERS[format_type]()
  except KeyError:
    raise ValueError(
      f"Unknown format: {format_type} (choose from {', '.join(FORMATTERS)})"
    ) from None

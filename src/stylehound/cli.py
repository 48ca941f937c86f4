"""Command line entry point."""

import traceback
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from stylehound import __version__
from stylehound.config import load_config
from stylehound.errors import StylehoundError
from stylehound.logs import configure_logging, is_debug
from stylehound.output import get_formatter
from stylehound.review import run_review

app = typer.Typer(
  name="stylehound",
  help="Style checks for the lines your change actually touches",
  no_args_is_help=False,
)

console = Console()


def version_callback(value: bool) -> None:
  if value:
    console.print(f"stylehound {__version__}")
    raise typer.Exit()


def _abort(message: str, trace: str | None = None) -> NoReturn:
  console.print(f"[red]Error:[/red] {escape(message)}")
  if trace:
    console.print("\n[dim]Traceback:[/dim]")
    console.print(trace, markup=False)
  raise typer.Exit(1)


@app.command()
def main(
  branch: str = typer.Option(None, "--branch", "-b", help="Branch to review against base"),
  base: str = typer.Option(None, "--base", help="Base branch for comparison (default: main)"),
  github_repo: str = typer.Option(
    None, "--github-repo", help="Review a GitHub pull request in OWNER/NAME"
  ),
  pull_request: Optional[int] = typer.Option(None, "--pr", help="Pull request number"),
  token: str = typer.Option(
    None, "--token", envvar="GITHUB_TOKEN", help="GitHub token (or GITHUB_TOKEN)"
  ),
  format_type: Optional[str] = typer.Option(
    None, "--format", help="Output format: terminal, json, markdown, github"
  ),
  config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
  workers: Optional[int] = typer.Option(
    None, "--workers", "-w", min=1, help="Files reviewed in parallel"
  ),
  exit_code: bool = typer.Option(
    False, "--exit-code", help="Exit with status 1 when violations are found"
  ),
  verbose: bool = typer.Option(False, "--verbose", help="Log progress to stderr"),
  debug: bool = typer.Option(False, "--debug", "-d", help="Show debug logs and full tracebacks"),
  version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
) -> None:
  """Check changed lines for style violations.

  With no arguments, reviews staged git changes.
  """
  show_traceback = debug or is_debug()
  configure_logging(verbose=verbose, debug=debug)

  if pull_request is not None and not github_repo:
    _abort("--pr requires --github-repo")

  try:
    formatter = get_formatter(format_type or load_config(config).format)
    summary = run_review(
      branch=branch,
      base=base,
      github_repo=github_repo,
      pull_request=pull_request,
      token=token,
      config_path=config,
      max_workers=workers,
    )
    output = formatter.format(summary)
    if output:
      console.print(output, markup=False, highlight=False, soft_wrap=True)

  except StylehoundError as e:
    _abort(str(e))
  except Exception as e:
    _abort(f"{type(e).__name__}: {e}", traceback.format_exc() if show_traceback else None)

  if exit_code and summary.has_violations:
    raise typer.Exit(1)


if __name__ == "__main__":
  app()

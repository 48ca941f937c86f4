"""Logging setup for the command line."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


def is_debug() -> bool:
  return os.environ.get("STYLEHOUND_DEBUG", "").lower() in ("1", "true", "yes")


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
  """Route stylehound's log records to stderr through rich."""
  if debug or is_debug():
    level = logging.DEBUG
  elif verbose:
    level = logging.INFO
  else:
    level = logging.WARNING

  handler = RichHandler(
    console=Console(stderr=True),
    show_path=False,
    rich_tracebacks=True,
  )
  handler.setFormatter(logging.Formatter("%(message)s"))

  logger = logging.getLogger("stylehound")
  logger.handlers[:] = [handler]
  logger.setLevel(level)
  logger.propagate = False

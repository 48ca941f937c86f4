"""Diff extraction, parsing and line location."""

from stylehound.diff.extractor import (
  GitError,
  extract_branch_diff,
  extract_staged_diff,
  parse_diff_output,
)
from stylehound.diff.patch import LineLocator, parse_patch

__all__ = [
  "GitError",
  "LineLocator",
  "extract_branch_diff",
  "extract_staged_diff",
  "parse_diff_output",
  "parse_patch",
]

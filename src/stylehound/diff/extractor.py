"""Submissions built from a local git repository."""

import logging
import re
import subprocess
from pathlib import Path

from stylehound.errors import StylehoundError
from stylehound.models import ChangedFile
from stylehound.sources.base import ChangeSet

logger = logging.getLogger(__name__)


class GitError(StylehoundError):
  """A git invocation exited non-zero."""


class GitTimeout(GitError):
  """Git command did not finish in time."""


_SECTION_PREFIX = "diff --git "
# Both sides of a git header, each either "quoted" or bare a/... and b/...
_GIT_HEADER_PATHS = re.compile(r'^diff --git ("(?:[^"\\]|\\.)*"|a/.*?) ("(?:[^"\\]|\\.)*"|b/.*)$')
_ABSOLUTE_PATH = re.compile(r"(?<![\w.])/(?:[^\s/'\"]+/)+")

# Extended header lines that change a file's status
_STATUS_MARKERS = (
  ("new file mode", "added"),
  ("deleted file mode", "removed"),
  ("rename to ", "renamed"),
)


def _sanitize_error(stderr: str) -> str:
  """Drop directory prefixes of absolute paths from git's stderr."""
  return _ABSOLUTE_PATH.sub("", stderr.strip())


def run_git(*args: str, cwd: Path | None = None, timeout: float | None = None) -> str:
  """Run git with args and return its stdout.

  Raises:
    GitTimeout: If timeout elapses first.
    GitError: If git exits non-zero.
  """
  command = " ".join(args)
  try:
    completed = subprocess.run(
      ["git", *args],
      cwd=cwd,
      timeout=timeout,
      capture_output=True,
      text=True,
      check=True,
    )
  except subprocess.TimeoutExpired as e:
    raise GitTimeout(f"git {command} timed out after {timeout}s") from e
  except subprocess.CalledProcessError as e:
    raise GitError(f"git {command} failed: {_sanitize_error(e.stderr or '')}") from e
  return completed.stdout


def resolve_revision(ref: str, cwd: Path | None = None) -> str:
  """Resolve a ref to a full commit sha."""
  return run_git("rev-parse", "--verify", f"{ref}^{{commit}}", cwd=cwd).strip()


def extract_staged_diff(cwd: Path | None = None) -> ChangeSet:
  """Submission of the changes staged in the index.

  The head revision is None, meaning content comes from the index.
  """
  output = run_git("diff", "--cached", "--no-color", cwd=cwd)
  return ChangeSet(files=parse_diff_output(output), head_revision=None, base_revision="HEAD")


def extract_branch_diff(
  branch: str,
  base: str = "main",
  cwd: Path | None = None,
) -> ChangeSet:
  """Submission of a branch's changes since it forked from base."""
  head = resolve_revision(branch, cwd=cwd)
  output = run_git("diff", "--no-color", f"{base}...{head}", cwd=cwd)
  return ChangeSet(
    files=parse_diff_output(output, revision_id=head),
    head_revision=head,
    base_revision=base,
  )


def parse_diff_output(diff_output: str, revision_id: str | None = None) -> list[ChangedFile]:
  """Split multi-file `git diff` output into one ChangedFile per file.

  Each file's patch keeps its git headers; the patch parser skips them.
  Paths git quoted for unusual characters are decoded.
  """
  sections: list[list[str]] = []
  for line in diff_output.splitlines():
    if line.startswith(_SECTION_PREFIX):
      sections.append([line])
    elif sections:
      sections[-1].append(line)

  files: list[ChangedFile] = []
  for lines in sections:
    filename = _section_filename(lines)
    if filename is None:
      logger.warning("Skipping diff section with unreadable header: %r", lines[0])
      continue
    files.append(ChangedFile(
      filename=filename,
      patch="\n".join(lines),
      revision_id=revision_id,
      status=_section_status(lines),
    ))
  return files


def _extended_headers(lines: list[str]) -> list[str]:
  headers = []
  for line in lines[1:]:
    if line.startswith("@@"):
      break
    headers.append(line)
  return headers


def _section_filename(lines: list[str]) -> str | None:
  """New-side path of a section: `+++`, then `rename to`, then the git header."""
  headers = _extended_headers(lines)
  for line in headers:
    path = line[4:].rstrip("\t")
    if line.startswith("+++ ") and path != "/dev/null":
      return _strip_side(unquote_path(path), "b/")
  for line in headers:
    if line.startswith("rename to "):
      return unquote_path(line[len("rename to "):])

  paths = _GIT_HEADER_PATHS.match(lines[0])
  if paths is None:
    return None
  return _strip_side(unquote_path(paths.group(2)), "b/")


def _strip_side(path: str, prefix: str) -> str:
  return path[len(prefix):] if path.startswith(prefix) else path


def unquote_path(path: str) -> str:
  """Decode a path git wrapped in C-style quotes (core.quotePath).

  Octal escapes are UTF-8 bytes, e.g. '"caf\\303\\251.rb"' is 'café.rb'.
  Unquoted paths are returned unchanged.
  """
  if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
    return path
  raw = path[1:-1].encode("utf-8").decode("unicode_escape")
  return raw.encode("latin-1").decode("utf-8", errors="replace")


def _section_status(lines: list[str]) -> str:
  for line in _extended_headers(lines):
    for marker, status in _STATUS_MARKERS:
      if line.startswith(marker):
        return status
  return "modified"

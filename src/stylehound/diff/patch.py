"""Unified diff parsing and line location.

A patch has two coordinate spaces. Checkers report absolute line
numbers in the new file; review comments are anchored to diff
positions. Position 1 is the line directly below the first hunk
header, and every later patch line (including further hunk headers
and "no newline" markers) advances it by one.
"""

import re

from stylehound.errors import MalformedDiff
from stylehound.models import DiffLine

# Pattern to parse diff hunk headers: @@ -start,count +start,count @@
_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

# Git file headers that may precede the first hunk
_FILE_HEADER_PREFIXES = (
  "diff --git ",
  "index ",
  "--- ",
  "+++ ",
  "new file mode",
  "deleted file mode",
  "old mode",
  "new mode",
  "similarity index",
  "dissimilarity index",
  "rename from",
  "rename to",
  "copy from",
  "copy to",
  "Binary files",
)


class _Hunk:
  """Remaining line budget of the hunk being read."""

  def __init__(self, header: re.Match[str]):
    self.old_left = int(header.group(2) or 1)
    self.new_left = int(header.group(4) or 1)
    new_start = int(header.group(3))
    # A hunk with an empty new side reports the line *before* the gap
    self.next_line = new_start if self.new_left else new_start + 1

  @property
  def exhausted(self) -> bool:
    return self.old_left == 0 and self.new_left == 0


def parse_patch(patch: str) -> list[DiffLine]:
  """Parse one file's patch into its new-side lines.

  Args:
    patch: Unified diff text for a single file, with or without the
           git file headers.

  Returns:
    Added and context lines in patch order. Removed lines are not
    part of the new file and are omitted.

  Raises:
    MalformedDiff: If the text is not a well-formed unified diff.
  """
  if not patch.strip():
    return []

  raw_lines = patch.split("\n")
  if raw_lines and raw_lines[-1] == "":
    raw_lines.pop()

  lines: list[DiffLine] = []
  hunk: _Hunk | None = None
  position = 0
  min_next_line = 1

  for raw in raw_lines:
    if hunk is None:
      header = _HUNK_HEADER.match(raw)
      if header:
        hunk = _open_hunk(header, min_next_line)
      elif not raw.startswith(_FILE_HEADER_PREFIXES):
        raise MalformedDiff(f"Expected hunk header, got {raw!r}")
      continue

    position += 1

    if raw.startswith("@@"):
      header = _HUNK_HEADER.match(raw)
      if not header:
        raise MalformedDiff(f"Invalid hunk header: {raw!r}")
      _close_hunk(hunk)
      hunk = _open_hunk(header, hunk.next_line)
      continue

    if raw.startswith("\\"):
      continue  # "\ No newline at end of file"

    if hunk.exhausted:
      raise MalformedDiff(f"Hunk has more lines than its header declares: {raw!r}")

    marker, content = raw[:1], raw[1:]
    if marker == "+":
      hunk.new_left -= 1
      lines.append(DiffLine(hunk.next_line, position, content, is_added=True))
      hunk.next_line += 1
    elif marker == "-":
      hunk.old_left -= 1
    elif marker in (" ", ""):
      # Some tools strip the leading space from blank context lines
      hunk.old_left -= 1
      hunk.new_left -= 1
      lines.append(DiffLine(hunk.next_line, position, content, is_added=False))
      hunk.next_line += 1
    else:
      raise MalformedDiff(f"Unexpected line in hunk: {raw!r}")

    if hunk.old_left < 0 or hunk.new_left < 0:
      raise MalformedDiff("Hunk line counts do not match its header")

  if hunk is None:
    # Headers only, e.g. a binary file or a pure mode change
    return []

  _close_hunk(hunk)
  return lines


def _open_hunk(header: re.Match[str], min_next_line: int) -> _Hunk:
  hunk = _Hunk(header)
  if hunk.new_left and hunk.next_line < min_next_line:
    raise MalformedDiff(f"Hunk overlaps the previous one: {header.group(0)!r}")
  return hunk


def _close_hunk(hunk: _Hunk) -> None:
  if not hunk.exhausted:
    raise MalformedDiff("Hunk ended before all lines declared in its header")


class LineLocator:
  """Answers whether an absolute line is part of a file's diff.

  Example:
    locator = LineLocator(patch)
    position = locator.position_of(42)  # None if line 42 is not in the diff
  """

  def __init__(self, patch: str, include_context: bool = True):
    """Build a locator from one file's patch.

    Args:
      patch: Unified diff text for the file.
      include_context: Whether unchanged context lines inside a hunk
                       are locatable. Added lines always are.

    Raises:
      MalformedDiff: If the patch cannot be parsed.
    """
    self._lines = parse_patch(patch)
    self._by_number = {
      line.number: line
      for line in self._lines
      if include_context or line.is_added
    }

  @property
  def lines(self) -> list[DiffLine]:
    return list(self._lines)

  @property
  def changed_lines(self) -> list[DiffLine]:
    return [line for line in self._lines if line.is_added]

  def line_at(self, line_number: int) -> DiffLine | None:
    return self._by_number.get(line_number)

  def position_of(self, line_number: int) -> int | None:
    """Diff position of an absolute line number, or None if not locatable."""
    line = self._by_number.get(line_number)
    return line.position if line else None

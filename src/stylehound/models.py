"""Core domain models for style review."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence


class FileStatus(Enum):
  """Outcome of reviewing a single changed file."""

  VIOLATIONS = "violations"
  CLEAN = "clean"
  UNSUPPORTED = "unsupported"
  UNANALYZABLE = "unanalyzable"
  FAILED = "failed"


@dataclass(frozen=True)
class ChangedFile:
  """A file touched by a submission.

  Content is not carried here; it is fetched from the head revision
  only when a checker is going to run on it.
  """

  filename: str
  patch: str
  revision_id: str | None = None
  status: str = "modified"

  @property
  def is_removed(self) -> bool:
    return self.status == "removed"


@dataclass(frozen=True)
class DiffLine:
  """A new-side line present in a file's patch."""

  number: int
  position: int
  content: str
  is_added: bool = True


@dataclass(frozen=True)
class Violation:
  """A finding confirmed to fall on a line of the diff."""

  filename: str
  position: int
  line: int
  message: str
  revision_id: str | None = None


@dataclass(frozen=True)
class FileReview:
  """All violations found in one changed file."""

  filename: str
  violations: Sequence[Violation]
  revision_id: str | None = None

  @property
  def messages(self) -> list[str]:
    return [v.message for v in self.violations]


@dataclass(frozen=True)
class FileOutcome:
  """What happened to one file during a review pass."""

  filename: str
  status: FileStatus
  review: FileReview | None = None
  error: str | None = None


@dataclass(frozen=True)
class ReviewSummary:
  """Result of one review pass, in submission file order."""

  outcomes: Sequence[FileOutcome] = field(default_factory=tuple)

  @property
  def file_reviews(self) -> list[FileReview]:
    return [o.review for o in self.outcomes if o.review is not None]

  @property
  def violations(self) -> list[Violation]:
    return [v for review in self.file_reviews for v in review.violations]

  @property
  def has_violations(self) -> bool:
    """Check if any file produced a violation."""
    return any(o.status == FileStatus.VIOLATIONS for o in self.outcomes)

  def with_status(self, status: FileStatus) -> list[FileOutcome]:
    return [o for o in self.outcomes if o.status == status]

  def counts(self) -> dict[FileStatus, int]:
    """Number of files per status, in enum order, omitting zeroes."""
    counts: dict[FileStatus, int] = {}
    for status in FileStatus:
      n = len(self.with_status(status))
      if n:
        counts[status] = n
    return counts

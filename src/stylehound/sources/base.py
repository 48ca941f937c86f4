"""Collaborator protocols consumed by the style checker."""

from dataclasses import dataclass
from typing import Protocol, Sequence

from stylehound.config.settings import EnablementConfig
from stylehound.models import ChangedFile, FileReview


class Submission(Protocol):
  """A reviewable unit of changed files (e.g., a pull request)."""

  @property
  def head_revision(self) -> str | None:
    ...

  def modified_files(self) -> Sequence[ChangedFile]:
    """Files touched by the submission, excluding removed ones."""
    ...


class ContentStore(Protocol):
  """Source of full file content at the submission's head revision."""

  def fetch(self, filename: str) -> str:
    """Return the file's content.

    Raises:
      ContentNotFound: The file does not exist at the revision.
      TransientFetchFailure: Retrieval failed and may succeed later.
    """
    ...


class ConfigStore(Protocol):
  """Resolves the checker enablement for a submission."""

  def enablement_for(self, submission: Submission) -> EnablementConfig:
    """Raises ConfigResolutionFailure if no trustworthy config exists."""
    ...


class Sink(Protocol):
  """Receives one non-empty FileReview per file with violations."""

  def record(self, review: FileReview) -> None:
    ...


@dataclass(frozen=True)
class ChangeSet:
  """Concrete submission built from a diff or a pull request."""

  files: Sequence[ChangedFile]
  head_revision: str | None = None
  base_revision: str | None = None

  def modified_files(self) -> Sequence[ChangedFile]:
    return [f for f in self.files if not f.is_removed]


class CollectingSink:
  """Sink that keeps recorded reviews in memory, in arrival order."""

  def __init__(self) -> None:
    self.reviews: list[FileReview] = []

  def record(self, review: FileReview) -> None:
    self.reviews.append(review)

  @property
  def messages(self) -> list[str]:
    return [m for review in self.reviews for m in review.messages]

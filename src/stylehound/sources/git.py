"""File content from a local git repository."""

import logging
from pathlib import Path

from stylehound.diff.extractor import GitError, GitTimeout, run_git
from stylehound.errors import ContentNotFound, TransientFetchFailure

logger = logging.getLogger(__name__)

# Fragments of `git show` errors meaning the path is absent at the revision
_MISSING_PATH_MARKERS = (
  "does not exist in",
  "exists on disk, but not in",
  "not in the index",
  "invalid object name",
)


class GitContentStore:
  """Reads file content with `git show`.

  A revision of None reads from the index, which is what a review of
  staged changes should see.
  """

  DEFAULT_TIMEOUT = 10.0

  def __init__(
    self,
    revision: str | None = None,
    cwd: Path | None = None,
    timeout: float = DEFAULT_TIMEOUT,
  ):
    self._revision = revision
    self._cwd = cwd
    self._timeout = timeout

  @property
  def revision(self) -> str | None:
    return self._revision

  def fetch(self, filename: str) -> str:
    spec = f"{self._revision or ''}:{filename}"
    logger.debug("Fetching %s", spec)
    try:
      return run_git("show", spec, cwd=self._cwd, timeout=self._timeout)
    except GitTimeout as e:
      raise TransientFetchFailure(str(e)) from e
    except GitError as e:
      message = str(e)
      if any(marker in message.lower() for marker in _MISSING_PATH_MARKERS):
        raise ContentNotFound(f"{filename} not found at {self._revision or 'index'}") from e
      raise TransientFetchFailure(message) from e

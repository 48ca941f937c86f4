"""Core review orchestration."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from pathlib import Path

from stylehound.checkers import UNSUPPORTED, CheckerRegistry, resolve_checker
from stylehound.config import RepositoryConfigStore, Settings, load_config
from stylehound.config.settings import EnablementConfig
from stylehound.diff import LineLocator, extract_branch_diff, extract_staged_diff
from stylehound.errors import CheckerFailure, ContentFetchFailure, MalformedDiff
from stylehound.models import (
  ChangedFile,
  FileOutcome,
  FileReview,
  FileStatus,
  ReviewSummary,
  Violation,
)
from stylehound.sources.base import ConfigStore, ContentStore, Sink, Submission
from stylehound.sources.git import GitContentStore
from stylehound.sources.github import GitHubClient, GitHubContentStore, fetch_pull_request

logger = logging.getLogger(__name__)


class StyleChecker:
  """Runs the matching checker over every changed file of a submission.

  Only findings on lines present in a file's diff are reported. Files
  are reviewed concurrently, but results always come back in the
  submission's file order.

  Example:
    checker = StyleChecker(content_store, config_store)
    reviews = checker.review_files(submission)
  """

  def __init__(
    self,
    content_store: ContentStore,
    config_store: ConfigStore,
    sink: Sink | None = None,
    settings: Settings | None = None,
  ):
    self._content_store = content_store
    self._config_store = config_store
    self._sink = sink
    self.settings = settings or Settings()

  def review_files(self, submission: Submission) -> list[FileReview]:
    """Review a submission and return the non-empty file reviews."""
    return self.review(submission).file_reviews

  def review(self, submission: Submission) -> ReviewSummary:
    """Review a submission, keeping the outcome of every file.

    Raises:
      ConfigResolutionFailure: If enablement for the submission cannot be
                               resolved. Per-file failures never raise.
    """
    config = self._config_store.enablement_for(submission)
    CheckerRegistry.load_all()

    files = list(submission.modified_files())
    outcomes = self._review_concurrently(files, config)
    summary = ReviewSummary(outcomes=tuple(outcomes))

    if self._sink is not None:
      for review in summary.file_reviews:
        self._sink.record(review)

    self._log_summary(summary)
    return summary

  def _review_concurrently(
    self,
    files: list[ChangedFile],
    config: EnablementConfig,
  ) -> list[FileOutcome]:
    outcomes: dict[int, FileOutcome] = {}
    pending = list(range(len(files)))
    while pending:
      pending = self._review_round(files, pending, config, outcomes)
    return [outcomes[i] for i in range(len(files))]

  def _review_round(
    self,
    files: list[ChangedFile],
    indexes: list[int],
    config: EnablementConfig,
    outcomes: dict[int, FileOutcome],
  ) -> list[int]:
    """Review files on a fresh pool, storing outcomes by index.

    A file that times out keeps its worker busy, so files still queued
    at that point are cancelled and returned for the next round instead
    of waiting behind it. The first file of a round always gets an
    outcome, which guarantees progress.
    """
    executor = ThreadPoolExecutor(
      max_workers=min(self.settings.max_workers, len(indexes)),
      thread_name_prefix="stylehound",
    )
    requeued: list[int] = []
    try:
      futures: list[tuple[int, Future[FileOutcome]]] = [
        (i, executor.submit(self._review_file, files[i], config))
        for i in indexes
      ]
      # Collected in submission order, whatever order they finish in
      for i, future in futures:
        if future.cancelled():
          requeued.append(i)
          continue
        outcomes[i] = self._collect(files[i], future)
        if not future.done():
          for _, queued in futures:
            queued.cancel()
    finally:
      executor.shutdown(wait=False, cancel_futures=True)

    if requeued:
      logger.debug("Retrying %d queued file(s) on a fresh pool", len(requeued))
    return requeued

  def _collect(self, changed_file: ChangedFile, future: Future[FileOutcome]) -> FileOutcome:
    try:
      return future.result(timeout=self.settings.file_timeout)
    except FutureTimeout:
      return self._failed(
        changed_file,
        f"timed out after {self.settings.file_timeout:.1f}s",
      )
    except Exception as e:  # noqa: BLE001
      logger.debug("Unexpected error reviewing %s", changed_file.filename, exc_info=True)
      return self._failed(changed_file, f"{type(e).__name__}: {e}")

  def _review_file(self, changed_file: ChangedFile, config: EnablementConfig) -> FileOutcome:
    filename = changed_file.filename
    checker = resolve_checker(filename, config)
    if checker is UNSUPPORTED:
      logger.debug("%s: no enabled checker", filename)
      return FileOutcome(filename=filename, status=FileStatus.UNSUPPORTED)

    try:
      locator = LineLocator(
        changed_file.patch,
        include_context=self.settings.include_context_lines,
      )
    except MalformedDiff as e:
      return self._failed(changed_file, f"malformed diff: {e}")

    try:
      content = self._content_store.fetch(filename)
    except ContentFetchFailure as e:
      return self._failed(changed_file, f"content unavailable: {e}")

    try:
      findings = checker.run(content)
    except CheckerFailure as e:
      logger.warning("%s: %s checker could not analyze file: %s", filename, checker.name, e)
      return FileOutcome(filename=filename, status=FileStatus.UNANALYZABLE, error=str(e))

    violations = []
    for finding in findings:
      position = locator.position_of(finding.line)
      if position is None:
        continue
      violations.append(Violation(
        filename=filename,
        position=position,
        line=finding.line,
        message=finding.message,
        revision_id=changed_file.revision_id,
      ))

    logger.debug(
      "%s: %d finding(s), %d on changed lines",
      filename,
      len(findings),
      len(violations),
    )

    if not violations:
      return FileOutcome(filename=filename, status=FileStatus.CLEAN)

    return FileOutcome(
      filename=filename,
      status=FileStatus.VIOLATIONS,
      review=FileReview(
        filename=filename,
        violations=tuple(violations),
        revision_id=changed_file.revision_id,
      ),
    )

  def _failed(self, changed_file: ChangedFile, reason: str) -> FileOutcome:
    logger.warning("%s: skipped, %s", changed_file.filename, reason)
    return FileOutcome(
      filename=changed_file.filename,
      status=FileStatus.FAILED,
      error=reason,
    )

  def _log_summary(self, summary: ReviewSummary) -> None:
    counts = summary.counts()
    if not counts:
      logger.info("No files to review")
      return
    parts = ", ".join(f"{n} {status.value}" for status, n in counts.items())
    logger.info(
      "Reviewed %d file(s): %s; %d violation(s)",
      len(summary.outcomes),
      parts,
      len(summary.violations),
    )


def run_review(
  branch: str | None = None,
  base: str | None = None,
  github_repo: str | None = None,
  pull_request: int | None = None,
  token: str | None = None,
  config_path: Path | None = None,
  max_workers: int | None = None,
  cwd: Path | None = None,
) -> ReviewSummary:
  """Run a style review with the given options.

  Reviews a GitHub pull request when github_repo and pull_request are
  given, a local branch when branch is given, and staged changes
  otherwise.
  """
  settings = load_config(config_path).model_copy(deep=True)
  if base:
    settings.base = base
  if max_workers:
    settings.max_workers = max_workers

  if github_repo:
    if pull_request is None:
      raise ValueError("A pull request number is required with a GitHub repository")
    with GitHubClient(
      github_repo,
      token=token,
      base_url=settings.github_api_url,
      timeout=settings.fetch_timeout,
    ) as client:
      submission = fetch_pull_request(client, pull_request)
      store = GitHubContentStore(client, submission.head_revision or "")
      return _review(submission, store, settings)

  if branch:
    submission = extract_branch_diff(branch, settings.base, cwd=cwd)
  else:
    submission = extract_staged_diff(cwd=cwd)

  store = GitContentStore(submission.head_revision, cwd=cwd, timeout=settings.fetch_timeout)
  return _review(submission, store, settings)


def _review(
  submission: Submission,
  store: ContentStore,
  settings: Settings,
) -> ReviewSummary:
  config_store = RepositoryConfigStore(store, path=settings.repo_config)
  return StyleChecker(store, config_store, settings=settings).review(submission)

"""Pull request files and content from the GitHub REST API."""

import logging
from urllib.parse import quote

import httpx

from stylehound.errors import ContentNotFound, StylehoundError, TransientFetchFailure
from stylehound.models import ChangedFile
from stylehound.sources.base import ChangeSet

logger = logging.getLogger(__name__)


class GitHubError(StylehoundError):
  """GitHub API request failed."""

  def __init__(self, message: str, status_code: int | None = None):
    super().__init__(message)
    self.status_code = status_code


class GitHubClient:
  """Minimal GitHub API client for pull request review.

  Example:
    client = GitHubClient("octo/repo", token=os.environ["GITHUB_TOKEN"])
    submission = fetch_pull_request(client, 42)
  """

  DEFAULT_BASE_URL = "https://api.github.com"
  DEFAULT_TIMEOUT = 10.0
  PER_PAGE = 100

  def __init__(
    self,
    repo: str,
    token: str | None = None,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
  ):
    if repo.count("/") != 1:
      raise ValueError(f"Repository must be 'owner/name', got {repo!r}")
    self.repo = repo
    headers = {
      "Accept": "application/vnd.github+json",
      "User-Agent": "stylehound",
    }
    if token:
      headers["Authorization"] = f"Bearer {token}"
    self._client = httpx.Client(
      base_url=base_url.rstrip("/"),
      headers=headers,
      timeout=timeout,
      transport=transport,
    )

  def close(self) -> None:
    self._client.close()

  def __enter__(self) -> "GitHubClient":
    return self

  def __exit__(self, *exc: object) -> None:
    self.close()

  def pull_request(self, number: int) -> dict:
    """Fetch pull request metadata."""
    return self._get_json(f"/repos/{self.repo}/pulls/{number}")

  def pull_request_files(self, number: int) -> list[dict]:
    """Fetch all files of a pull request, following pagination."""
    files: list[dict] = []
    page = 1
    while True:
      batch = self._get_json(
        f"/repos/{self.repo}/pulls/{number}/files",
        params={"per_page": self.PER_PAGE, "page": page},
      )
      files.extend(batch)
      if len(batch) < self.PER_PAGE:
        return files
      page += 1

  def file_content(self, path: str, ref: str) -> str:
    """Fetch raw file content at a ref.

    Raises:
      ContentNotFound: GitHub answered 404.
      TransientFetchFailure: Any other HTTP or transport failure.
    """
    try:
      response = self._client.get(
        f"/repos/{self.repo}/contents/{quote(path)}",
        params={"ref": ref},
        headers={"Accept": "application/vnd.github.raw+json"},
      )
    except httpx.RequestError as e:
      raise TransientFetchFailure(f"Fetching {path}: {e}") from e

    if response.status_code == 404:
      raise ContentNotFound(f"{path} not found at {ref}")
    if response.is_error:
      raise TransientFetchFailure(f"Fetching {path}: HTTP {response.status_code}")
    return response.text

  def _get_json(self, url: str, params: dict | None = None) -> dict | list:
    try:
      response = self._client.get(url, params=params)
    except httpx.RequestError as e:
      raise GitHubError(f"GitHub request failed: {e}") from e

    if response.is_error:
      message = _error_message(response)
      raise GitHubError(
        f"GitHub API error: {response.status_code} - {message}",
        status_code=response.status_code,
      )
    return response.json()


def _error_message(response: httpx.Response) -> str:
  try:
    data = response.json()
  except ValueError:
    return "Unknown error"
  if isinstance(data, dict):
    return data.get("message", "Unknown error")
  return "Unknown error"


class GitHubContentStore:
  """ContentStore backed by the contents API at a fixed ref."""

  def __init__(self, client: GitHubClient, ref: str):
    self._client = client
    self._ref = ref

  def fetch(self, filename: str) -> str:
    logger.debug("Fetching %s@%s from %s", filename, self._ref, self._client.repo)
    return self._client.file_content(filename, self._ref)


def fetch_pull_request(client: GitHubClient, number: int) -> ChangeSet:
  """Build a submission from a pull request's files."""
  pull = client.pull_request(number)
  head = pull["head"]["sha"]
  base = pull.get("base", {}).get("sha")

  files = [
    ChangedFile(
      filename=data["filename"],
      patch=data.get("patch") or "",
      revision_id=head,
      status=data.get("status", "modified"),
    )
    for data in client.pull_request_files(number)
  ]
  logger.info("Pull request #%d: %d file(s) at %s", number, len(files), head[:7])
  return ChangeSet(files=files, head_revision=head, base_revision=base)

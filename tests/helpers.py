"""Test doubles and builders shared across test modules."""

from stylehound.errors import ContentNotFound
from stylehound.models import ChangedFile


class FakeContentStore:
  """In-memory ContentStore that records every fetch."""

  def __init__(
    self,
    files: dict[str, str] | None = None,
    failures: dict[str, Exception] | None = None,
  ):
    self.files = files or {}
    self.failures = failures or {}
    self.fetched: list[str] = []

  def fetch(self, filename: str) -> str:
    self.fetched.append(filename)
    if filename in self.failures:
      raise self.failures[filename]
    if filename not in self.files:
      raise ContentNotFound(f"{filename} not found")
    return self.files[filename]


def new_file_patch(content: str) -> str:
  """Patch that adds every line of content to a new file."""
  lines = content.split("\n")
  if lines and lines[-1] == "":
    lines.pop()
  header = f"@@ -0,0 +1,{len(lines)} @@"
  return "\n".join([header, *(f"+{line}" for line in lines)])


def changed_file(filename: str, content: str, patch: str | None = None) -> ChangedFile:
  return ChangedFile(
    filename=filename,
    patch=new_file_patch(content) if patch is None else patch,
    revision_id="abc123",
  )

"""Submission, content, config and sink collaborators."""

from stylehound.sources.base import (
  ChangeSet,
  CollectingSink,
  ConfigStore,
  ContentStore,
  Sink,
  Submission,
)

__all__ = [
  "ChangeSet",
  "CollectingSink",
  "ConfigStore",
  "ContentStore",
  "Sink",
  "Submission",
]

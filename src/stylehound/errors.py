"""Exception hierarchy."""


class StylehoundError(Exception):
  """Base class for stylehound errors."""


class MalformedDiff(StylehoundError):
  """Patch text could not be parsed into hunks."""


class ContentFetchFailure(StylehoundError):
  """File content could not be retrieved."""


class ContentNotFound(ContentFetchFailure):
  """File does not exist at the requested revision."""


class TransientFetchFailure(ContentFetchFailure):
  """Retrieval failed for a reason that may go away on retry."""


class CheckerFailure(StylehoundError):
  """A checker could not analyze the content it was given."""


class ConfigResolutionFailure(StylehoundError):
  """Enablement config for a submission could not be resolved."""

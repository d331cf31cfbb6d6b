"""Exceptions raised across bundlesync.

Every failure a trigger or the CLI can report is a subclass of
BundleSyncError so callers can catch them uniformly and map each kind to a
status code or a user-friendly message.

Bundle *definition* problems are not exceptions: the validator returns
them as a list of strings.
"""


class BundleSyncError(Exception):
    """Base class for all bundlesync errors."""


class ValidationError(BundleSyncError):
    """A required input field is missing or malformed."""


class NotFoundError(BundleSyncError):
    """A referenced product does not exist in the stock ledger."""


class ConfigurationError(BundleSyncError):
    """Store identity or credential is missing."""


class UpstreamError(BundleSyncError):
    """The stock ledger, bundle registry or order lookup failed."""


class MethodNotSupportedError(BundleSyncError):
    """A trigger was invoked with an unsupported transport verb."""

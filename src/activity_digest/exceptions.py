"""Unified exception hierarchy for activity-digest."""


class ActivityDigestError(Exception):
    """Base exception for all activity-digest errors."""


# Collectors
class CollectorError(ActivityDigestError):
    """Base exception for local source collectors."""


class BrowserHistoryReadError(CollectorError):
    """Failed to read a browser history database."""


class ShellHistoryReadError(CollectorError):
    """Failed to read a shell history file."""


class SessionLogReadError(CollectorError):
    """Failed to read an agent session transcript."""


# Policy
class PolicyError(ActivityDigestError):
    """Malformed policy input; always surfaced to the caller."""


class UnsupportedTierError(PolicyError):
    """Requested privacy tier is not one of the known tiers."""


class ConfigError(PolicyError):
    """Invalid configuration value."""


# Embeddings
class EmbeddingError(ActivityDigestError):
    """Base exception for embedding operations."""


# Summarizer
class SummarizerError(ActivityDigestError):
    """The external summarizer collaborator failed."""

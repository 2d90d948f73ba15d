class RSSArchiveError(Exception):
    """Base class for errors raised by rss_archive."""


class RSSFetchError(RSSArchiveError):
    """Raised when an RSS/Atom feed cannot be downloaded."""


class FeedParseError(RSSArchiveError):
    """Raised when a downloaded document is not well-formed XML."""


class StorageError(RSSArchiveError):
    """Raised when the store cannot be written to disk."""


class ConfigError(RSSArchiveError):
    """Raised on invalid configuration values."""

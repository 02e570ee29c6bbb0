"""
Error taxonomy for the scraper.

Fatal errors (configuration, persistence) abort a run. Everything raised by
the API client is absorbed per product by the orchestrator's mock fallback.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper errors."""


class ConfigurationError(ScraperError):
    """Invalid run options, e.g. an unknown product name."""


class TransportError(ScraperError):
    """Request could not be completed (network failure, timeout, cancelled wait)."""


class RateLimitExceeded(TransportError):
    """Upstream kept answering 429 after the retry budget or deadline ran out."""

    def __init__(self, message: str, status_code: int = 429, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamSchemaError(ScraperError):
    """Upstream body could not be parsed into the expected shape."""


class UpstreamStatusError(UpstreamSchemaError):
    """Upstream answered with a non-success status."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None):
        super().__init__(message or f"API returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class PersistenceError(ScraperError):
    """Output file could not be written or read."""

"""Custom exceptions for WordCrawl services."""


class ConfigurationError(Exception):
    """Raised when a crawl or profiler contract is violated by its configuration."""


class ImplementationNotFoundError(ConfigurationError):
    """Raised when no crawler implementation satisfies the requested configuration."""

    def __init__(self, requested: str, reason: str = "not found"):
        self.requested = requested
        self.reason = reason
        super().__init__(f"Implementation '{requested}' {reason}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")

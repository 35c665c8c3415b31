import logging
import time
from typing import Callable, Iterable, Pattern

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates branch termination rules: depth limits, the deadline and ignored URLs.

    Separates policy decisions from traversal logic. Every check is evaluated
    when a branch starts, never inherited from the parent branch.
    """

    def __init__(self, ignored_urls: Iterable[Pattern[str]] = (), clock: Callable[[], float] = time.monotonic):
        self.ignored_urls = tuple(ignored_urls)
        self.clock = clock

    def should_skip_due_to_depth(self, depth: int) -> bool:
        """Check if URL should be skipped due to max depth reached."""
        if depth <= 0:
            logger.debug("Skipping (max depth reached) at depth %s", depth)
            return True
        return False

    def should_skip_due_to_deadline(self, deadline: float) -> bool:
        """Check if the crawl deadline has passed."""
        if self.clock() > deadline:
            logger.debug("Skipping (deadline passed)")
            return True
        return False

    def should_skip_due_to_ignored_url(self, url: str) -> bool:
        """Check if URL fully matches one of the ignored URL patterns."""
        for pattern in self.ignored_urls:
            if pattern.fullmatch(url):
                logger.debug("Skipping (ignored by %s) %s", pattern.pattern, url)
                return True
        return False

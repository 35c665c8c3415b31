import logging
import time
from datetime import timedelta
from typing import Callable, Iterable, Optional, Pattern, Protocol, Sequence

from wordcrawl.domain.crawl_context import CrawlContext
from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.domain.word_counts import sort_word_counts
from wordcrawl.services.crawl_policy import CrawlPolicy
from wordcrawl.services.page_parser import DocumentParser

logger = logging.getLogger(__name__)


class WebCrawler(Protocol):
    """Crawls outward from a set of starting URLs and ranks the words found."""

    @property
    def max_parallelism(self) -> int: ...

    def crawl(
        self,
        starting_urls: Sequence[str],
        max_depth: Optional[int] = None,
        deadline: Optional[float] = None,
    ) -> CrawlResult: ...


class BaseWebCrawler:
    """Traversal rules shared by every crawl strategy.

    Subclasses only decide how branches are scheduled (`_traverse`); the
    per-branch work lives in `visit` so both strategies agree on results.
    """

    def __init__(
        self,
        *,
        parser: DocumentParser,
        timeout: timedelta,
        popular_word_count: int,
        max_depth: int,
        ignored_urls: Iterable[Pattern[str]] = (),
        clock: Callable[[], float] = time.monotonic,
        crawl_policy: Optional[CrawlPolicy] = None,
    ):
        self.parser = parser
        self.timeout = timeout
        self.popular_word_count = popular_word_count
        self.max_depth = max_depth
        self.clock = clock
        self.crawl_policy = crawl_policy or CrawlPolicy(ignored_urls, clock=clock)

    @property
    def max_parallelism(self) -> int:
        return 1

    def crawl(
        self,
        starting_urls: Sequence[str],
        max_depth: Optional[int] = None,
        deadline: Optional[float] = None,
    ) -> CrawlResult:
        """Crawl from `starting_urls` until the depth or the deadline is exhausted.

        `max_depth` and `deadline` default to the configured depth and to
        now + timeout. `deadline` is an instant on this crawler's clock.
        """
        if starting_urls is None:
            raise ValueError("starting_urls is required for crawl")
        depth = self.max_depth if max_depth is None else max_depth
        if deadline is None:
            deadline = self.clock() + self.timeout.total_seconds()
        context = CrawlContext(deadline)

        logger.info("Starting %s crawl of %d url(s) at depth %s", type(self).__name__, len(starting_urls), depth)
        self._traverse(list(starting_urls), depth, context)

        ranked = sort_word_counts(context.word_counts.snapshot(), self.popular_word_count)
        result = CrawlResult.of(ranked, context.urls_visited)
        logger.info("Crawl finished: %d url(s) visited, %d word(s) reported", result.urls_visited, len(ranked))
        return result

    def visit(self, url: str, depth: int, context: CrawlContext) -> tuple[str, ...]:
        """Run one branch: check, claim, parse and merge.

        Returns the links to follow at `depth - 1`, or an empty tuple when the
        branch terminates here.
        """
        policy = self.crawl_policy
        if policy.should_skip_due_to_depth(depth):
            return ()
        if policy.should_skip_due_to_deadline(context.deadline):
            return ()
        if policy.should_skip_due_to_ignored_url(url):
            return ()
        if context.is_visited(url):
            logger.debug("Skipping (visited) %s", url)
            return ()
        if not context.claim(url):
            logger.debug("Skipping (claimed by another branch) %s", url)
            return ()

        result = self.parser.parse(url)
        context.word_counts.merge(result.word_counts)
        return tuple(result.links)

    def _traverse(self, starting_urls: list[str], max_depth: int, context: CrawlContext) -> None:
        raise NotImplementedError


class SequentialWebCrawler(BaseWebCrawler):
    """Downloads and processes one page at a time, depth first."""

    def _traverse(self, starting_urls: list[str], max_depth: int, context: CrawlContext) -> None:
        for url in starting_urls:
            self._crawl_from(url, max_depth, context)

    def _crawl_from(self, url: str, depth: int, context: CrawlContext) -> None:
        for link in self.visit(url, depth, context):
            self._crawl_from(link, depth - 1, context)

from __future__ import annotations

import logging
import time
from typing import Callable

from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.exceptions import ImplementationNotFoundError
from wordcrawl.services.crawler import BaseWebCrawler, SequentialWebCrawler
from wordcrawl.services.page_parser import DocumentParser
from wordcrawl.services.parallel_crawler import ParallelWebCrawler, available_parallelism

logger = logging.getLogger(__name__)

# Candidate strategies, in order of preference
IMPLEMENTATIONS: tuple[type[BaseWebCrawler], ...] = (SequentialWebCrawler, ParallelWebCrawler)


def target_parallelism(config: CrawlerConfig) -> int:
    if config.parallelism >= 0:
        return config.parallelism
    return available_parallelism()


def _matches(impl: type, name: str) -> bool:
    return name in (impl.__name__, f"{impl.__module__}.{impl.__qualname__}")


def create_crawler(
    config: CrawlerConfig,
    parser: DocumentParser,
    clock: Callable[[], float] = time.monotonic,
) -> BaseWebCrawler:
    """Build the crawl strategy for `config`.

    An `implementation_override` selects a strategy by class name. Otherwise
    the first strategy able to run at the target parallelism is used.
    """
    parallelism = target_parallelism(config)
    common = dict(
        parser=parser,
        timeout=config.timeout,
        popular_word_count=config.popular_word_count,
        max_depth=config.max_depth,
        ignored_urls=config.ignored_urls,
        clock=clock,
    )

    def build(impl: type[BaseWebCrawler]) -> BaseWebCrawler:
        if impl is ParallelWebCrawler:
            return ParallelWebCrawler(parallelism=max(parallelism, 1), **common)
        return impl(**common)

    override = config.implementation_override.strip()
    if override:
        for impl in IMPLEMENTATIONS:
            if _matches(impl, override):
                logger.info("Using crawler override %s", impl.__name__)
                return build(impl)
        raise ImplementationNotFoundError(override)

    for impl in IMPLEMENTATIONS:
        crawler = build(impl)
        if parallelism <= crawler.max_parallelism:
            logger.info("Using %s for parallelism %s", impl.__name__, parallelism)
            return crawler
    raise ImplementationNotFoundError(f"parallelism={parallelism}", "is not supported by any crawler")

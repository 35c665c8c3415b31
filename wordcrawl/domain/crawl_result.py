"""Crawl result data model."""
from types import MappingProxyType
from typing import Mapping, NamedTuple


class CrawlResult(NamedTuple):
    """Result of a crawl operation.

    Created once when every traversal branch has completed.
    """
    word_counts: Mapping[str, int]
    """Most popular words, in rank order"""

    urls_visited: int
    """Number of distinct URLs claimed during the crawl"""

    @classmethod
    def of(cls, word_counts: Mapping[str, int], urls_visited: int) -> "CrawlResult":
        return cls(MappingProxyType(dict(word_counts)), int(urls_visited))

    def to_dict(self) -> dict:
        return {"wordCounts": dict(self.word_counts), "urlsVisited": self.urls_visited}

"""Domain objects for WordCrawl - explicit re-exports to satisfy linters."""
from .config import CrawlerConfig as CrawlerConfig
from .crawl_result import CrawlResult as CrawlResult
from .parse_result import ParseResult as ParseResult
from .visited_tracker import VisitedTracker as VisitedTracker
from .word_counts import WordCountAccumulator as WordCountAccumulator

__all__ = ["CrawlerConfig", "CrawlResult", "ParseResult", "VisitedTracker", "WordCountAccumulator"]

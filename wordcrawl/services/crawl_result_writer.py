import json
import logging
from pathlib import Path
from typing import TextIO

from wordcrawl.domain.crawl_result import CrawlResult

logger = logging.getLogger(__name__)


class CrawlResultWriter:
    """Serializes a CrawlResult as `{"wordCounts": {...}, "urlsVisited": n}`."""

    def __init__(self, result: CrawlResult):
        if result is None:
            raise ValueError("result is required")
        self.result = result

    def write(self, path) -> None:
        """Write the result to `path`, replacing any existing content."""
        path = Path(path)
        with path.open("w", encoding="utf-8") as writer:
            self.write_to(writer)
        logger.info("Wrote crawl result to %s", path)

    def write_to(self, writer: TextIO) -> None:
        json.dump(self.result.to_dict(), writer)
        writer.write("\n")

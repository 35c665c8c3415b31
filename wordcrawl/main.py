import argparse
import logging
import sys
from typing import Optional, Sequence

import requests

from wordcrawl import config as env
from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.exceptions import ConfigurationError
from wordcrawl.profiler import Profiler
from wordcrawl.services.config_loader import ConfigurationLoader
from wordcrawl.services.crawl_result_writer import CrawlResultWriter
from wordcrawl.services.crawler_factory import create_crawler
from wordcrawl.services.http_service import HttpService
from wordcrawl.services.page_parser import PageParser

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def run(config: CrawlerConfig, profiler: Optional[Profiler] = None, http_client=requests.get) -> CrawlResult:
    """Crawl `config.start_pages` and write the result and profiling data."""
    profiler = profiler or Profiler()
    http_service = HttpService(env.USER_AGENT, http_client=http_client, timeout=config.timeout.total_seconds())
    parser = profiler.wrap(
        PageParser(http_service, timeout=config.timeout, ignored_words=config.ignored_words),
        {"parse"},
    )
    crawler = profiler.wrap(create_crawler(config, parser), {"crawl"})

    result = crawler.crawl(list(config.start_pages))

    writer = CrawlResultWriter(result)
    if config.result_path:
        writer.write(config.result_path)
    else:
        writer.write_to(sys.stdout)

    if config.profile_output_path:
        profiler.write_data(config.profile_output_path)
    else:
        profiler.write_to(sys.stdout)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    arg_parser = argparse.ArgumentParser(prog="wordcrawl", description="Crawl pages and report the most popular words.")
    arg_parser.add_argument("config", help="path to a JSON or YAML crawl configuration")
    args = arg_parser.parse_args(argv)

    setup_logging(env.log_level())
    try:
        config = ConfigurationLoader(args.config).load()
        run(config)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

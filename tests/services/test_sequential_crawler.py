import re
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from wordcrawl.domain.parse_result import ParseResult
from wordcrawl.services.crawler import SequentialWebCrawler


def make_crawler(parser, clock, **overrides):
    kwargs = dict(
        parser=parser,
        timeout=timedelta(seconds=60),
        popular_word_count=2,
        max_depth=2,
        clock=clock,
    )
    kwargs.update(overrides)
    return SequentialWebCrawler(**kwargs)


def test_two_page_example(make_parser, fake_clock):
    parser = make_parser({
        "http://a": (["the", "the", "cat"], ["http://b"]),
        "http://b": (["the", "dog"], []),
    })
    crawler = make_crawler(parser, fake_clock)

    result = crawler.crawl(["http://a"])

    assert list(result.word_counts.items()) == [("the", 3), ("cat", 1)]
    assert result.urls_visited == 2


def test_max_parallelism_is_one(make_parser, fake_clock):
    assert make_crawler(make_parser({}), fake_clock).max_parallelism == 1


def test_depth_one_visits_only_the_seed(make_parser, fake_clock):
    parser = make_parser({"http://a": (["loop"], ["http://a", "http://b"])})
    crawler = make_crawler(parser, fake_clock, max_depth=1)

    result = crawler.crawl(["http://a"])

    assert result.urls_visited == 1
    assert dict(parser.calls) == {"http://a": 1}


def test_depth_zero_visits_nothing(make_parser, fake_clock):
    parser = make_parser({"http://a": (["word"], [])})
    result = make_crawler(parser, fake_clock, max_depth=0).crawl(["http://a"])
    assert result.urls_visited == 0
    assert dict(result.word_counts) == {}


def test_shared_descendant_is_parsed_once(make_parser, fake_clock):
    parser = make_parser({
        "http://a": (["a"], ["http://b", "http://c"]),
        "http://c": (["c"], ["http://b"]),
        "http://b": (["b"], []),
    })
    crawler = make_crawler(parser, fake_clock, max_depth=3, popular_word_count=10)

    result = crawler.crawl(["http://a"])

    assert result.urls_visited == 3
    assert parser.calls["http://b"] == 1
    assert dict(result.word_counts) == {"a": 1, "b": 1, "c": 1}


def test_duplicate_seeds_are_visited_once(make_parser, fake_clock):
    parser = make_parser({"http://a": (["x"], [])})
    result = make_crawler(parser, fake_clock).crawl(["http://a", "http://a"])
    assert result.urls_visited == 1
    assert result.word_counts["x"] == 1


def test_expired_deadline_visits_nothing(make_parser, fake_clock):
    parser = make_parser({"http://a": (["word"], [])})
    crawler = make_crawler(parser, fake_clock)

    result = crawler.crawl(["http://a"], deadline=fake_clock() - 1)

    assert result.urls_visited == 0
    assert dict(result.word_counts) == {}
    assert not parser.calls


def test_deadline_passing_mid_crawl_keeps_merged_words(make_parser, fake_clock):
    # each parse takes 10 "seconds"; the crawl times out after 15
    parser = make_parser(
        {
            "http://a": (["first"], ["http://b"]),
            "http://b": (["second"], ["http://c"]),
            "http://c": (["third"], []),
        },
        on_parse=lambda url: fake_clock.advance(10),
    )
    crawler = make_crawler(parser, fake_clock, timeout=timedelta(seconds=15), max_depth=5, popular_word_count=5)

    result = crawler.crawl(["http://a"])

    # b started before the deadline and finished after it; c never started
    assert result.urls_visited == 2
    assert dict(result.word_counts) == {"first": 1, "second": 1}
    assert "http://c" not in parser.calls


def test_ignored_urls_are_never_claimed(make_parser, fake_clock):
    parser = make_parser({
        "http://a": (["a"], ["http://skip.me/page", "http://b"]),
        "http://b": (["b"], []),
        "http://skip.me/page": (["hidden"], []),
    })
    crawler = make_crawler(
        parser, fake_clock, popular_word_count=10, ignored_urls=[re.compile(r"http://skip\.me/.*")]
    )

    result = crawler.crawl(["http://a"])

    assert result.urls_visited == 2
    assert "hidden" not in result.word_counts
    assert "http://skip.me/page" not in parser.calls


def test_unparseable_pages_still_count_as_visited(make_parser, fake_clock):
    parser = make_parser({"http://a": ([], ["http://missing"])})
    result = make_crawler(parser, fake_clock).crawl(["http://a"])
    assert result.urls_visited == 2
    assert dict(result.word_counts) == {}


def test_explicit_max_depth_overrides_configured_depth(make_parser, fake_clock):
    parser = make_parser({
        "http://a": (["a"], ["http://b"]),
        "http://b": (["b"], []),
    })
    crawler = make_crawler(parser, fake_clock, max_depth=1)
    assert crawler.crawl(["http://a"], max_depth=2).urls_visited == 2


def test_starting_urls_required(fake_clock):
    crawler = make_crawler(MagicMock(), fake_clock)
    with pytest.raises(ValueError):
        crawler.crawl(None)


def test_parser_is_called_with_url():
    parser = MagicMock()
    parser.parse.return_value = ParseResult.empty()
    crawler = SequentialWebCrawler(
        parser=parser, timeout=timedelta(seconds=5), popular_word_count=1, max_depth=1
    )
    crawler.crawl(["http://example.com"])
    parser.parse.assert_called_once_with("http://example.com")

from datetime import timedelta

import pytest

from wordcrawl.exceptions import ConfigurationError
from wordcrawl.services.crawler_config_parser import CrawlerConfigParser


def test_parse_full_config():
    parser = CrawlerConfigParser()
    cfg = parser.parse({
        "startPages": ["http://example.com", "http://example.com/about"],
        "ignoredUrls": ["http://example\\.com/.*\\.pdf"],
        "ignoredWords": ["^.{1,3}$"],
        "parallelism": 4,
        "implementationOverride": "SequentialWebCrawler",
        "maxDepth": 10,
        "timeoutSeconds": 2,
        "popularWordCount": 3,
        "profileOutputPath": "profileData.txt",
        "resultPath": "crawlResults.json",
    })
    assert cfg.start_pages == ("http://example.com", "http://example.com/about")
    assert [p.pattern for p in cfg.ignored_urls] == ["http://example\\.com/.*\\.pdf"]
    assert [p.pattern for p in cfg.ignored_words] == ["^.{1,3}$"]
    assert cfg.parallelism == 4
    assert cfg.implementation_override == "SequentialWebCrawler"
    assert cfg.max_depth == 10
    assert cfg.timeout == timedelta(seconds=2)
    assert cfg.popular_word_count == 3
    assert cfg.profile_output_path == "profileData.txt"
    assert cfg.result_path == "crawlResults.json"


def test_parse_defaults_and_ignores_unknown_keys():
    cfg = CrawlerConfigParser().parse({"startPages": "http://example.com", "somethingElse": True})
    assert cfg.start_pages == ("http://example.com",)
    assert cfg.parallelism == -1
    assert cfg.max_depth == 0
    assert cfg.timeout == timedelta(seconds=1)
    assert cfg.implementation_override == ""


@pytest.mark.parametrize(
    "data",
    [
        {"maxDepth": -1},
        {"timeoutSeconds": 0},
        {"popularWordCount": -2},
        {"maxDepth": "deep"},
        {"parallelism": True},
        {"ignoredUrls": ["(unclosed"]},
        {"startPages": {"url": "http://example.com"}},
    ],
)
def test_invalid_values_raise_configuration_error(data):
    with pytest.raises(ConfigurationError):
        CrawlerConfigParser().parse(data)


def test_non_mapping_rejected():
    with pytest.raises(ConfigurationError):
        CrawlerConfigParser().parse(["startPages"])

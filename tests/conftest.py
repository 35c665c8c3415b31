import threading
from collections import Counter

import pytest

from wordcrawl.domain.parse_result import ParseResult, ParseResultBuilder


class FakeParser:
    """Deterministic parser backed by a {url: (words, links)} graph.

    Unknown URLs parse to an empty result, like an unreachable page.
    """

    def __init__(self, pages, on_parse=None):
        self.pages = pages
        self.on_parse = on_parse
        self.calls = Counter()
        self._lock = threading.Lock()

    def parse(self, url):
        with self._lock:
            self.calls[url] += 1
        if self.on_parse is not None:
            self.on_parse(url)
        if url not in self.pages:
            return ParseResult.empty()
        words, links = self.pages[url]
        builder = ParseResultBuilder()
        for word in words:
            builder.add_word(word)
        for link in links:
            builder.add_link(link)
        return builder.build()


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            return self.now

    def advance(self, seconds):
        with self._lock:
            self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_parser():
    def _make(pages, on_parse=None):
        return FakeParser(pages, on_parse=on_parse)
    return _make

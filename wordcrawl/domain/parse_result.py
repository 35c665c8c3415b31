from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple


class ParseResult(NamedTuple):
    """Words and outbound links extracted from a single document."""
    word_counts: Mapping[str, int]
    links: tuple[str, ...]

    @classmethod
    def empty(cls) -> "ParseResult":
        return cls(MappingProxyType({}), ())


class ParseResultBuilder:
    def __init__(self):
        self._word_counts: dict[str, int] = {}
        # dict keys keep the first-seen order of links while deduplicating
        self._links: dict[str, None] = {}

    def add_word(self, word: str) -> "ParseResultBuilder":
        if word is None:
            raise ValueError("word is required")
        self._word_counts[word] = self._word_counts.get(word, 0) + 1
        return self

    def add_link(self, link: str) -> "ParseResultBuilder":
        if link is None:
            raise ValueError("link is required")
        self._links[link] = None
        return self

    def build(self) -> ParseResult:
        return ParseResult(MappingProxyType(dict(self._word_counts)), tuple(self._links))

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable, Pattern


def compile_patterns(patterns: Iterable[str | Pattern[str]]) -> tuple[Pattern[str], ...]:
    # preserve order, drop duplicate pattern strings
    compiled: dict[str, Pattern[str]] = {}
    for p in patterns or ():
        pattern = p if isinstance(p, re.Pattern) else re.compile(p)
        compiled.setdefault(pattern.pattern, pattern)
    return tuple(compiled.values())


@dataclass(frozen=True)
class CrawlerConfig:
    """Crawl settings consumed by the crawlers, the parser and `main`.

    `parallelism` < 0 means "use the hardware concurrency". An empty
    `implementation_override` lets the crawler factory pick a strategy;
    empty output paths mean standard output.
    """

    start_pages: tuple[str, ...] = ()
    ignored_urls: tuple[Pattern[str], ...] = ()
    ignored_words: tuple[Pattern[str], ...] = ()
    parallelism: int = -1
    implementation_override: str = ""
    max_depth: int = 0
    timeout: timedelta = field(default=timedelta(seconds=1))
    popular_word_count: int = 0
    profile_output_path: str = ""
    result_path: str = ""

    def __post_init__(self):
        object.__setattr__(self, "start_pages", tuple(dict.fromkeys(self.start_pages or ())))
        object.__setattr__(self, "ignored_urls", compile_patterns(self.ignored_urls))
        object.__setattr__(self, "ignored_words", compile_patterns(self.ignored_words))
        if self.max_depth < 0:
            raise ValueError("max_depth cannot be negative")
        if self.timeout <= timedelta(0):
            raise ValueError("timeout must be positive")
        if self.popular_word_count < 0:
            raise ValueError("popular_word_count cannot be negative")

    def __repr__(self):
        return (
            f"<CrawlerConfig start_pages={len(self.start_pages)} max_depth={self.max_depth} "
            f"parallelism={self.parallelism} timeout={self.timeout}>"
        )

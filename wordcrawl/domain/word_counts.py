import threading
from typing import Mapping


class WordCountAccumulator:
    """Thread-safe word -> count mapping merged into by concurrent branches."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}

    def merge(self, word_counts: Mapping[str, int]) -> None:
        """Add every count from `word_counts` into the accumulator."""
        with self._lock:
            for word, count in word_counts.items():
                self._counts[word] = self._counts.get(word, 0) + count

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)

    def __bool__(self) -> bool:
        return len(self) > 0


def _popularity_key(item: tuple[str, int]) -> tuple[int, int, str]:
    word, count = item
    return (-count, -len(word), word)


def sort_word_counts(word_counts: Mapping[str, int], popular_word_count: int) -> dict[str, int]:
    """Return the `popular_word_count` most popular words, most popular first.

    Words are ordered by count (descending), then word length (descending),
    then alphabetically. The returned dict preserves that order.
    """
    if popular_word_count < 0:
        raise ValueError("popular_word_count cannot be negative")
    ranked = sorted(word_counts.items(), key=_popularity_key)
    return dict(ranked[:popular_word_count])

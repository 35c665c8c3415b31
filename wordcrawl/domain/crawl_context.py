from wordcrawl.domain.visited_tracker import VisitedTracker
from wordcrawl.domain.word_counts import WordCountAccumulator


class CrawlContext:
    """State of a single crawl run, shared by reference across all branches.

    `deadline` is fixed when the run starts. `visited` and `word_counts` are
    the only structures mutated concurrently; both lock internally.
    """

    def __init__(self, deadline: float):
        self.deadline = deadline
        self.visited = VisitedTracker()
        self.word_counts = WordCountAccumulator()

    def claim(self, url: str) -> bool:
        return self.visited.claim(url)

    def is_visited(self, url: str) -> bool:
        return self.visited.is_visited(url)

    @property
    def urls_visited(self) -> int:
        return len(self.visited)

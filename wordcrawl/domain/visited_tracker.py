import threading


class VisitedTracker:
    """
    Tracks which URLs have been claimed during a single crawl run.

    Shared by every traversal branch. `claim` is the only mutating operation
    and is atomic, so a URL is owned by exactly one branch. Entries are never
    evicted; the tracker lives for one crawl and is discarded afterwards.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: set[str] = set()

    def claim(self, url: str) -> bool:
        """Mark a URL as visited. Returns True only for the first caller."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been claimed."""
        with self._lock:
            return url in self._visited

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)

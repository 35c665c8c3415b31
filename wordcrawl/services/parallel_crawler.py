import logging
import os
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Iterable, Optional

from wordcrawl.domain.crawl_context import CrawlContext
from wordcrawl.services.crawler import BaseWebCrawler

logger = logging.getLogger(__name__)


def available_parallelism() -> int:
    return os.cpu_count() or 1


class _BranchNode:
    """Join counter for one branch: its own work plus one slot per child."""

    __slots__ = ("url", "depth", "parent", "_pending", "_lock")

    def __init__(self, url: Optional[str], depth: int, parent: Optional["_BranchNode"]):
        self.url = url
        self.depth = depth
        self.parent = parent
        self._pending = 1
        self._lock = threading.Lock()

    def add_child(self) -> None:
        with self._lock:
            self._pending += 1

    def release(self) -> bool:
        """Drop one outstanding slot; True when the branch and all children are done."""
        with self._lock:
            self._pending -= 1
            return self._pending == 0


class _ForkJoinRun:
    """Runs a branch tree on a thread pool without blocking workers on joins.

    A branch submits its children and returns; the last completing child
    completes the parent. The caller of `invoke` waits until the root
    completes. Queued tasks are bounded by the number of links discovered,
    i.e. O(visited nodes) times the out-degree.
    """

    def __init__(self, crawler: BaseWebCrawler, pool: Executor, context: CrawlContext):
        self._crawler = crawler
        self._pool = pool
        self._context = context
        self._done = threading.Event()
        self._error_lock = threading.Lock()
        self._error: Optional[BaseException] = None

    def invoke(self, starting_urls: Iterable[str], max_depth: int) -> None:
        root = _BranchNode(None, max_depth + 1, None)
        try:
            self._fork(root, starting_urls, max_depth)
        finally:
            self._complete(root)
        self._done.wait()
        if self._error is not None:
            raise self._error

    def _fork(self, parent: _BranchNode, urls: Iterable[str], depth: int) -> None:
        for url in urls:
            child = _BranchNode(url, depth, parent)
            parent.add_child()
            try:
                self._pool.submit(self._run, child)
            except RuntimeError:
                self._complete(child)
                raise

    def _run(self, node: _BranchNode) -> None:
        try:
            if self._error is not None:
                return
            links = self._crawler.visit(node.url, node.depth, self._context)
            if links:
                self._fork(node, links, node.depth - 1)
        except Exception as e:
            logger.error("Crawl branch failed for %s: %s", node.url, e, exc_info=True)
            with self._error_lock:
                if self._error is None:
                    self._error = e
        finally:
            self._complete(node)

    def _complete(self, node: _BranchNode) -> None:
        while node.release():
            if node.parent is None:
                self._done.set()
                return
            node = node.parent


class ParallelWebCrawler(BaseWebCrawler):
    """Fetches and processes many pages at once on a pool of worker threads.

    Uses the same per-branch rules as `SequentialWebCrawler`. Results match
    whenever the depth at which a page is first reached does not depend on
    visit order; otherwise the first branch to claim a page wins.
    """

    def __init__(self, *, parallelism: int, **kwargs):
        super().__init__(**kwargs)
        self.parallelism = max(1, min(int(parallelism), self.max_parallelism))

    @property
    def max_parallelism(self) -> int:
        return available_parallelism()

    def _traverse(self, starting_urls: list[str], max_depth: int, context: CrawlContext) -> None:
        with ThreadPoolExecutor(max_workers=self.parallelism, thread_name_prefix="crawler") as pool:
            _ForkJoinRun(self, pool, context).invoke(starting_urls, max_depth)

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, TextIO, Tuple

from wordcrawl.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class OperationStat:
    """Running totals for one (owner type, operation) pair."""

    total_duration: timedelta = timedelta(0)
    call_count: int = 0
    # keyed by (thread name, thread ident)
    thread_call_counts: Dict[Tuple[str, int], int] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add(self, elapsed: timedelta, worker: Tuple[str, int]) -> None:
        with self._lock:
            self.total_duration += elapsed
            self.call_count += 1
            self.thread_call_counts[worker] = self.thread_call_counts.get(worker, 0) + 1

    def snapshot(self) -> tuple[timedelta, int, Dict[Tuple[str, int], int]]:
        with self._lock:
            return self.total_duration, self.call_count, dict(self.thread_call_counts)


def _thread_label(name: str, ident: int, shared: Counter) -> str:
    # disambiguate distinct threads that share a name
    return name if shared[name] == 1 else f"{name} ({ident})"


def format_duration(duration: timedelta) -> str:
    millis = int(duration / timedelta(milliseconds=1))
    minutes, millis = divmod(millis, 60_000)
    seconds, millis = divmod(millis, 1000)
    return f"{minutes}m {seconds}s {millis}ms"


class ProfilingState:
    """Thread-safe store of latency statistics recorded by profiled proxies.

    Keys are `owner#operation`. Entries are created lazily on first record and
    never removed, so `export` can run alongside `record` without locking the
    whole registry.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._data: Dict[str, OperationStat] = {}

    @staticmethod
    def format_key(owner_type: str, operation_name: str) -> str:
        return f"{owner_type}#{operation_name}"

    def record(self, owner_type: str, operation_name: str, elapsed: timedelta) -> None:
        if not owner_type or not operation_name:
            raise ValueError("owner_type and operation_name are required")
        if elapsed is None:
            raise ValueError("elapsed is required")
        if elapsed < timedelta(0):
            raise ConfigurationError(f"negative elapsed time for {owner_type}#{operation_name}: {elapsed}")

        key = self.format_key(owner_type, operation_name)
        with self._lock:
            stat = self._data.get(key)
            if stat is None:
                stat = self._data[key] = OperationStat()
        current = threading.current_thread()
        stat.add(elapsed, (current.name, current.ident))

    def export(self) -> List[str]:
        with self._lock:
            entries = sorted(self._data.items())
        return [self._format_entry(key, stat) for key, stat in entries]

    def write(self, writer: TextIO) -> None:
        for entry in self.export():
            writer.write(entry)
            writer.write("\n")

    @staticmethod
    def _format_entry(key: str, stat: OperationStat) -> str:
        total, count, thread_counts = stat.snapshot()
        average = total / count if count else timedelta(0)
        shared = Counter(name for name, _ in thread_counts)
        threads = ", ".join(
            f"{_thread_label(name, ident, shared)}: {calls} calls"
            for (name, ident), calls in sorted(thread_counts.items())
        )
        return (
            f"{key} took {format_duration(average)} on average over {count} calls. "
            f"Thread call counts: [{threads}]"
        )

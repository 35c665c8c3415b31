import logging
import time
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, TextIO, TypeVar

from wordcrawl.profiler.state import ProfilingState
from wordcrawl.profiler.wrapper import ProfiledProxy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Profiler:
    """Wraps components to measure their operations and writes the collected statistics.

    One `Profiler` owns one `ProfilingState`; every proxy it creates records
    into that state.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter, now: Optional[Callable[[], datetime]] = None):
        self._clock = clock
        self._state = ProfilingState()
        self._start_time = (now or (lambda: datetime.now(timezone.utc)))()

    @property
    def state(self) -> ProfilingState:
        return self._state

    def wrap(self, delegate: T, measured_operations: Iterable[str]) -> T:
        """Return a proxy for `delegate` that times the named operations.

        Raises `ConfigurationError` if no operation is named, or a name is
        not a callable attribute of `delegate`.
        """
        proxy: Any = ProfiledProxy(delegate, measured_operations, clock=self._clock, state=self._state)
        logger.debug("Profiling %r", proxy)
        return proxy

    def write_data(self, path) -> None:
        """Append the profiling data to the file at `path`, creating it if needed."""
        path = Path(path)
        with path.open("a", encoding="utf-8") as writer:
            self.write_to(writer)
        logger.info("Wrote profiling data to %s", path)

    def write_to(self, writer: TextIO) -> None:
        writer.write("Run at " + format_datetime(self._start_time.astimezone(timezone.utc), usegmt=True))
        writer.write("\n")
        self._state.write(writer)
        writer.write("\n")

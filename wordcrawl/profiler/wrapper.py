from __future__ import annotations

import functools
import logging
from datetime import timedelta
from typing import Any, Callable, Dict, Iterable

from wordcrawl.exceptions import ConfigurationError
from wordcrawl.profiler.state import ProfilingState

logger = logging.getLogger(__name__)


def owner_name(delegate: Any) -> str:
    cls = type(delegate)
    return f"{cls.__module__}.{cls.__qualname__}"


class ProfiledProxy:
    """Stands in for `delegate`, timing calls to the measured operations.

    The measured operations are resolved to bound methods once, at
    construction. Every other attribute is forwarded to the delegate as is,
    and so are `len`, iteration, `in` and truthiness. Other special methods
    are looked up on the proxy type and are not forwarded.
    """

    def __init__(
        self,
        delegate: Any,
        measured_operations: Iterable[str],
        *,
        clock: Callable[[], float],
        state: ProfilingState,
    ):
        if delegate is None:
            raise ValueError("delegate is required")
        operations = frozenset(measured_operations or ())
        if not operations:
            raise ConfigurationError(f"{owner_name(delegate)} has no measured operations")

        owner = owner_name(delegate)
        measured: Dict[str, Callable] = {}
        for name in sorted(operations):
            target = getattr(delegate, name, None)
            if not callable(target):
                raise ConfigurationError(f"{owner} has no operation named {name!r}")
            measured[name] = self._measure(owner, name, target, clock, state)

        object.__setattr__(self, "_delegate", delegate)
        object.__setattr__(self, "_measured", measured)

    @staticmethod
    def _measure(owner: str, name: str, target: Callable, clock: Callable[[], float], state: ProfilingState) -> Callable:
        @functools.wraps(target)
        def measured_call(*args, **kwargs):
            start = clock()
            try:
                return target(*args, **kwargs)
            finally:
                elapsed = clock() - start
                if elapsed < 0:
                    raise ConfigurationError(f"clock went backwards while timing {owner}#{name}")
                state.record(owner, name, timedelta(seconds=elapsed))

        return measured_call

    @property
    def measured_operations(self) -> frozenset:
        return frozenset(self._measured)

    def __getattr__(self, name: str) -> Any:
        measured = self.__dict__.get("_measured", {})
        if name in measured:
            return measured[name]
        return getattr(self.__dict__["_delegate"], name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._delegate, name, value)

    def __len__(self):
        return len(self._delegate)

    def __iter__(self):
        return iter(self._delegate)

    def __contains__(self, item):
        return item in self._delegate

    def __bool__(self):
        return bool(self._delegate)

    def __repr__(self):
        return f"<ProfiledProxy {owner_name(self._delegate)} measuring {sorted(self._measured)}>"

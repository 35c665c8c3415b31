from .profiler import Profiler
from .state import OperationStat, ProfilingState
from .wrapper import ProfiledProxy

__all__ = ["Profiler", "OperationStat", "ProfilingState", "ProfiledProxy"]

"""Host capabilities consumed when applying a plan."""

from .apply import ApplyReport, IntentResult, apply
from .base import HostCapabilities
from .local import LocalHost
from .memory import MemoryHost

__all__ = [
    "ApplyReport",
    "HostCapabilities",
    "IntentResult",
    "LocalHost",
    "MemoryHost",
    "apply",
]

"""proctab - process and system resource snapshots from /proc."""

__version__ = "0.1.0"

from .collectors import (
    OwnerResolver,
    ProctabCollector,
    collect_cputime,
    collect_loadavg,
    collect_memusage,
    collect_proctab,
)
from .exceptions import (
    FieldNotFound,
    InterfaceUnavailable,
    OptionalSourceMissing,
    ProcfsError,
    RowUnavailable,
)
from .models import (
    CpuTime,
    MemoryUsage,
    ProcessIO,
    ProcessOwner,
    ProcessSnapshot,
    ProcessStat,
    RowResult,
    SystemLoad,
)
from .procfs import ProcFS

__all__ = [
    "__version__",
    "collect_cputime",
    "collect_loadavg",
    "collect_memusage",
    "collect_proctab",
    "CpuTime",
    "FieldNotFound",
    "InterfaceUnavailable",
    "MemoryUsage",
    "OptionalSourceMissing",
    "OwnerResolver",
    "ProcessIO",
    "ProcessOwner",
    "ProcessSnapshot",
    "ProcessStat",
    "ProcFS",
    "ProcfsError",
    "ProctabCollector",
    "RowResult",
    "RowUnavailable",
    "SystemLoad",
]

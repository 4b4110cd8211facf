"""Data models for proctab snapshots."""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

from .exceptions import ProcfsError


@dataclass(slots=True, frozen=True)
class ProcessStat:
    """Positional fields of /proc/<pid>/stat."""

    pid: int
    comm: str
    state: str  # 'R', 'S', 'D', 'Z', 'T', ...
    ppid: int
    pgrp: int
    session: int
    tty_nr: int
    tpgid: int
    flags: int
    minflt: int
    cminflt: int
    majflt: int
    cmajflt: int
    utime: int  # Clock ticks
    stime: int
    cutime: int
    cstime: int
    priority: int
    nice: int
    num_threads: int
    itrealvalue: int
    starttime: int  # Clock ticks since boot
    vsize: int  # Bytes
    rss: int  # Pages
    exit_signal: int
    processor: int
    rt_priority: int
    policy: int
    delayacct_blkio_ticks: Optional[int] = None  # Not emitted by older kernels

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class ProcessIO:
    """I/O accounting counters from /proc/<pid>/io."""

    rchar: int = 0
    wchar: int = 0
    syscr: int = 0
    syscw: int = 0
    read_bytes: int = 0
    write_bytes: int = 0
    cancelled_write_bytes: int = 0
    available: bool = True

    @classmethod
    def zeros(cls) -> "ProcessIO":
        """Counters substituted when I/O accounting is not available."""
        return cls(available=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class ProcessOwner:
    """Owner of a process, resolved through the passwd database."""

    uid: Optional[int] = None
    username: Optional[str] = None

    @property
    def known(self) -> bool:
        return self.uid is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class ProcessSnapshot:
    """
    Immutable point-in-time row for one process.

    Attributes of the stat, io and owner parts are also reachable directly on
    the snapshot, so ``snapshot.utime`` is ``snapshot.stat.utime``.
    """

    stat: ProcessStat
    io: ProcessIO
    owner: ProcessOwner
    cmdline: Optional[str] = None

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails, i.e. for delegated fields
        for part in ("stat", "io", "owner"):
            record = object.__getattribute__(self, part)
            if name in _field_names(record):
                return getattr(record, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the snapshot into one column per field."""
        row: Dict[str, Any] = self.stat.to_dict()
        row["cmdline"] = self.cmdline
        row.update(self.owner.to_dict())
        io = self.io.to_dict()
        io["io_available"] = io.pop("available")
        row.update(io)
        return row


@dataclass(slots=True, frozen=True)
class SystemLoad:
    """Load averages from /proc/loadavg."""

    load1: float
    load5: float
    load15: float
    last_pid: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class MemoryUsage:
    """Aggregate memory usage from /proc/meminfo, in kilobytes."""

    memtotal: int
    memused: int
    memfree: int
    memshared: int
    membuffers: int
    memcached: int
    swaptotal: int
    swapused: int
    swapfree: int
    swapcached: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class CpuTime:
    """Aggregate CPU time in state from the first line of /proc/stat, in ticks."""

    user: int
    nice: int
    system: int
    idle: int
    iowait: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class RowResult:
    """Outcome of collecting one pid: either a snapshot or the reason it is absent."""

    pid: int
    snapshot: Optional[ProcessSnapshot] = None
    error: Optional[str] = None
    exception: Optional[ProcfsError] = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return self.snapshot is not None

    @property
    def error_type(self) -> Optional[str]:
        """Class name of the failure, e.g. 'RowUnavailable' or 'FieldNotFound'."""
        if self.exception is None:
            return None
        return type(self.exception).__name__


def _field_names(record: Any) -> frozenset:
    return _FIELD_NAMES[type(record)]


_FIELD_NAMES = {
    cls: frozenset(f.name for f in fields(cls))
    for cls in (ProcessStat, ProcessIO, ProcessOwner)
}

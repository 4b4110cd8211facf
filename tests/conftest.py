"""Shared fixtures: a fake /proc tree built under tmp_path."""

from pathlib import Path
from typing import Optional

import pytest

from proctab.procfs import ProcFS

# Fields after the state, up to and including rss
LEADING = "1 {pid} {pid} 34816 {pid} 4194304 100 200 3 4 50 60 7 8 20 0 4 0 12345 1048576 256"
# rsslim startcode endcode startstack kstkesp kstkeip signal blocked sigignore sigcatch wchan nswap cnswap
SKIPPED = "18446744073709551615 94000000 94100000 140000000 0 0 0 0 4096 134234627 0 0 0"
# exit_signal processor rt_priority policy
TAIL = "17 2 0 0"
# delayacct_blkio_ticks followed by the fields added in later kernels
NEWER = "5 0 0 94200000 94300000 94400000 140100000 140200000 140200000 140300000 0"

MEMINFO = """\
MemTotal:       16314188 kB
MemFree:         8123456 kB
MemAvailable:   12000000 kB
Buffers:          345678 kB
Cached:          4567890 kB
SwapCached:         1024 kB
Active:          5000000 kB
SwapTotal:       2097148 kB
SwapFree:        2000000 kB
"""

LOADAVG = "0.52 0.58 0.59 2/1234 56789\n"

CPU_STAT = """\
cpu  10132153 290696 3084719 46828483 16683 0 25195 0 0 0
cpu0 1393280 32966 572056 13343292 6130 0 17875 0 0 0
intr 1462898 0 0
"""

IO = """\
rchar: 323934931
wchar: 323929600
syscr: 632687
syscw: 632675
read_bytes: 4096
write_bytes: 323932160
cancelled_write_bytes: 12
"""


def stat_line(pid: int, comm: str = "postgres", state: str = "S", tail: str = TAIL, newer: Optional[str] = NEWER) -> str:
    """Build a /proc/<pid>/stat line."""
    parts = [f"{pid} ({comm}) {state}", LEADING.format(pid=pid), SKIPPED, tail]
    if newer:
        parts.append(newer)
    return " ".join(parts) + "\n"


def add_process(
    root: Path,
    pid: int,
    comm: str = "postgres",
    cmdline: Optional[bytes] = b"postgres: writer process\0",
    io: Optional[str] = IO,
    stat: Optional[str] = None,
) -> Path:
    """Create /proc/<pid> with stat, and optionally cmdline and io."""
    proc_dir = root / str(pid)
    proc_dir.mkdir()
    (proc_dir / "stat").write_text(stat if stat is not None else stat_line(pid, comm))
    if cmdline is not None:
        (proc_dir / "cmdline").write_bytes(cmdline)
    if io is not None:
        (proc_dir / "io").write_text(io)
    return proc_dir


@pytest.fixture
def proc_root(tmp_path: Path) -> Path:
    """A fake /proc with the system-wide files in place."""
    root = tmp_path / "proc"
    root.mkdir()
    (root / "loadavg").write_text(LOADAVG)
    (root / "meminfo").write_text(MEMINFO)
    (root / "stat").write_text(CPU_STAT)
    return root


@pytest.fixture
def procfs(proc_root: Path) -> ProcFS:
    """ProcFS over the fake tree, without the mount type check."""
    return ProcFS(proc_root, verify_mount=False)

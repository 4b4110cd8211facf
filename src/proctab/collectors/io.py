"""Per-process I/O accounting collector (/proc/<pid>/io)."""

import logging
from typing import Dict

from ..exceptions import FieldNotFound, OptionalSourceMissing
from ..models import ProcessIO
from ..procfs import ProcFS
from ..tokenizer import BIGINT_LEN, next_field

logger = logging.getLogger(__name__)

IO_LABELS = (
    "rchar",
    "wchar",
    "syscr",
    "syscw",
    "read_bytes",
    "write_bytes",
    "cancelled_write_bytes",
)


def _read_value(text: str, pos: int, label: str) -> tuple[int, int]:
    found, pos = next_field(text, pos, ":", name=label)
    if found.strip() != label:
        raise FieldNotFound(label, "io")

    # Exactly one separator follows the colon
    pos += 1
    end = text.find("\n", pos)
    if end == -1:
        end = len(text)
    if pos >= end:
        raise FieldNotFound(label, "io")

    value = text[pos:end][:BIGINT_LEN]
    if not value.isdigit():
        raise FieldNotFound(label, "io")
    return int(value), end + 1


def parse_io(text: str) -> ProcessIO:
    """
    Parse the contents of /proc/<pid>/io.

    Raises:
        FieldNotFound: If a label is missing or out of order
    """
    values: Dict[str, int] = {}
    pos = 0
    for label in IO_LABELS:
        values[label], pos = _read_value(text, pos, label)
    return ProcessIO(**values)


def _read_io(procfs: ProcFS, pid: int) -> str:
    try:
        return procfs.read_text(pid, "io")
    except OSError as e:
        raise OptionalSourceMissing(str(procfs.path(pid, "io"))) from e


def collect_io(procfs: ProcFS, pid: int) -> ProcessIO:
    """
    Collect I/O accounting for one process.

    The io file only exists when the kernel has task I/O accounting enabled,
    and is only readable by the process owner, so a missing file yields
    zeroed counters instead of an error.

    Raises:
        FieldNotFound: If the file exists but is malformed
    """
    try:
        text = _read_io(procfs, pid)
    except OptionalSourceMissing as e:
        logger.debug(f"i/o stats collection not available: {e.path}")
        return ProcessIO.zeros()

    return parse_io(text)

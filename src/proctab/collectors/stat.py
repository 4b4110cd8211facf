"""Per-process status line collector (/proc/<pid>/stat).

For the layout of the line see the description of /proc/PID/stat in
Documentation/filesystems/proc.rst in the Linux source tree.
"""

import logging
from typing import Dict

from ..exceptions import FieldNotFound, RowUnavailable
from ..models import ProcessStat
from ..procfs import ProcFS
from ..tokenizer import (
    BIGINT_LEN,
    COMM_LEN,
    INTEGER_LEN,
    has_more_fields,
    next_field,
    next_tail_field,
    skip_token,
)

logger = logging.getLogger(__name__)

# Space-delimited fields between the state and the placeholder block
_LEADING_FIELDS = (
    ("ppid", INTEGER_LEN),
    ("pgrp", INTEGER_LEN),
    ("session", INTEGER_LEN),
    ("tty_nr", INTEGER_LEN),
    ("tpgid", INTEGER_LEN),
    ("flags", INTEGER_LEN),
    ("minflt", BIGINT_LEN),
    ("cminflt", BIGINT_LEN),
    ("majflt", BIGINT_LEN),
    ("cmajflt", BIGINT_LEN),
    ("utime", BIGINT_LEN),
    ("stime", BIGINT_LEN),
    ("cutime", BIGINT_LEN),
    ("cstime", BIGINT_LEN),
    ("priority", BIGINT_LEN),
    ("nice", BIGINT_LEN),
    ("num_threads", BIGINT_LEN),
    ("itrealvalue", BIGINT_LEN),
    ("starttime", BIGINT_LEN),
    ("vsize", BIGINT_LEN),
    ("rss", BIGINT_LEN),
)

# rsslim, startcode, endcode, startstack, kstkesp, kstkeip, signal, blocked,
# sigignore, sigcatch (obsolete), wchan, nswap, cnswap (place holders)
_SKIPPED_FIELDS = 13

# Fields whose count after the placeholder block depends on the kernel version
_TAIL_FIELDS = (
    ("exit_signal", INTEGER_LEN),
    ("processor", INTEGER_LEN),
    ("rt_priority", BIGINT_LEN),
    ("policy", BIGINT_LEN),
)


def _to_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise FieldNotFound(name, "stat") from None


def _read_comm(text: str, pos: int) -> tuple[str, int]:
    """
    Extract the name between the '(' at ``pos`` and the last ')' in the record.

    The name is chosen by the process and may itself contain spaces,
    parentheses and newlines, so it cannot be split on a delimiter. The
    stat file holds a single record, so the last ')' anywhere closes it.
    """
    if pos >= len(text) or text[pos] != "(":
        raise FieldNotFound("comm", "stat")

    close = text.rfind(")", pos + 1)
    if close == -1:
        raise FieldNotFound("comm", "stat")

    comm = text[pos + 1:close][:COMM_LEN]
    # Skip ") "
    return comm, close + 2


def parse_stat(text: str) -> ProcessStat:
    """
    Parse the contents of /proc/<pid>/stat.

    Args:
        text: Raw status line

    Returns:
        ProcessStat with every positional field the kernel reports

    Raises:
        FieldNotFound: If an expected field cannot be located
    """
    values: Dict[str, object] = {}

    value, pos = next_field(text, 0, " ", INTEGER_LEN, "pid")
    values["pid"] = _to_int(value, "pid")

    values["comm"], pos = _read_comm(text, pos)

    if pos >= len(text) or text[pos].isspace():
        raise FieldNotFound("state", "stat")
    values["state"] = text[pos]
    pos += 2

    for name, limit in _LEADING_FIELDS:
        value, pos = next_field(text, pos, " ", limit, name)
        values[name] = _to_int(value, name)

    for _ in range(_SKIPPED_FIELDS):
        pos = skip_token(text, pos)

    for name, limit in _TAIL_FIELDS:
        value, pos = next_tail_field(text, pos, limit, name)
        values[name] = _to_int(value, name)

    # delayacct_blkio_ticks is the last field on some kernels, followed by
    # more fields on newer ones, and missing on older ones.
    if has_more_fields(text, pos):
        value, pos = next_tail_field(text, pos, BIGINT_LEN, "delayacct_blkio_ticks")
        values["delayacct_blkio_ticks"] = _to_int(value, "delayacct_blkio_ticks")
    else:
        values["delayacct_blkio_ticks"] = None

    stat = ProcessStat(**values)
    logger.debug(f"pid {stat.pid}: comm = {stat.comm!r}, state = {stat.state}")
    return stat


def collect_stat(procfs: ProcFS, pid: int) -> ProcessStat:
    """
    Read and parse the status line of one process.

    Raises:
        RowUnavailable: If the process is gone or its status file is unreadable
        FieldNotFound: If the status line is malformed
    """
    try:
        text = procfs.read_text(pid, "stat")
    except OSError as e:
        raise RowUnavailable(pid, f"stat not readable: {e.strerror or e}") from e

    stat = parse_stat(text)
    if stat.pid != pid:
        raise RowUnavailable(pid, f"stat reports pid {stat.pid}")
    return stat

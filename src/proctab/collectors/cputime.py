"""Aggregate CPU time collector (first line of /proc/stat)."""

import logging
from typing import Dict, Optional

from ..exceptions import FieldNotFound, InterfaceUnavailable
from ..models import CpuTime
from ..procfs import ProcFS
from ..tokenizer import BIGINT_LEN, next_field, next_tail_field, skip_token

logger = logging.getLogger(__name__)


def parse_cpu_stat(text: str) -> CpuTime:
    """
    Parse the aggregate "cpu" line of /proc/stat.

    Only user, nice, system, idle and iowait are read. iowait is the last
    field on 2.5 kernels and is followed by irq, softirq, ... on later ones.

    Raises:
        FieldNotFound: If the line does not start with "cpu" or a field is missing
    """
    if not text.startswith("cpu"):
        raise FieldNotFound("cpu", "stat")

    pos = skip_token(text, 0)  # cpu

    values: Dict[str, int] = {}
    for name in ("user", "nice", "system", "idle"):
        value, pos = next_field(text, pos, " ", BIGINT_LEN, name)
        values[name] = _to_int(value, name)

    value, pos = next_tail_field(text, pos, BIGINT_LEN, "iowait")
    values["iowait"] = _to_int(value, "iowait")

    cputime = CpuTime(**values)
    logger.debug(f"cputime: {cputime}")
    return cputime


def _to_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise FieldNotFound(name, "stat") from None


def collect_cputime(procfs: Optional[ProcFS] = None) -> CpuTime:
    """
    Collect CPU time in state summed over all processors.

    Raises:
        InterfaceUnavailable: If /proc is not mounted or stat is unreadable
        FieldNotFound: If the file is malformed
    """
    procfs = procfs or ProcFS()
    procfs.check_mounted()

    try:
        text = procfs.read_text("stat")
    except OSError as e:
        raise InterfaceUnavailable(str(procfs.root), f"stat not readable ({e.strerror or e})") from e

    return parse_cpu_stat(text)

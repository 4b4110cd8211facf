"""Memory usage collector (/proc/meminfo)."""

import logging
from typing import Dict, Optional

from ..exceptions import FieldNotFound, InterfaceUnavailable
from ..models import MemoryUsage
from ..procfs import ProcFS
from ..tokenizer import BIGINT_LEN, next_field

logger = logging.getLogger(__name__)

# meminfo label -> accumulator key
MEMINFO_LABELS = {
    "MemTotal": "memtotal",
    "MemFree": "memfree",
    "MemShared": "memshared",
    "Buffers": "membuffers",
    "Cached": "memcached",
    "SwapTotal": "swaptotal",
    "SwapFree": "swapfree",
    "SwapCached": "swapcached",
}

REQUIRED_LABELS = ("MemTotal", "MemFree")


def parse_meminfo(text: str) -> MemoryUsage:
    """
    Parse the contents of /proc/meminfo.

    Labels may appear in any order and unknown labels are ignored. Used
    memory and used swap are derived once the whole file has been read.
    MemShared is no longer reported by current kernels and stays 0.

    Raises:
        FieldNotFound: If MemTotal or MemFree is missing, or a value is not numeric
    """
    counters: Dict[str, int] = dict.fromkeys(MEMINFO_LABELS.values(), 0)
    seen = set()

    for line in text.splitlines():
        try:
            label, pos = next_field(line, 0, ":", name="label")
        except FieldNotFound:
            continue

        key = MEMINFO_LABELS.get(label)
        if key is None:
            continue

        tokens = line[pos:].split()
        if not tokens or not tokens[0].isdigit():
            raise FieldNotFound(label, "meminfo")
        counters[key] = int(tokens[0][:BIGINT_LEN])
        seen.add(label)
        logger.debug(f"meminfo: {label} = {counters[key]}")

    for label in REQUIRED_LABELS:
        if label not in seen:
            raise FieldNotFound(label, "meminfo")

    return MemoryUsage(
        memtotal=counters["memtotal"],
        memused=max(counters["memtotal"] - counters["memfree"], 0),
        memfree=counters["memfree"],
        memshared=counters["memshared"],
        membuffers=counters["membuffers"],
        memcached=counters["memcached"],
        swaptotal=counters["swaptotal"],
        swapused=max(counters["swaptotal"] - counters["swapfree"], 0),
        swapfree=counters["swapfree"],
        swapcached=counters["swapcached"],
    )


def collect_memusage(procfs: Optional[ProcFS] = None) -> MemoryUsage:
    """
    Collect aggregate memory and swap usage.

    Raises:
        InterfaceUnavailable: If /proc is not mounted or meminfo is unreadable
        FieldNotFound: If the file is malformed
    """
    procfs = procfs or ProcFS()
    procfs.check_mounted()

    try:
        text = procfs.read_text("meminfo")
    except OSError as e:
        raise InterfaceUnavailable(str(procfs.root), f"meminfo not readable ({e.strerror or e})") from e

    return parse_meminfo(text)

"""Load average collector (/proc/loadavg)."""

import logging
from typing import Optional

from ..exceptions import FieldNotFound, InterfaceUnavailable
from ..models import SystemLoad
from ..procfs import ProcFS
from ..tokenizer import FLOAT_LEN, INTEGER_LEN, next_field, next_tail_field, skip_token

logger = logging.getLogger(__name__)


def parse_loadavg(text: str) -> SystemLoad:
    """
    Parse the contents of /proc/loadavg.

    The line holds the 1, 5 and 15 minute load averages, a running/total
    task count and the most recently allocated pid.

    Raises:
        FieldNotFound: If a field is missing or not numeric
    """
    loads = []
    pos = 0
    for name in ("load1", "load5", "load15"):
        value, pos = next_field(text, pos, " ", FLOAT_LEN, name)
        try:
            loads.append(float(value))
        except ValueError:
            raise FieldNotFound(name, "loadavg") from None

    pos = skip_token(text, pos)  # running/tasks

    # last_pid is the last item on most kernels but not all, so check for a
    # following space before deciding how it is delimited.
    value, pos = next_tail_field(text, pos, INTEGER_LEN, "last_pid")
    try:
        last_pid = int(value)
    except ValueError:
        raise FieldNotFound("last_pid", "loadavg") from None

    load = SystemLoad(load1=loads[0], load5=loads[1], load15=loads[2], last_pid=last_pid)
    logger.debug(f"loadavg: {load}")
    return load


def collect_loadavg(procfs: Optional[ProcFS] = None) -> SystemLoad:
    """
    Collect the system load averages.

    Raises:
        InterfaceUnavailable: If /proc is not mounted or loadavg is unreadable
        FieldNotFound: If the file is malformed
    """
    procfs = procfs or ProcFS()
    procfs.check_mounted()

    try:
        text = procfs.read_text("loadavg")
    except OSError as e:
        raise InterfaceUnavailable(str(procfs.root), f"loadavg not readable ({e.strerror or e})") from e

    return parse_loadavg(text)

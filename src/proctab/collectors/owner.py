"""Process identity collector: owner, user name and full command line."""

import logging
import pwd
import threading
import time
from typing import Dict, Optional, Tuple

from ..models import ProcessOwner
from ..procfs import ProcFS
from ..tokenizer import FULLCOMM_LEN

logger = logging.getLogger(__name__)


class OwnerResolver:
    """
    Resolves numeric user ids to user names.

    Lookups go through a read-through cache keyed by uid. Entries expire
    after ``ttl`` seconds so renamed or newly created accounts are picked up
    on a later snapshot cycle.
    """

    def __init__(self, ttl: float = 300.0):
        self.ttl = ttl
        self._cache: Dict[int, Tuple[Optional[str], float]] = {}
        self._lock = threading.Lock()

    def lookup(self, uid: int) -> Optional[str]:
        """Return the user name for ``uid``, or None if it has no passwd entry."""
        now = time.monotonic()
        with self._lock:
            cached = self._cache.get(uid)
            if cached is not None and now - cached[1] < self.ttl:
                return cached[0]

        try:
            username: Optional[str] = pwd.getpwuid(uid).pw_name
        except KeyError:
            username = None

        with self._lock:
            self._cache[uid] = (username, now)
        return username

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


def collect_owner(procfs: ProcFS, pid: int, resolver: OwnerResolver) -> ProcessOwner:
    """
    Collect the owner of a process.

    Returns an unknown owner when the process directory cannot be examined.
    """
    try:
        uid = procfs.owner_uid(pid)
    except OSError as e:
        logger.debug(f"pid {pid}: owner not readable: {e}")
        return ProcessOwner()

    return ProcessOwner(uid=uid, username=resolver.lookup(uid))


def parse_cmdline(data: bytes) -> str:
    """
    Convert a NUL-separated argument blob into a display string.

    Arguments are joined with single spaces; the result is bounded to
    FULLCOMM_LEN characters.
    """
    args = data.rstrip(b"\0").split(b"\0")
    text = " ".join(arg.decode("utf-8", errors="replace") for arg in args)
    return text[:FULLCOMM_LEN]


def collect_cmdline(procfs: ProcFS, pid: int) -> Optional[str]:
    """
    Collect the full command line of a process.

    Kernel threads have an empty command line, which is returned as "".
    None means the file could not be read.
    """
    try:
        data = procfs.read_bytes(pid, "cmdline", limit=FULLCOMM_LEN)
    except OSError as e:
        logger.debug(f"pid {pid}: cmdline not readable: {e}")
        return None

    return parse_cmdline(data)

"""Process table collector: one snapshot row per requested pid."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Optional

from ..exceptions import FieldNotFound, RowUnavailable
from ..models import ProcessSnapshot, RowResult
from ..procfs import ProcFS
from .io import collect_io
from .owner import OwnerResolver, collect_cmdline, collect_owner
from .pids import list_pids
from .stat import collect_stat

logger = logging.getLogger(__name__)


class ProctabCollector:
    """
    Builds ProcessSnapshot rows from /proc.

    A pid that disappears while it is being read only loses its own row;
    the rest of the batch is still collected. With ``max_workers`` above 1
    the per-pid reads run on a thread pool, and rows are still returned in
    the order the pids were given.
    """

    def __init__(
        self,
        procfs: Optional[ProcFS] = None,
        owner_resolver: Optional[OwnerResolver] = None,
        max_workers: int = 1,
    ) -> None:
        self.procfs = procfs or ProcFS()
        self.owner_resolver = owner_resolver or OwnerResolver()
        self.max_workers = max(1, max_workers)

    def snapshot(self, pid: int) -> ProcessSnapshot:
        """
        Collect one process.

        Raises:
            RowUnavailable: If the status line cannot be read
            FieldNotFound: If the status or io file is malformed
        """
        cmdline = collect_cmdline(self.procfs, pid)
        owner = collect_owner(self.procfs, pid, self.owner_resolver)
        stat = collect_stat(self.procfs, pid)
        io = collect_io(self.procfs, pid)
        return ProcessSnapshot(stat=stat, io=io, owner=owner, cmdline=cmdline)

    def _result(self, pid: int) -> RowResult:
        try:
            return RowResult(pid=pid, snapshot=self.snapshot(pid))
        except (RowUnavailable, FieldNotFound) as e:
            logger.warning(f"Skipping pid {pid}: {e}")
            return RowResult(pid=pid, error=str(e), exception=e)

    def results(self, pids: Iterable[int]) -> Iterator[RowResult]:
        """
        Collect every pid, yielding one RowResult per pid in input order.

        Raises:
            InterfaceUnavailable: If /proc is not mounted; nothing is yielded
        """
        pids = list(pids)
        self.procfs.check_mounted()
        logger.debug(f"Collecting {len(pids)} process(es) from {self.procfs.root}")

        if self.max_workers == 1 or len(pids) < 2:
            for pid in pids:
                yield self._result(pid)
            return

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="proctab") as executor:
            yield from executor.map(self._result, pids)

    def collect(self, pids: Iterable[int]) -> List[ProcessSnapshot]:
        """
        Collect the pids that could be read, in input order.

        Raises:
            InterfaceUnavailable: If /proc is not mounted
        """
        return [result.snapshot for result in self.results(pids) if result.ok]


def collect_proctab(
    pids: Optional[Iterable[int]] = None,
    procfs: Optional[ProcFS] = None,
    max_workers: int = 1,
    owner_resolver: Optional[OwnerResolver] = None,
) -> List[ProcessSnapshot]:
    """
    Collect a snapshot row for each pid.

    Args:
        pids: Process ids to inspect (default: every running process)
        procfs: /proc mount to read (default: /proc)
        max_workers: Number of pids read concurrently (default: 1)
        owner_resolver: Shared uid to user name cache

    Returns:
        List of ProcessSnapshot, one per pid still present, in input order
    """
    if pids is None:
        pids = list_pids(procfs_root=procfs.root if procfs is not None else None)

    collector = ProctabCollector(procfs, owner_resolver, max_workers)
    return collector.collect(pids)

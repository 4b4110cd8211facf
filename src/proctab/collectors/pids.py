"""Process id source."""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Union

import psutil

# psutil reads its proc mount from a module global
_procfs_path_lock = threading.Lock()


@contextmanager
def _procfs_path(root: Optional[Union[str, Path]]) -> Iterator[None]:
    if root is None:
        yield
        return

    with _procfs_path_lock:
        previous = psutil.PROCFS_PATH
        psutil.PROCFS_PATH = str(root)
        try:
            yield
        finally:
            psutil.PROCFS_PATH = previous


def list_pids(
    name: Optional[str] = None,
    procfs_root: Optional[Union[str, Path]] = None,
) -> List[int]:
    """
    List the ids of running processes.

    Args:
        name: Only include processes whose name equals this (default: all)
        procfs_root: proc mount to list (default: psutil's, normally /proc)

    Returns:
        Sorted list of process ids
    """
    with _procfs_path(procfs_root):
        if name is None:
            return sorted(psutil.pids())

        pids = []
        for proc in psutil.process_iter(["pid", "name"]):
            try:
                if proc.info["name"] == name:
                    pids.append(proc.info["pid"])
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                # Process disappeared or we don't have permission
                continue

    return sorted(pids)

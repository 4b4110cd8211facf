"""Access to the kernel's process information pseudo-filesystem."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import psutil

from .exceptions import InterfaceUnavailable

logger = logging.getLogger(__name__)

PROCFS = "/proc"
PROC_FSTYPE = "proc"


class ProcFS:
    """
    Read-only view of a /proc mount.

    Every read opens, reads and closes one file; nothing is cached between
    calls so each read reflects the kernel's current state.
    """

    def __init__(self, root: Union[str, Path] = PROCFS, verify_mount: bool = True):
        self.root = Path(root)
        self.verify_mount = verify_mount

    def __repr__(self) -> str:
        return f"ProcFS(root={str(self.root)!r}, verify_mount={self.verify_mount})"

    def path(self, *parts: Union[str, int]) -> Path:
        """Build a path below the mount root."""
        return self.root.joinpath(*(str(part) for part in parts))

    def is_mounted(self) -> bool:
        """Check whether a proc filesystem is mounted on the root."""
        root = os.path.realpath(self.root)
        for partition in psutil.disk_partitions(all=True):
            if partition.fstype == PROC_FSTYPE and os.path.realpath(partition.mountpoint) == root:
                return True
        return False

    def check_mounted(self) -> None:
        """
        Verify the interface is usable before a batch begins.

        Raises:
            InterfaceUnavailable: If the root is missing or is not a proc mount
        """
        if not self.root.is_dir():
            raise InterfaceUnavailable(str(self.root), "not found")

        if self.verify_mount and not self.is_mounted():
            raise InterfaceUnavailable(str(self.root))

    def read_text(self, *parts: Union[str, int]) -> str:
        """
        Read a whole file below the root as text.

        Raises:
            OSError: If the file cannot be opened or read
        """
        path = self.path(*parts)
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
        logger.debug(f"{path}: {text!r}")
        return text

    def read_bytes(self, *parts: Union[str, int], limit: Optional[int] = None) -> bytes:
        """Read up to ``limit`` bytes of a file below the root."""
        path = self.path(*parts)
        with open(path, "rb") as f:
            data = f.read(-1 if limit is None else limit)
        return data

    def owner_uid(self, pid: int) -> int:
        """Numeric owner of the process directory."""
        return os.stat(self.path(pid)).st_uid

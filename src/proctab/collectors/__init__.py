"""Collectors for process and system snapshots."""

from .cputime import collect_cputime, parse_cpu_stat
from .io import collect_io, parse_io
from .loadavg import collect_loadavg, parse_loadavg
from .memusage import collect_memusage, parse_meminfo
from .owner import OwnerResolver, collect_cmdline, collect_owner, parse_cmdline
from .pids import list_pids
from .proctab import ProctabCollector, collect_proctab
from .stat import collect_stat, parse_stat

__all__ = [
    "collect_cputime",
    "collect_io",
    "collect_loadavg",
    "collect_memusage",
    "collect_cmdline",
    "collect_owner",
    "collect_proctab",
    "collect_stat",
    "list_pids",
    "parse_cmdline",
    "parse_cpu_stat",
    "parse_io",
    "parse_loadavg",
    "parse_meminfo",
    "parse_stat",
    "OwnerResolver",
    "ProctabCollector",
]

"""Command-line interface for proctab."""

import argparse
import json
import logging
import sys
from typing import Any, Dict

from . import __version__
from .config import CollectorConfig, ConfigManager
from .exceptions import ProcfsError
from .procfs import ProcFS
from .collectors import (
    OwnerResolver,
    ProctabCollector,
    collect_cputime,
    collect_loadavg,
    collect_memusage,
    list_pids,
)

logger = logging.getLogger("proctab")


def setup_logging(level: str) -> None:
    """Configure root logging for the command line."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_config(args: argparse.Namespace) -> CollectorConfig:
    """Load the config file and apply command-line overrides."""
    config = ConfigManager(args.config).load_or_default()

    if args.procfs is not None:
        config.procfs_root = args.procfs
    if args.no_verify_mount:
        config.verify_mount = False
    if args.log_level is not None:
        config.log_level = args.log_level
    if getattr(args, "workers", None) is not None:
        config.max_workers = args.workers
    if getattr(args, "name", None) is not None:
        config.process_name = args.name

    return config


def make_procfs(config: CollectorConfig) -> ProcFS:
    return ProcFS(config.procfs_root, verify_mount=config.verify_mount)


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def collect_procs(config: CollectorConfig, pids: list) -> list:
    """Collect process rows as dictionaries."""
    if not pids:
        pids = list_pids(config.process_name, config.procfs_root)

    collector = ProctabCollector(
        make_procfs(config),
        OwnerResolver(ttl=config.owner_cache_ttl),
        max_workers=config.max_workers,
    )
    return [snapshot.to_dict() for snapshot in collector.collect(pids)]


def cmd_procs(args: argparse.Namespace, config: CollectorConfig) -> int:
    """Print one row per process."""
    rows = collect_procs(config, args.pids)
    logger.info(f"Collected {len(rows)} process row(s)")
    print_json(rows)
    return 0


def cmd_loadavg(args: argparse.Namespace, config: CollectorConfig) -> int:
    """Print the load averages."""
    print_json(collect_loadavg(make_procfs(config)).to_dict())
    return 0


def cmd_memusage(args: argparse.Namespace, config: CollectorConfig) -> int:
    """Print aggregate memory usage."""
    print_json(collect_memusage(make_procfs(config)).to_dict())
    return 0


def cmd_cputime(args: argparse.Namespace, config: CollectorConfig) -> int:
    """Print aggregate CPU time."""
    print_json(collect_cputime(make_procfs(config)).to_dict())
    return 0


def cmd_all(args: argparse.Namespace, config: CollectorConfig) -> int:
    """Print every record of one snapshot cycle."""
    procfs = make_procfs(config)

    payload: Dict[str, Any] = {
        "loadavg": collect_loadavg(procfs).to_dict(),
        "memusage": collect_memusage(procfs).to_dict(),
        "cputime": collect_cputime(procfs).to_dict(),
        "processes": collect_procs(config, args.pids),
    }

    print_json(payload)
    return 0


COMMANDS = {
    "procs": cmd_procs,
    "loadavg": cmd_loadavg,
    "memusage": cmd_memusage,
    "cputime": cmd_cputime,
    "all": cmd_all,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proctab",
        description="proctab - process and system resource snapshots from /proc",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"proctab {__version__}")
    parser.add_argument(
        "--config",
        default="/etc/proctab/config.json",
        help="Configuration file (default: /etc/proctab/config.json)",
    )
    parser.add_argument("--procfs", help="Mount point of the proc filesystem (default: /proc)")
    parser.add_argument(
        "--no-verify-mount",
        action="store_true",
        help="Do not check that the root is a proc mount",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for command in ("procs", "all"):
        proc_parser = subparsers.add_parser(
            command,
            help="Snapshot processes" if command == "procs" else "Snapshot processes and system totals",
        )
        proc_parser.add_argument(
            "pids",
            nargs="*",
            type=int,
            help="Process ids to inspect (default: every running process)",
        )
        proc_parser.add_argument("--name", help="Only inspect processes with this name")
        proc_parser.add_argument(
            "--workers",
            type=int,
            help="Number of processes read concurrently (default: 1)",
        )

    subparsers.add_parser("loadavg", help="Show load averages")
    subparsers.add_parser("memusage", help="Show memory usage")
    subparsers.add_parser("cputime", help="Show aggregate CPU time")

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except (OSError, TypeError, ValueError) as e:
        setup_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(config.log_level)

    try:
        return COMMANDS[args.command](args, config)
    except ProcfsError as e:
        logger.error(f"Collection failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

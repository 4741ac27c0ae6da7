#!/usr/bin/env python3
"""
Command-line interface for printing system snapshots.
"""
import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from sysmon.config.config_loader import ConfigLoader
from sysmon.service.collector.snapshot_collector import SnapshotCollector
from sysmon.util.log_config import set_default_level, setup_logger

logger = setup_logger(__name__)


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --env option.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the --env argument.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev', 'prod'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_probe_parser() -> argparse.ArgumentParser:
    parser = build_env_parser(description="Print host/container CPU, memory and load snapshots")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory holding config.yaml (default: bundled configuration)")
    parser.add_argument("--interval", type=float, default=1.0,
                        help="Seconds between snapshots (default: 1.0)")
    parser.add_argument("--count", type=int, default=2,
                        help="Number of snapshots to print (default: 2, the first CPU figure covers the time since boot)")
    parser.add_argument("--format", choices=["json", "table"], default="json",
                        help="Output format: json lines | table (default: json)")
    return parser


def format_table(rows: List[dict]) -> str:
    return tabulate(rows, headers="keys", floatfmt=".3f")


def main(argv=None) -> int:
    args = build_probe_parser().parse_args(argv)
    if args.count < 1:
        print("Error: --count must be at least 1", file=sys.stderr)
        return 1
    if args.interval < 0:
        print("Error: --interval must not be negative", file=sys.stderr)
        return 1

    config = ConfigLoader(args.config_dir, env=args.env).config_data
    set_default_level(logging.getLevelName(config.log_level.upper()))

    collector = SnapshotCollector(config)
    rows = []

    def _emit(error, result):
        if args.format == "json":
            print(json.dumps(result), flush=True)
        else:
            rows.append(result["metrics"])

    for i in range(args.count):
        if i:
            time.sleep(args.interval)
        collector.collect(_emit)

    if rows:
        print(format_table(rows))
    return 0


if __name__ == "__main__":
    sys.exit(main())

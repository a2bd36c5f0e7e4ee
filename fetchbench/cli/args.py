from __future__ import annotations

import argparse
import os

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fetchbench")

    parser.add_argument(
        "--config",
        default=None,
        help="Path to config file (defaults to the built-in demo fetch set)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get("FETCHBENCH_LOG_LEVEL", "WARNING").upper(),
        help="Logging level",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Compare sequential and concurrent fetching")
    run.add_argument(
        "--json",
        action="store_true",
        help="Print the comparison report as JSON",
    )
    run.add_argument(
        "--show",
        metavar="NAME",
        default=None,
        help="Also print the payload fetched for NAME",
    )
    run.add_argument(
        "--width",
        type=int,
        default=40,
        help="Width of the timeline bars in characters",
    )

    # list
    subparsers.add_parser("list", help="List fetches")

    return parser

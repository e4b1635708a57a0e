"""
Command line entry point: run some or all registered benchmarks.

Usage examples:
    python -m cellbench
    python -m cellbench --list
    python -m cellbench dmap cell_aes
"""

import argparse
import sys
from typing import List, Optional

from .benchmark import BenchmarkRegistry, default_registry
from .timer import Stopwatch

LIST_FLAG = "--list"
HELP_FLAGS = frozenset(["-h", "--help"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cellbench",
        description="Benchmarks for AES and digest-keyed structures",
        allow_abbrev=False,
    )
    parser.add_argument(
        LIST_FLAG,
        action="store_true",
        help="Only print which benchmarks would run",
    )
    parser.add_argument(
        "benchmarks",
        nargs="*",
        metavar="name",
        help="Benchmarks to run (default: all)",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    registry: Optional[BenchmarkRegistry] = None,
    stopwatch: Optional[Stopwatch] = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # argparse only renders the help text; tokens are walked by hand so that
    # option-like names and a bare "--" are reported like any other name
    if HELP_FLAGS.intersection(argv):
        build_parser().print_help()
        return 0

    if registry is None:
        registry = default_registry()

    list_only = False
    n_names = 0
    for token in argv:
        if token == LIST_FLAG:
            list_only = True
            continue
        n_names += 1
        if not registry.select(token):
            print(f"No such benchmark as {token}")

    if stopwatch is None:
        stopwatch = Stopwatch()
    stopwatch.reset()

    run_all = n_names == 0
    for entry in registry:
        if entry.selected or run_all:
            print(f"===== {entry.name} =====", flush=True)
            if not list_only:
                entry.benchmark.run(stopwatch)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

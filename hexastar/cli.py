"""Command line front end: one request document in, one response document out."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from . import __version__
from .codec import SearchRequest, decode_request, encode_grid
from .config import RelaxationPolicy, SearchConfig
from .errors import DecodeError
from .hexpath import Grid, find_path
from .log import setup_logging

logger = logging.getLogger(__name__)

COMMANDS = ("solve", "generate")
EXIT_OK = 0
EXIT_DECODE_ERROR = 1
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_raw(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _write_line(target: str, text: str) -> None:
    if target == "-":
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
    else:
        Path(target).write_text(text + "\n", encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="hexastar",
        description="A* shortest path over a hexagonal grid, JSON in and JSON out.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = ap.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Search the grid in a request document (default)")
    solve.add_argument("--input", default="-", help="Request file, '-' for stdin")
    solve.add_argument("--output", default="-", help="Response file, '-' for stdout")
    solve.add_argument(
        "--relaxation",
        choices=[policy.value for policy in RelaxationPolicy],
        default=None,
        help="When a neighbour's cost and parent are overwritten (default: strict)",
    )
    solve.add_argument(
        "--blocked-state",
        dest="blocked_states",
        action="append",
        metavar="STATE",
        help="Cell state treated as impassable; repeat for several (default: BLOCKED, CLOSED)",
    )
    solve.add_argument("--max-hops", type=int, default=None, help="Path reconstruction hop budget")
    solve.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default="WARNING")

    generate = sub.add_parser("generate", help="Write a request for a hexagonal cluster of cells")
    generate.add_argument("--radius", type=int, required=True, help="Cluster radius in steps")
    generate.add_argument("--start", type=int, default=0, help="Start cell id")
    generate.add_argument("--end", type=int, default=None, help="Goal cell id (default: last cell)")
    generate.add_argument(
        "--block", type=int, action="append", default=[], metavar="ID", help="Cell id to block"
    )
    generate.add_argument("--output", default="-", help="Request file, '-' for stdout")
    generate.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default="WARNING")
    return ap


def _solve(ap: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    try:
        config = SearchConfig.from_cli(args)
    except ValidationError as exc:
        ap.error(str(exc))

    try:
        raw = _read_raw(args.input)
    except OSError as exc:
        print(f"Error reading input: {exc}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    try:
        request = decode_request(raw)
    except DecodeError as exc:
        print(f"Error parsing JSON: {exc}", file=sys.stderr)
        print(f"Input: {raw.decode('utf-8', errors='replace')}", file=sys.stderr)
        return EXIT_DECODE_ERROR

    grid = request.grid_data.to_grid(config.blocked_states)
    result = find_path(grid, request.start_id, request.end_id, config=config)
    if result.found:
        logger.debug("marked path %s", grid.path())
    else:
        logger.info("no path: %s", result.reason)
    _write_line(args.output, encode_grid(request.grid_data, grid))
    return EXIT_OK


def _generate(ap: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.radius < 0:
        ap.error("--radius must be >= 0")
    grid = Grid.hex_cluster(args.radius, blocked=args.block)
    end = len(grid) - 1 if args.end is None else args.end
    logger.debug("generated %d cells, start=%d end=%d", len(grid), args.start, end)
    _write_line(args.output, SearchRequest.from_grid(grid, args.start, end).dump())
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in (*COMMANDS, "-h", "--help", "--version"):
        argv.insert(0, "solve")

    ap = build_parser()
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "generate":
        return _generate(ap, args)
    return _solve(ap, args)


__all__ = ["build_parser", "main"]

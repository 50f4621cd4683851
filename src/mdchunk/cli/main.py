# main.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from .. import __version__
from ..core.chunk import JOIN_SEPARATORS
from ..core.config import MdchunkConfig, load_config_from_path
from .runner import run


def _positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build the mdchunk argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser for the CLI.
    """
    parser = argparse.ArgumentParser(
        prog="mdchunk",
        description="Split a markdown document into size-bounded text chunks.",
    )
    parser.add_argument("-i", "--input", help="Input markdown file.")
    parser.add_argument("-s", "--substitutions", help="Optional CSV file of from,to substitutions.")
    parser.add_argument("-c", "--config", help="Path to config file (TOML or JSON).")
    parser.add_argument(
        "-l",
        "--limit",
        type=_positive_int,
        help="Maximum characters per chunk (default 1500).",
    )
    parser.add_argument(
        "--join",
        choices=sorted(JOIN_SEPARATORS),
        help="How leaves are joined inside a chunk: 'space' (default) or 'none'.",
    )
    parser.add_argument("--delimiter", help="Field delimiter of the substitutions file.")
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Treat the first row of the substitutions file as data.",
    )
    parser.add_argument("--log-level", help="Logging level (e.g., DEBUG, INFO, WARNING).")
    parser.add_argument("--dry-run", action="store_true", help="Validate and print config, then exit.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _apply_overrides(cfg: MdchunkConfig, args: argparse.Namespace) -> None:
    """Apply command line flags on top of a loaded config, in place."""
    if args.input:
        cfg.input.path = args.input
    if args.substitutions:
        cfg.substitutions.path = args.substitutions
    if args.limit is not None:
        cfg.chunk.policy.limit = args.limit
    if args.join:
        cfg.chunk.policy.separator = JOIN_SEPARATORS[args.join]
    if args.delimiter is not None:
        cfg.substitutions.delimiter = args.delimiter
    if args.no_header:
        cfg.substitutions.has_header = False
    if args.log_level:
        cfg.logging.level = args.log_level


def _dispatch(args: argparse.Namespace) -> int:
    """Build the run config from ``args`` and execute it.

    Returns:
        int: Process exit code.
    """
    cfg = load_config_from_path(args.config) if args.config else MdchunkConfig()
    _apply_overrides(cfg, args)
    cfg.logging.apply()

    if args.dry_run:
        cfg.validate()
        print(json.dumps(cfg.to_dict(), indent=2))
        return 0
    if not cfg.input.path:
        print("Error: an input file is required (use -i/--input or input.path in the config).", file=sys.stderr)
        return 2

    run(cfg)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the mdchunk command-line interface.

    Args:
        argv (Sequence[str] | None): Optional list of argument strings to
            parse instead of ``sys.argv[1:]``. Primarily useful for tests.

    Returns:
        int: Process exit code, where 0 indicates success and non-zero
        values indicate failure.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        return _dispatch(args)
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

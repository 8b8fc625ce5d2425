# SPDX-License-Identifier: MIT
"""Command-line interface for findfolly.

Runs discovery, writes link directives to stdout as they're found, then
prints the compile settings the caller needs:

    findfolly                       # directives, then include=/cflag=/lib-dir= lines
    findfolly --json                # directives, then one JSON object
    findfolly PKG_CONFIG=/opt/bin/pkg-config --prefix build:
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING, TextIO

from findfolly.config import directive_prefix, set_cli_vars
from findfolly.core.directives import StreamDirectiveSink
from findfolly.core.errors import FindFollyError
from findfolly.discovery import probe_folly

if TYPE_CHECKING:
    from findfolly.discovery import DiscoveryResult

# Set up logging
logger = logging.getLogger("findfolly")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level.

    Log output goes to stderr so it never mixes with directives on stdout.
    """
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt, stream=sys.stderr)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Parse KEY=value arguments from a list.

    Args:
        args: List of arguments.

    Returns:
        Tuple of (variables dict, remaining args).
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        if "=" in arg and not arg.startswith("-"):
            key, _, value = arg.partition("=")
            if key:  # Valid KEY=value
                variables[key] = value
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)

    return variables, remaining


def print_result(
    result: DiscoveryResult, *, as_json: bool = False, stream: TextIO | None = None
) -> None:
    """Print a discovery result.

    Args:
        result: The result to print.
        as_json: Print one JSON object instead of KEY=value lines.
        stream: Output stream (default: stdout).
    """
    out = stream if stream is not None else sys.stdout
    if as_json:
        json.dump(result.to_dict(), out, indent=2)
        out.write("\n")
        return

    for lib_dir in result.lib_dirs:
        out.write(f"lib-dir={lib_dir}\n")
    for include in result.include_paths:
        out.write(f"include={include}\n")
    for flag in result.other_cflags:
        out.write(f"cflag={flag}\n")


def cmd_probe(args: argparse.Namespace) -> int:
    """Run discovery and print the result."""
    setup_logging(args.verbose, args.debug)

    variables, remaining = parse_variables(getattr(args, "extra", []))
    if remaining:
        logger.error("Unexpected arguments: %s", " ".join(remaining))
        return 1
    if variables:
        set_cli_vars(variables)

    prefix = args.prefix if args.prefix is not None else directive_prefix()
    sink = StreamDirectiveSink(prefix=prefix)

    try:
        result = probe_folly(
            sink=sink,
            package=args.package,
            strict=True if args.strict else None,
        )
    except FindFollyError as e:
        logger.error("%s", e)
        return 1

    print_result(result, as_json=args.json)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the findfolly CLI."""
    parser = argparse.ArgumentParser(
        prog="findfolly",
        description="Locate the Folly C++ library and its dependencies.",
    )
    from findfolly import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Enable debug output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument(
        "--prefix", help="Prefix written before each directive line"
    )
    parser.add_argument("--package", help="pkg-config package name for Folly")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if pkg-config exits with a non-zero status",
    )
    parser.add_argument(
        "extra",
        nargs="*",
        help="Variables (KEY=value), e.g. PKG_CONFIG=/path/to/pkg-config",
    )

    args = parser.parse_args(argv)
    return cmd_probe(args)


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface.

Examples:
  pathfinder --in USDe --out USDC                      # shortest path (k=1)
  pathfinder --in USDe --out USDC --k 10               # up to 10 paths
  pathfinder --in USDe --out USDC --k 0 --max-depth 6  # union over all routes up to 6 hops
  pathfinder --in USDe --out USDC --unique             # union (all adapters/tokens on any route)
  pathfinder --list-tokens
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import structlog

from pathfinder.constants import DEFAULT_DATASET, DEFAULT_K, DEFAULT_MAX_DEPTH
from pathfinder.errors import DatasetError, QueryError, TokenNotFoundError
from pathfinder.loader import load_graph
from pathfinder.query import QueryConfig, QueryMode, run_query
from pathfinder.render import render_json, render_text

logger = structlog.get_logger()


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog to write to stderr, keeping stdout for the report."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathfinder",
        description="Find routes between two tokens over a pool dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--file",
        type=str,
        default=DEFAULT_DATASET,
        help=f"Pool dataset JSON file (default: {DEFAULT_DATASET})",
    )
    parser.add_argument("--in", dest="token_in", type=str, default="", help="Token to route from")
    parser.add_argument("--out", dest="token_out", type=str, default="", help="Token to route to")
    parser.add_argument(
        "--k",
        type=int,
        default=DEFAULT_K,
        help=f"Maximum number of paths, 0 = all (implies --unique) (default: {DEFAULT_K})",
    )
    parser.add_argument(
        "--max-depth",
        "--maxDepth",
        dest="max_depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum number of hops (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--unique",
        action="store_true",
        help="Report the union of adapters and tokens on any route instead of listing paths",
    )
    parser.add_argument(
        "--list-tokens",
        "--listTokens",
        dest="list_tokens",
        action="store_true",
        help="List every token in the dataset and exit",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> QueryConfig:
    """Build the immutable query configuration from parsed arguments."""
    mode: QueryMode | None = None
    if args.list_tokens:
        mode = QueryMode.TOKENS
    elif args.unique:
        mode = QueryMode.UNION
    return QueryConfig(
        token_in=args.token_in,
        token_out=args.token_out,
        # Out-of-range values are clamped rather than rejected
        k=max(0, args.k),
        max_depth=max(1, args.max_depth),
        mode=mode,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = config_from_args(args)
        graph = load_graph(args.file)
        report = run_query(graph, config)
    except DatasetError as err:
        logger.error("dataset_error", file=args.file, error=str(err))
        print(f"Error: {err}", file=sys.stderr)
        return 1
    except TokenNotFoundError as err:
        print(f"{err}. Try --list-tokens to see available.", file=sys.stderr)
        return 1
    except QueryError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(render_json(report))
    else:
        print(render_text(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())

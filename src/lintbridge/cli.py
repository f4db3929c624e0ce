"""Command-line interface for lintbridge."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from lintbridge.config import LintSettings
from lintbridge.linters.provider import LinterProvider
from lintbridge.logging import configure_logging, get_logger
from lintbridge.lsp.server import create_server


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool
    ruff_path: str
    ruff_args: tuple[str, ...]


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="lintbridge",
        description="Language server publishing diagnostics from external linters",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for TCP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=4390,
        help="Port for TCP transport (default: 4390)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )
    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )
    parser.add_argument(
        "--ruff-path",
        default="ruff",
        help="ruff executable (default: ruff); editor settings override it",
    )
    parser.add_argument(
        "--ruff-arg",
        dest="ruff_args",
        action="append",
        default=[],
        metavar="ARG",
        help="Extra argument passed to ruff (repeatable; use --ruff-arg=--flag for flags)",
    )

    args = parser.parse_args(argv)

    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    return CliArgs(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
        ruff_path=args.ruff_path,
        ruff_args=tuple(args.ruff_args),
    )


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the language server.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")

    logger.info("Starting lintbridge server")
    logger.debug("Configuration: %s", args)

    try:
        provider = LinterProvider(
            LintSettings(ruff_path=args.ruff_path, ruff_args=args.ruff_args)
        )
        server = create_server(provider=provider)

        if args.transport == "stdio":
            logger.info("Starting in stdio mode")
            server.start_io()
        else:
            logger.info("Starting in TCP mode on %s:%d", args.host, args.port)
            server.start_tcp(args.host, args.port)

        return 0

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error in server", exc_info=True)
        return 1


def main() -> None:
    """Console script entry point."""
    sys.exit(run())

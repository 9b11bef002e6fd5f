"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence

from dotenv import load_dotenv

from k7tui.ui import TuiApp

DEFAULT_GRPC_ADDR = "localhost:50051"

logger = logging.getLogger("k7tui")


def grpc_address(environ: Mapping[str, str] | None = None) -> str:
    """Return the repository service address from GRPC_ADDR, or the default."""
    if environ is None:
        environ = os.environ
    return environ.get("GRPC_ADDR") or DEFAULT_GRPC_ADDR


def main(argv: Sequence[str] | None = None) -> int:
    """Start the terminal interface; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="k7tui", description="Terminal client for the video repository service."
    )
    parser.add_argument(
        "--grpc-addr",
        metavar="HOST:PORT",
        help="repository service address (default: $GRPC_ADDR or localhost:50051)",
    )
    args = parser.parse_args(argv)
    load_dotenv()
    address = args.grpc_addr or grpc_address(os.environ)
    logger.warning(
        "No repository client available for %s; Demo Mode is still available", address
    )
    app = TuiApp()
    try:
        app.run()
    except Exception as exc:
        logger.critical("TUI failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
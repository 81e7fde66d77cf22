"""
Command-line interface for the Tilgin restart tool.

Provides argument parsing and main execution flow.
"""

import argparse
import os
import sys

import urllib3

from .config import (
    DEFAULT_HOST,
    DEFAULT_VARIANT,
    LIVENESS_TIMEOUT,
    PASSWORD_ENV,
    USERNAME_ENV,
    RouterConfig,
)
from .errors import ConfigError, RestarterError
from .logging_setup import _setup_logging, fields, log
from .protocol import PROTOCOLS
from .restarter import Restarter

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tilgin-restart",
        description="Restart a Tilgin (Hyperoptic) router through its web UI "
                    "and wait for it to come back up.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            f"The password is read from the {PASSWORD_ENV} env var only.\n"
            f"The username may also be provided via the {USERNAME_ENV} env var."
        ),
    )
    parser.add_argument(
        "--username", default=os.environ.get(USERNAME_ENV, ""),
        help="Username to login as",
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST,
        help=f"Router base address (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--variant", default=DEFAULT_VARIANT, choices=sorted(PROTOCOLS),
        help="Web UI protocol variant: 'rich' sends the anti-forgery form "
             "token to /tools/restart, 'simple' posts the restart form to / "
             f"(default: {DEFAULT_VARIANT})",
    )
    parser.add_argument(
        "--timeout", type=float, default=LIVENESS_TIMEOUT,
        help=f"Seconds to wait for the router to come back (default: {LIVENESS_TIMEOUT:g})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification (use for self-signed certs)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RouterConfig:
    return RouterConfig(
        username=args.username,
        password=os.environ.get(PASSWORD_ENV, ""),
        host=args.host,
        variant=args.variant,
        verify_ssl=args.verify_ssl,
        liveness_timeout=args.timeout,
    ).validate()


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point; returns the process exit status.
    """
    args = parse_args(argv)
    _setup_logging(debug=args.debug)

    try:
        config = build_config(args)
    except ConfigError as exc:
        log.critical("Invalid configuration: %s", exc)
        return EXIT_FAILURE

    if not config.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    restarter = Restarter(config)
    try:
        restarter.run()
    except RestarterError as exc:
        log.critical("Failed to restart", extra=fields(error=exc, chain=_error_chain(exc)))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return EXIT_INTERRUPTED

    log.info("Restart complete")
    return EXIT_OK


def _error_chain(exc: BaseException) -> str:
    """Exception type names along the ``__cause__`` chain, outermost first."""
    names = []
    while exc is not None:
        names.append(type(exc).__name__)
        exc = exc.__cause__
    return " <- ".join(names)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

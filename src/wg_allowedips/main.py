"""Command-line entry point for wg-allowedips.

Brief:
  Generate a WireGuard AllowedIPs value from an allow-list file of IPv4
  addresses and hostnames.

Usage:
  wg-allowedips <allowed-file>               print comma-separated addresses
  wg-allowedips <allowed-file> <wg-config>   print wg-config with AllowedIPs replaced

Allowed file format:
  # This is a comment
  10.0.0.1
  192.168.1.0
  example.com
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import IO, List, Mapping, Optional

from .aggregate import join_addresses
from .config.config_parser import load_config
from .config.config_schema import RESOLVER_BACKENDS, model_to_dict
from .config.logging_config import init_logging
from .diagnostics import Diagnostics
from .emitter import emit_list, emit_substituted
from .errors import AllowedIPsError, UsageError
from .pipeline import collect_addresses
from .resolver import build_resolver


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> _ArgumentParser:
    """Build the CLI argument parser."""
    parser = _ArgumentParser(
        prog="wg-allowedips",
        description="Generate a WireGuard AllowedIPs list from an allow-list file",
    )
    parser.add_argument(
        "allowed_file",
        metavar="allowed-file",
        help="File with one IPv4 address or hostname per line ('#' comments allowed)",
    )
    parser.add_argument(
        "wg_config",
        metavar="wg-config",
        nargs="?",
        default=None,
        help="WireGuard config to print with its AllowedIPs line(s) replaced",
    )
    parser.add_argument("--config", default=None, help="Path to YAML tool config")
    parser.add_argument(
        "--resolver",
        choices=RESOLVER_BACKENDS,
        default=None,
        help="Hostname resolution backend (default: dig)",
    )
    parser.add_argument(
        "--dig-command",
        default=None,
        help="Executable used by the dig backend (default: dig)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="debug, info, warn, error or crit (default: warn)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Never color the severity tags on stderr",
    )
    return parser


def _binary_stream(out: IO[str]) -> IO[bytes]:
    """Return the byte buffer behind a text stream such as sys.stdout."""
    out.flush()
    return out.buffer  # type: ignore[attr-defined]


def _silence_stdout() -> None:
    # Point stdout at devnull so the interpreter's final flush does not raise again.
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def main(
    argv: Optional[List[str]] = None,
    *,
    stdout: Optional[IO[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Main entry point: parse arguments, build the address list, emit it.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]). Options may
            appear before, between or after the two positional paths.
        stdout: Text stream for the result (defaults to sys.stdout). In
            substitution mode the template is written to its ``buffer``.
        environ: Environment mapping for WG_ALLOWEDIPS_* overrides.

    Returns:
        0 on success (including empty output), 1 on any fatal error.
    """
    out = stdout if stdout is not None else sys.stdout

    parser = build_parser()
    try:
        args = parser.parse_intermixed_args(argv)
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return 1

    # Bootstrap logging so configuration errors are reported the same way.
    bootstrap_logging = {"level": "warn", "color": "never" if args.no_color else "auto"}
    init_logging(bootstrap_logging)
    diagnostics = Diagnostics(logger=logging.getLogger("wg_allowedips"))

    overrides = {
        "resolver": {"backend": args.resolver, "command": args.dig_command},
        "logging": {
            "level": args.log_level,
            "color": "never" if args.no_color else None,
        },
    }
    try:
        cfg = load_config(args.config, environ=environ, overrides=overrides)
        init_logging(model_to_dict(cfg.logging))
    except AllowedIPsError as exc:
        init_logging(bootstrap_logging)
        diagnostics.error("%s", exc)
        return 1

    resolver = build_resolver(cfg.resolver)
    logging.getLogger("wg_allowedips.main").debug(
        "using %s resolver for %s", resolver.name, args.allowed_file
    )

    try:
        addresses = collect_addresses(args.allowed_file, resolver, diagnostics)
        if args.wg_config is None:
            emit_list(addresses, out)
            out.flush()
        else:
            binary_out = _binary_stream(out)
            emit_substituted(args.wg_config, join_addresses(addresses), binary_out)
            binary_out.flush()
    except AllowedIPsError as exc:
        diagnostics.error("%s", exc)
        return 1
    except BrokenPipeError:
        if out is sys.stdout:
            _silence_stdout()
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())  # pragma: no cover

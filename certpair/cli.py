"""CLI: certpair DIRECTORY --out FILE; scan for key pairs and write Traefik TLS config."""

import argparse
import sys
from pathlib import Path

from . import logger as log_module
from . import scanner
from . import traefik
from .events import LoggingReporter


def _validate_args(parser: argparse.ArgumentParser, args) -> None:
    """Validate arguments; on failure log/print error and exit non-zero."""
    log = log_module.setup_logging(getattr(args, "log_file", None), getattr(args, "verbose", False))

    if not getattr(args, "out", None):
        log.error("Validation failed: output file not set")
        parser.error("Output file not set! Use --out")

    directory = getattr(args, "directory", None)
    if not directory:
        log.error("Validation failed: certificate directory missing")
        parser.error("Insufficient arguments! Certificate directory path is required")
    if not Path(directory).is_dir():
        log.error("Validation failed: not a directory: %s", directory)
        parser.error(f"Certificate directory does not exist or is not a directory: {directory}")

    workers = getattr(args, "workers", None)
    if workers is not None and workers <= 0:
        log.error("Validation failed: --workers must be a positive integer")
        parser.error("--workers must be a positive integer")


def cmd_generate(args) -> int:
    """Scan args.directory and write the config; 0 on success, 1 on fatal errors."""
    log = log_module.setup_logging(args.log_file, args.verbose)
    reporter = LoggingReporter(log)

    log.info("Searching for certificates and private keys in %s...", args.directory)
    try:
        result = scanner.scan(args.directory, max_workers=args.workers, reporter=reporter)
    except OSError as e:
        log.error("Could not read certificate directory: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not result.found_material:
        log.info("No certificates or private keys found, nothing to write")
        return 0

    entry_points = args.entry_point or list(traefik.DEFAULT_ENTRY_POINTS)
    try:
        traefik.write_config(
            result.pairs,
            args.out,
            path_prefix=args.path_prefix or "",
            entry_points=entry_points,
            logger=log,
        )
    except (OSError, UnicodeError) as e:
        log.error("Could not write config: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certpair",
        description="Generator for traefik TLS certificate config",
        usage="%(prog)s [options] DIRECTORY",
    )
    parser.add_argument("directory", nargs="?", help="Certificate directory path")
    parser.add_argument("-o", "--out", help="Path of generated config file")
    parser.add_argument(
        "-p", "--path-prefix", default="", help="Path prefix for cert and key file paths in config file"
    )
    parser.add_argument(
        "--entry-point",
        action="append",
        default=None,
        help="Traefik entry point for the TLS tables (repeatable, default: https)",
    )
    parser.add_argument("--workers", type=int, default=None, help="Maximum parallel load/match tasks")
    parser.add_argument("--log-file", default=None, help="Log file (default: stderr)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every directory searched")
    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _validate_args(parser, args)
    sys.exit(cmd_generate(args))


if __name__ == "__main__":
    main()

"""Verify that every class file under one or more roots can be loaded.

Each root is scanned with its own loading context. Class files whose structure
is invalid are reported as broken; classes that only fail because a referenced
class lives outside the root are ignored.
"""

import argparse
import logging
import os
from pathlib import Path

from class_verifier.class_file_context import ClassFileContextProvider
from class_verifier.compute_config_hash import compute_config_hash
from class_verifier.configure_logging import configure_logging
from class_verifier.errors import ScanError
from class_verifier.find_class_path_dirs import find_class_path_dirs
from class_verifier.load_config import load_config
from class_verifier.reporting import LoggingSink
from class_verifier.scan_coordinator import ScanCoordinator
from class_verifier.scan_report import ScanReport

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BROKEN = 1
EXIT_FATAL = 2

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def resolve_roots(args: argparse.Namespace) -> list[Path]:
    """Return the roots named on the command line, or the class path directories."""
    if args.roots:
        return list(args.roots)
    class_path = args.class_path
    if class_path is None:
        class_path = os.environ.get("CLASSPATH", "")
    return find_class_path_dirs(class_path)


def run_verification(args: argparse.Namespace) -> int:
    """Execute one scan and map its result to an exit status."""
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        configure_logging("INFO")
        logger.error("Cannot load configuration: %s", exc)
        return EXIT_FATAL

    if args.log_level:
        config["log_level"] = args.log_level
    if args.no_follow_symlinks:
        config["scan"]["follow_symlinks"] = False
    if args.fail_on_broken:
        config["report"]["fail_on_broken"] = True

    try:
        configure_logging(config["log_level"])
    except (TypeError, ValueError) as exc:
        configure_logging("INFO")
        logger.error("Invalid log level in configuration: %s", exc)
        return EXIT_FATAL

    roots = resolve_roots(args)
    if not roots:
        logger.error("No roots to scan: pass directories or set a class path")
        return EXIT_FATAL

    provider = ClassFileContextProvider(
        extension=config["scan"]["artifact_extension"],
        platform_prefixes=config["loader"]["platform_prefixes"],
        max_major_version=config["loader"]["max_major_version"],
    )
    coordinator = ScanCoordinator(
        provider,
        LoggingSink(),
        follow_symlinks=config["scan"]["follow_symlinks"],
    )

    try:
        result = coordinator.scan(roots)
    except ScanError:
        # Already reported through the sink
        return EXIT_FATAL

    if args.report:
        ScanReport(compute_config_hash(config)).generate_report(args.report, result)

    if result.has_failures and config["report"]["fail_on_broken"]:
        return EXIT_BROKEN
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    ap = argparse.ArgumentParser(
        description="Load every class file under the given roots, report broken ones.",
    )
    ap.add_argument(
        "roots",
        nargs="*",
        type=Path,
        help="Directories to scan (default: directories on the class path)",
    )
    ap.add_argument(
        "--class-path",
        help="Search path used when no roots are given (default: $CLASSPATH)",
    )
    ap.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )
    ap.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Console log level (default: from config, INFO)",
    )
    ap.add_argument(
        "--report",
        help="Write a JSON summary of the scan to this path",
    )
    ap.add_argument(
        "--fail-on-broken",
        action="store_true",
        help="Exit with status 1 when any class is broken",
    )
    ap.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Do not descend into symlinked directories",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the verifier."""
    args = build_parser().parse_args(argv)
    return run_verification(args)


if __name__ == "__main__":
    raise SystemExit(main())

"""Main orchestration script for running development checks and the class verifier."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> int:
    """Run a command and exit if it fails to start or crashes."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        return subprocess.run(cmd_list, check=False, cwd=cwd).returncode
    except OSError as e:
        print(f"Error executing command: {cmd_str} ({e})")
        sys.exit(2)


def main() -> None:
    """Optionally run development checks, then verify the given class roots."""
    parser = argparse.ArgumentParser(
        description="Verify compiled class output directories.",
        epilog="Any other arguments are passed to class_verifier.verify_classes.",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before verifying",
    )
    args, passthrough = parser.parse_known_args()

    root_dir = Path(__file__).parent

    if args.dev:
        print("--- Running Development Checks ---")
        status = run_command([sys.executable, str(root_dir / "dev.py"), "--ci"])
        if status != 0:
            sys.exit(status)
        print("\nDevelopment checks passed. Proceeding with verification.\n")

    cmd = [sys.executable, "-m", "class_verifier.verify_classes", *passthrough]
    sys.exit(run_command(cmd, cwd=root_dir))


if __name__ == "__main__":
    main()

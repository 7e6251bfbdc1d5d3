#!/usr/bin/env python
"""Local quality gate for embassy_init.

Runs formatting, lint, typing, dead-code, complexity and test checks in
sequence and prints a summary. Tools come from the ``dev`` extra:

    pip install -e ".[dev,test]"

Usage:
    python run_quality_checks.py                  # all checks, no fixes
    python run_quality_checks.py --fix            # let black/isort rewrite files
    python run_quality_checks.py --skip lint type # skip named checks
"""

import argparse
import subprocess
import sys
from typing import Callable, NamedTuple

PACKAGE_DIR = "embassy_init"
TESTS_DIR = "tests"
SOURCES = [PACKAGE_DIR, TESTS_DIR, "run_quality_checks.py"]


class Check(NamedTuple):
    key: str
    title: str
    command: Callable[[bool], list[str]]
    capture: bool = True


CHECKS = [
    Check(
        "formatting",
        "Black formatting",
        lambda fix: ["black", *SOURCES] if fix else ["black", "--check", *SOURCES],
    ),
    Check(
        "imports",
        "isort import ordering",
        lambda fix: ["isort", *SOURCES] if fix else ["isort", "--check-only", *SOURCES],
    ),
    Check("lint", "Pylint", lambda fix: ["pylint", PACKAGE_DIR]),
    Check("type", "Mypy", lambda fix: ["mypy", PACKAGE_DIR]),
    Check("deadcode", "Vulture", lambda fix: ["vulture", PACKAGE_DIR, "--min-confidence", "80"]),
    Check("complexity", "Radon cyclomatic complexity",
          lambda fix: ["radon", "cc", PACKAGE_DIR, "-a", "-nc"], capture=False),
    Check(
        "tests",
        "Pytest + coverage",
        lambda fix: [
            "pytest",
            f"--cov={PACKAGE_DIR}",
            "--cov-report=term-missing",
            TESTS_DIR,
        ],
        capture=False,
    ),
]


def run_check(check: Check, fix: bool, verbose: bool) -> bool:
    cmd = check.command(fix)
    print(f"\n{'=' * 70}\n> {check.title}: {' '.join(cmd)}\n{'=' * 70}")

    capture = check.capture and not verbose
    try:
        result = subprocess.run(cmd, check=False, capture_output=capture, text=True)
    except FileNotFoundError as exc:
        print(f"FAILED: {exc}")
        print('   Install the tools with: pip install -e ".[dev,test]"')
        return False

    if result.returncode != 0 and capture:
        print(result.stdout)
        print(result.stderr)

    print(f"{'passed' if result.returncode == 0 else 'FAILED'}: {check.title}")
    return result.returncode == 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--fix", action="store_true", help="Apply black/isort fixes")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show all tool output")
    parser.add_argument(
        "--skip",
        nargs="+",
        default=[],
        choices=[c.key for c in CHECKS],
        help="Checks to skip",
    )
    args = parser.parse_args()

    passed, failed = [], []
    for check in CHECKS:
        if check.key in args.skip:
            print(f"\nskipping {check.title}")
            continue
        (passed if run_check(check, args.fix, args.verbose) else failed).append(check.title)

    print(f"\n{'=' * 70}\nSUMMARY: {len(passed)} passed, {len(failed)} failed")
    for title in failed:
        print(f"  - {title}")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Test runner for the short link service.

    ./run_tests.py                      # whole suite
    ./run_tests.py -s registry -s api   # only tests/test_registry.py and tests/test_api.py
    ./run_tests.py -k overflow -x       # other options are handed to pytest
"""

import argparse
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
TESTS = ROOT / "tests"


def suite_paths(names):
    """Map short suite names (registry, api, ...) to test modules"""
    if not names:
        return [str(TESTS)]

    paths = []
    for name in names:
        path = TESTS / f"test_{name}.py"
        if not path.exists():
            known = sorted(p.stem[len("test_"):] for p in TESTS.glob("test_*.py"))
            raise SystemExit(f"Unknown suite '{name}'. Available: {', '.join(known)}")
        paths.append(str(path))
    return paths


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the short link service tests")
    parser.add_argument(
        "-s", "--suite", dest="suites", action="append", default=[],
        help="Suite to run (registry, api, telemetry, ...); repeatable"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Less verbose pytest output")
    args, pytest_args = parser.parse_known_args(argv)

    command = [sys.executable, "-m", "pytest", *suite_paths(args.suites)]
    command.append("-q" if args.quiet else "-v")
    command += ["--tb=short", *pytest_args]

    print(f"Running: {' '.join(command[1:])}")
    try:
        return subprocess.run(command, cwd=ROOT).returncode
    except FileNotFoundError:
        print("Python interpreter not found")
        return 1


if __name__ == "__main__":
    sys.exit(main())

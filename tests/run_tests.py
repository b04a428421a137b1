#!/usr/bin/env python3
"""
Test Runner for Merkle Proofs

Runs each test module as its own suite and prints one summary line per
module, then a total. Exits non-zero if anything failed.

Usage:
    python tests/run_tests.py            # all suites
    python tests/run_tests.py proof cli  # only test_proof and test_cli
"""

import os
import sys
import unittest

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, TESTS_DIR)

SUITES = [
    "test_hashutils",
    "test_tree",
    "test_proof",
    "test_merkletree",
    "test_serialization",
    "test_service",
    "test_rest_api",
    "test_cli",
]


def select_suites(names):
    if not names:
        return SUITES
    wanted = {n if n.startswith("test_") else f"test_{n}" for n in names}
    unknown = wanted.difference(SUITES)
    if unknown:
        raise SystemExit(f"Unknown test suites: {', '.join(sorted(unknown))}")
    return [s for s in SUITES if s in wanted]


def main(argv=None) -> int:
    suites = select_suites(sys.argv[1:] if argv is None else argv)
    loader = unittest.TestLoader()
    runner = unittest.TextTestRunner(verbosity=1)

    totals = {"run": 0, "failed": 0, "errors": 0, "skipped": 0}
    rows = []
    for name in suites:
        suite = loader.loadTestsFromName(name)
        result = runner.run(suite)
        row = {
            "run": result.testsRun,
            "failed": len(result.failures),
            "errors": len(result.errors),
            "skipped": len(result.skipped),
        }
        for key, count in row.items():
            totals[key] += count
        rows.append((name, row))

    print("\nSuite                  run  failed  errors  skipped")
    for name, row in rows + [("TOTAL", totals)]:
        print(f"{name:<20} {row['run']:>5} {row['failed']:>7} {row['errors']:>7} {row['skipped']:>8}")

    return 0 if totals["failed"] == 0 and totals["errors"] == 0 else 1


if __name__ == '__main__':
    sys.exit(main())

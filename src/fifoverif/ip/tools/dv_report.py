# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/tools/dv_report.py

"""Summarize the per-seed manifest.json files written by `dv`.

Each manifest carries:
- "status": PASS or FAIL
- "expect": PASS or FAIL
- "replay_cmd": command that reruns exactly that seed
- "seed", "duration_s": informational

Runs fall into four buckets. Expected passes and expected failures are
green, unexpected passes and unexpected failures are red and make the report
exit non-zero.

Usage:
    dv-report                        # Scan out_dv/tests
    dv-report --outdir=<outdir>      # Scan <outdir>/tests
    dv-report --unexpected-only      # List only the red runs
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from fifoverif import utils

DEFAULT_OUT_DIR = "out_dv"
DEFAULT_TESTS_SUBDIR = "tests"
_RESULTS = frozenset({"PASS", "FAIL"})


@dataclass(frozen=True)
class TestRun:
    """One seed of one test, as recorded in its manifest."""

    __test__ = False  # not a pytest class

    path: Path
    status: str  # PASS | FAIL
    expect: str  # PASS | FAIL
    replay_cmd: str
    seed: int | None = None
    duration_s: float | None = None

    @property
    def expected(self) -> bool:
        return self.status == self.expect

    @property
    def label(self) -> str:
        return f"{self.status} ({'EXPECTED' if self.expected else 'UNEXPECTED'})"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="dv report generator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--unexpected-only",
        action="store_true",
        help="list only runs whose status differs from the expectation",
    )
    return ap.parse_args(argv)


def collect(tests_root: Path) -> list[TestRun]:
    """Load every valid manifest under `tests_root`, sorted by path."""
    if not tests_root.is_dir():
        print(f"\n[dv_report] No directory found at {tests_root}", file=sys.stderr)
        return []
    print(f"\n[dv_report] Scanning for test manifests in {tests_root}")
    runs = [
        tr
        for tr in (_load_run(p.parent) for p in tests_root.glob("**/manifest.json"))
        if tr is not None
    ]
    runs.sort(key=lambda r: str(r.path))
    return runs


def _load_run(run_dir: Path) -> TestRun | None:
    """Parse `run_dir/manifest.json`; None when missing, unreadable or incomplete.

    Build-only manifests (no replay command) are skipped.
    """
    mpath = run_dir / "manifest.json"
    try:
        data = json.loads(mpath.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    status = str(data.get("status", "")).strip().upper()
    expect = str(data.get("expect", "PASS")).strip().upper()
    replay_cmd = str(data.get("replay_cmd", "")).strip()
    if status not in _RESULTS or expect not in _RESULTS or not replay_cmd:
        return None
    seed = data.get("seed")
    duration = data.get("duration_s")
    return TestRun(
        path=run_dir,
        status=status,
        expect=expect,
        replay_cmd=replay_cmd,
        seed=seed if isinstance(seed, int) else None,
        duration_s=float(duration) if isinstance(duration, (int, float)) else None,
    )


def _colored(run: TestRun) -> str:
    return utils.green(run.label) if run.expected else utils.red(run.label)


def print_report(
    tests_root: Path, runs: Sequence[TestRun], *, unexpected_only: bool = False
) -> int:
    """Print each run with its replay command, then totals per bucket.

    Returns:
        0 if every run met its expectation, 1 otherwise (or when no runs).
    """
    if not runs:
        print(f"[dv_report] No test manifests found in {tests_root}", file=sys.stderr)
        return 1
    print(f"[dv_report] Results from test manifests in {tests_root}\n")

    # Expected runs first, then unexpected; stable within each bucket.
    order = {"PASS (EXPECTED)": 0, "FAIL (EXPECTED)": 1}
    ordered = sorted(runs, key=lambda r: order.get(r.label, 2 + (r.status == "FAIL")))
    for r in ordered:
        if unexpected_only and r.expected:
            continue
        print(f"{_colored(r)}: {r.replay_cmd}")

    totals: dict[str, int] = {}
    for r in ordered:
        totals[r.label] = totals.get(r.label, 0) + 1

    print(f"\n[dv_report] TOTALS: {len(runs)}\n")
    for label, count in totals.items():
        text = utils.green(label) if "UNEXPECTED" not in label else utils.red(label)
        print(f"{text}: {count}")

    durations = [r.duration_s for r in runs if r.duration_s is not None]
    if durations:
        print(f"\n[dv_report] total sim time: {sum(durations):.2f}s")

    rc = 0 if all(r.expected for r in runs) else 1
    if rc:
        print(f"\n[dv_report] SUMMARY: {utils.red('FAIL (unexpected outcomes)')}")
    else:
        print(f"\n[dv_report] SUMMARY: {utils.green('PASS (no unexpected outcomes)')}")
    return rc


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    tests_root = Path(f"{args.outdir}/{DEFAULT_TESTS_SUBDIR}").resolve()
    runs = collect(tests_root)
    return print_report(tests_root, runs, unexpected_only=args.unexpected_only)


if __name__ == "__main__":
    raise SystemExit(main())

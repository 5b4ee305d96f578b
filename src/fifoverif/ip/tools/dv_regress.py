# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/tools/dv_regress.py

"""YAML-driven regression runner.

Every job is one `dv` invocation. Arguments come from the YAML file only; the
command line picks the file, the output directory and, optionally, a subset
of jobs by name.

YAML Schema:
    defaults:
      args: ["--sim=icarus", "--waves=0"]  # Optional, applied to every job

    jobs:
      - name: <job_name>
        args: ["--design=...", "--test=...", "--nseeds=2", ...]
      - name: <job_name2>
        args: "--design=... --test=..."    # A single string also works
        expect: FAIL                       # Optional, default PASS

Usage:
    dv-regress --file=src/fifoverif/ip/sync_fifo/dv/dv_regress.yaml
    dv-regress --file=... --job=smoke --job=long

After all jobs run, each one is listed as PASS or FAIL with the command that
reruns it.
"""

from __future__ import annotations

import argparse
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import yaml

from fifoverif import utils

DEFAULT_OUT_DIR = "out_dv"
_EXPECT_VALUES = frozenset({"PASS", "FAIL"})


@dataclass(frozen=True)
class Job:
    """A single regression job."""

    name: str
    args: list[str]
    expect: str = "PASS"

    def command(self, default_args: Sequence[str], outdir: str) -> list[str]:
        """Full dv command line; job args follow defaults so they win."""
        cmd = ["dv", *default_args, *self.args]
        if self.expect != "PASS":
            cmd.append(f"--expect={self.expect}")
        cmd.append(f"--outdir={outdir}")
        return cmd


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="dv YAML regression",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--file", type=Path, required=True, help="Path to dv_regress.yaml")
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--job",
        dest="jobs",
        action="append",
        default=[],
        help="run only the named job (repeatable)",
    )
    return ap.parse_args(argv)


def _as_str_list(x: Any) -> list[str]:
    """Convert a YAML value (None, str, or list) to a list of strings."""
    if x is None:
        return []
    if isinstance(x, str):
        return shlex.split(x)
    return [str(t) for t in list(x)]


def _load_config(path: Path) -> tuple[list[str], list[Job]]:
    """Load the regression file.

    Returns:
        (default_args, jobs)

    Raises:
        ValueError: If the YAML structure is invalid, jobs is empty, a job
            name repeats, or an expect value is not PASS/FAIL.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must be a mapping")

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ValueError("'defaults' must be a mapping")
    default_args = _as_str_list(defaults.get("args"))

    jobs_raw = data.get("jobs")
    if not isinstance(jobs_raw, list) or not jobs_raw:
        raise ValueError("'jobs' must be a non-empty list")

    jobs: list[Job] = []
    names: set[str] = set()
    for idx, j in enumerate(jobs_raw):
        if not isinstance(j, dict):
            raise ValueError(f"jobs[{idx}] must be a mapping")
        name = str(j.get("name") or f"job{idx}")
        if name in names:
            raise ValueError(f"jobs[{idx}]: duplicate job name {name!r}")
        names.add(name)
        expect = str(j.get("expect", "PASS")).strip().upper()
        if expect not in _EXPECT_VALUES:
            raise ValueError(f"jobs[{idx}]: expect must be PASS or FAIL, got {expect!r}")
        jobs.append(Job(name=name, args=_as_str_list(j.get("args")), expect=expect))

    return default_args, jobs


def _select_jobs(jobs: Sequence[Job], wanted: Sequence[str]) -> list[Job]:
    """Keep jobs named in `wanted` (all jobs when empty), in file order."""
    if not wanted:
        return list(jobs)
    unknown = sorted(set(wanted) - {j.name for j in jobs})
    if unknown:
        raise ValueError(f"unknown job name(s): {', '.join(unknown)}")
    return [j for j in jobs if j.name in wanted]


def _pretty_cmd(cmd: Sequence[str]) -> str:
    return " ".join(shlex.quote(x) for x in cmd)


def run_regress(args: argparse.Namespace) -> int:
    """Run the selected jobs in order and print a pass/fail report.

    Returns:
        0 if all jobs pass, 1 if any job fails or the file is missing.
    """
    yaml_path = args.file.resolve()
    if not yaml_path.is_file():
        print(f"\n[dv_regress] No file found at {yaml_path}", file=sys.stderr)
        return 1
    print(f"\n[dv_regress] file: {yaml_path}")

    default_args, jobs = _load_config(yaml_path)
    jobs = _select_jobs(jobs, args.jobs)

    passes: list[str] = []
    fails: list[str] = []

    for job in jobs:
        cmd = job.command(default_args, args.outdir)
        cmd_str = _pretty_cmd(cmd)
        print(f"\n[dv_regress] job: {job.name}")
        print(f"[dv_regress] cmd: {cmd_str}\n")
        job_rc = subprocess.run(cmd, check=False).returncode
        (passes if job_rc == 0 else fails).append(cmd_str)

    print("\n[dv_regress] JOBS REPORT\n")
    for c in passes:
        print(f"{utils.green('PASS')}: {c}")
    for c in fails:
        print(f"{utils.red('FAIL')}: {c}")

    rep = f"dv-report --outdir={args.outdir}"
    print(f"\n[dv_regress] To see a detailed report of all tests: {utils.yellow(rep)}")

    if fails:
        print(f"\n[dv_regress] SUMMARY: {utils.red('FAIL')} ({len(fails)}/{len(jobs)})")
        return 1
    print(f"\n[dv_regress] SUMMARY: {utils.green('PASS')} ({len(jobs)} job(s))")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return run_regress(parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())

# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_dv_regress.py

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from fifoverif import utils
from fifoverif.ip.tools import dv_regress


def _yaml(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "dv_regress.yaml"
    p.write_text(text, encoding="utf-8")
    return p


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("--design=a --test='b c'", ["--design=a", "--test=b c"]),
        (["--seeds", 1], ["--seeds", "1"]),
    ],
)
def test_as_str_list(value: Any, expected: list[str]) -> None:
    assert dv_regress._as_str_list(value) == expected


def test_load_config(tmp_path: Path) -> None:
    path = _yaml(
        tmp_path,
        """
defaults:
  args: ["--sim=icarus"]
jobs:
  - name: smoke
    args: ["--design=sync_fifo", "--test=test_sync_fifo"]
  - args: "--design=sync_fifo --test=test_sync_fifo --nseeds=2"
    expect: fail
""",
    )
    default_args, jobs = dv_regress._load_config(path)
    assert default_args == ["--sim=icarus"]
    assert [j.name for j in jobs] == ["smoke", "job1"]
    assert jobs[1].args[-1] == "--nseeds=2"
    assert jobs[1].expect == "FAIL"


@pytest.mark.parametrize(
    "text",
    [
        "- just a list\n",
        "jobs: []\n",
        "defaults: [1]\njobs:\n  - name: a\n",
        "jobs:\n  - plain string\n",
        "jobs:\n  - name: a\n  - name: a\n",
        "jobs:\n  - name: a\n    expect: maybe\n",
    ],
)
def test_load_config_rejects(tmp_path: Path, text: str) -> None:
    with pytest.raises(ValueError):
        dv_regress._load_config(_yaml(tmp_path, text))


def test_job_command_order() -> None:
    job = dv_regress.Job(name="j", args=["--sim=verilator"], expect="FAIL")
    assert job.command(["--sim=icarus"], "out") == [
        "dv",
        "--sim=icarus",
        "--sim=verilator",
        "--expect=FAIL",
        "--outdir=out",
    ]


def test_select_jobs() -> None:
    jobs = [dv_regress.Job("a", []), dv_regress.Job("b", []), dv_regress.Job("c", [])]
    assert dv_regress._select_jobs(jobs, []) == jobs
    assert [j.name for j in dv_regress._select_jobs(jobs, ["c", "a"])] == ["a", "c"]
    with pytest.raises(ValueError):
        dv_regress._select_jobs(jobs, ["zzz"])


def test_run_regress_reports_failures(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = _yaml(
        tmp_path,
        "jobs:\n  - name: good\n    args: --test=ok\n  - name: bad\n    args: --test=ko\n",
    )
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], check: bool) -> subprocess.CompletedProcess:
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 1 if "--test=ko" in cmd else 0)

    monkeypatch.setattr(dv_regress.subprocess, "run", fake_run)

    rc = dv_regress.main(["--file", str(path), "--outdir", "o"])

    assert rc == 1
    assert calls == [
        ["dv", "--test=ok", "--outdir=o"],
        ["dv", "--test=ko", "--outdir=o"],
    ]
    out = capsys.readouterr().out
    assert f"{utils.green('PASS')}: dv --test=ok --outdir=o" in out
    assert f"{utils.red('FAIL')}: dv --test=ko --outdir=o" in out


def test_run_regress_missing_file(tmp_path: Path) -> None:
    assert dv_regress.main(["--file", str(tmp_path / "nope.yaml")]) == 1


def test_shipped_regression_file_loads() -> None:
    path = (
        utils.get_repo_root()
        / "src/fifoverif/ip/sync_fifo/dv/dv_regress.yaml"
    )
    default_args, jobs = dv_regress._load_config(path)
    assert "--design=sync_fifo" in default_args
    assert {j.name for j in jobs} >= {"all_tests", "random_seeds"}

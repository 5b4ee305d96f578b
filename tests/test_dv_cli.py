# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_dv_cli.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fifoverif.ip.tools import dv

BASE = ["--design=sync_fifo", "--test=test_sync_fifo"]


def _cfg(tmp_path: Path, *extra: str) -> dv.RunCfg:
    argv = [*BASE, f"--outdir={tmp_path / 'out'}", *extra]
    return dv.RunCfg.from_args(dv.parse_args(argv), argv)


def test_parse_args_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("CMD", "SIM", "VERBOSITY", "WAVES", "COVERAGE_EN"):
        monkeypatch.delenv(var, raising=False)
    args = dv.parse_args(BASE)
    assert args.cmd == "both"
    assert args.sim == "icarus"
    assert args.waves == "0"
    assert args.coverage_en == "1"
    assert args.expect == "PASS"
    assert args.testcase is None
    assert args.plusargs == []


def test_parse_args_repeatable_plusargs() -> None:
    args = dv.parse_args(
        [
            *BASE,
            "--plusarg=+SYNC_FIFO_TXN_COUNT=200",
            "--plusarg=+SYNC_FIFO_PAYLOAD_MAX=255",
            "--testcase=SyncFifoBaseTest",
        ]
    )
    assert args.plusargs == ["+SYNC_FIFO_TXN_COUNT=200", "+SYNC_FIFO_PAYLOAD_MAX=255"]
    assert args.testcase == "SyncFifoBaseTest"


@pytest.mark.parametrize(
    "argv",
    [
        ["--test=test_sync_fifo"],
        ["--design=sync_fifo"],
        [*BASE, "--nseeds=-1"],
        [*BASE, "--plusarg=SYNC_FIFO_TXN_COUNT=5"],
    ],
)
def test_validate_args_rejects(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        dv.validate_args(dv.parse_args(argv))


def test_validate_args_build_only_needs_no_test() -> None:
    dv.validate_args(dv.parse_args(["--design=sync_fifo", "--cmd=build"]))


@pytest.mark.parametrize(
    "argv",
    [
        [*BASE, "--nseeds", "3"],
        [*BASE, "--nseeds=3"],
        [*BASE, "--seeds", "1", "2"],
        ["--seeds=5", *BASE],
    ],
)
def test_replay_argv_pins_one_seed(argv: list[str]) -> None:
    assert dv.replay_argv(argv, 9) == [*BASE, "--seeds", "9"]


def test_replay_argv_keeps_options_after_seed_list() -> None:
    argv = [*BASE, "--seeds", "1", "2", "--waves=1"]
    assert dv.replay_argv(argv, 2) == [*BASE, "--waves=1", "--seeds", "2"]


def test_derive_seeds_default() -> None:
    assert dv.derive_seeds(dv.parse_args(BASE)) == [dv.DEFAULT_SEED]


def test_derive_seeds_explicit_override_nseeds() -> None:
    args = dv.parse_args([*BASE, "--seeds", "7", "0x10", "--nseeds=5"])
    assert dv.derive_seeds(args) == [7, 16]


def test_derive_seeds_nseeds_reproducible() -> None:
    a = dv.derive_seeds(dv.parse_args([*BASE, "--nseeds=4", "--seed-base=3"]))
    b = dv.derive_seeds(dv.parse_args([*BASE, "--nseeds=4", "--seed-base=3"]))
    c = dv.derive_seeds(dv.parse_args([*BASE, "--nseeds=4", "--seed-base=4"]))
    assert a == b
    assert len(a) == 4
    assert a != c


def test_run_cfg_paths(tmp_path: Path) -> None:
    cfg = _cfg(tmp_path, "--testcase=SyncFifoBaseTest")
    assert cfg.test_module == "fifoverif.ip.sync_fifo.dv.test_sync_fifo"
    assert cfg.build_dir == (tmp_path / "out" / "builds" / "sync_fifo.icarus").resolve()
    assert cfg.test_dir(5).name == "sync_fifo.test_sync_fifo.SyncFifoBaseTest.5"
    assert _cfg(tmp_path, "--waves=1").build_dir.name == "sync_fifo.icarus.waves"


def test_build_args_use_design_srclist(tmp_path: Path) -> None:
    args = dv.build_args(_cfg(tmp_path))
    srclist = Path(args[args.index("-f") + 1])
    assert srclist.is_file()
    assert srclist.read_text().strip().endswith("sync_fifo.sv")


def test_build_args_verilator_waves(tmp_path: Path) -> None:
    args = dv.build_args(_cfg(tmp_path, "--sim=verilator", "--waves=1"))
    assert args[:3] == ["--timing", "--autoflush", "--trace-fst"]


def test_build_args_unknown_design(tmp_path: Path) -> None:
    argv = ["--design=no_such_design", "--test=t", f"--outdir={tmp_path}"]
    cfg = dv.RunCfg.from_args(dv.parse_args(argv), argv)
    with pytest.raises(FileNotFoundError):
        dv.build_args(cfg)


def test_sim_env_plusargs_and_env(tmp_path: Path) -> None:
    cfg = _cfg(
        tmp_path,
        "--coverage-en=0",
        "--verbosity=debug",
        "--plusarg=+SYNC_FIFO_TXN_COUNT=50",
    )
    plusargs, env = dv.sim_env(cfg, 123, tmp_path)
    assert plusargs == ["+COVERAGE_EN=0", "+SYNC_FIFO_TXN_COUNT=50"]
    assert env["COCOTB_RANDOM_SEED"] == "123"
    assert env["COCOTB_LOG_LEVEL"] == "DEBUG"
    assert env["COCOTB_PLUSARGS"] == "+COVERAGE_EN=0 +SYNC_FIFO_TXN_COUNT=50"
    assert env["COV_YAML"] == str(tmp_path / "coverage.yaml")


def test_sim_env_icarus_dump_path(tmp_path: Path) -> None:
    plusargs, _ = dv.sim_env(_cfg(tmp_path, "--waves=1"), 1, tmp_path)
    assert plusargs[-1] == f"+dumpfile_path={tmp_path / 'waves.fst'}"


def test_run_seed_writes_manifest(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(dv.pytest, "main", lambda args: 1)
    cfg = _cfg(tmp_path, "--expect=FAIL", "--nseeds=3")

    rc = dv.run_seed(cfg, 77, build=True)

    assert rc == 0  # failed as expected
    manifest = json.loads((cfg.test_dir(77) / "manifest.json").read_text())
    assert manifest["status"] == "FAIL"
    assert manifest["expect"] == "FAIL"
    assert manifest["seed"] == 77
    assert manifest["replay_cmd"].startswith("dv " + " ".join(BASE))
    assert manifest["replay_cmd"].endswith("--expect=FAIL --seeds 77")


def test_run_seed_unexpected_result(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(dv.pytest, "main", lambda args: 1)
    assert dv.run_seed(_cfg(tmp_path), 1, build=False) == 1


def test_framework_requires_dv_context() -> None:
    with pytest.raises(RuntimeError):
        dv.test_framework()

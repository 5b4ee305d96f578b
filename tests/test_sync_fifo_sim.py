# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_sync_fifo_sim.py

"""Build sync_fifo with Icarus and run the pyuvm tests in one simulation."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from cocotb_tools.runner import get_results, get_runner

from fifoverif import utils

pytestmark = pytest.mark.skipif(
    shutil.which("iverilog") is None, reason="Icarus Verilog not installed"
)

RTL_DIR = utils.get_repo_root() / "src" / "fifoverif" / "ip" / "sync_fifo" / "rtl"


def test_sync_fifo_icarus(tmp_path: Path) -> None:
    runner = get_runner("icarus")
    runner.build(
        sources=[RTL_DIR / "sync_fifo.sv"],
        hdl_toplevel="sync_fifo",
        build_dir=tmp_path / "build",
        timescale=("1ns", "1ps"),
    )
    results_xml = runner.test(
        hdl_toplevel="sync_fifo",
        hdl_toplevel_lang="verilog",
        test_module="fifoverif.ip.sync_fifo.dv.test_sync_fifo",
        build_dir=tmp_path / "build",
        test_dir=tmp_path,
        seed=1,
        extra_env={"COVERAGE_EN": "1", "COV_YAML": str(tmp_path / "coverage.yaml")},
    )
    num_tests, num_failed = get_results(results_xml)
    assert num_tests >= 7
    assert num_failed == 0
    assert (tmp_path / "coverage.yaml").is_file()


def test_base_handshake_icarus(tmp_path: Path) -> None:
    runner = get_runner("icarus")
    runner.build(
        sources=[RTL_DIR / "sync_fifo.sv"],
        hdl_toplevel="sync_fifo",
        build_dir=tmp_path / "build",
        timescale=("1ns", "1ps"),
    )
    results_xml = runner.test(
        hdl_toplevel="sync_fifo",
        hdl_toplevel_lang="verilog",
        test_module="fifoverif.ip.shared.dv.test_base_handshake",
        build_dir=tmp_path / "build",
        test_dir=tmp_path,
        seed=1,
    )
    num_tests, num_failed = get_results(results_xml)
    assert num_tests == 2
    assert num_failed == 0


def test_sync_fifo_rtl_icarus(tmp_path: Path) -> None:
    runner = get_runner("icarus")
    runner.build(
        sources=[RTL_DIR / "sync_fifo.sv"],
        hdl_toplevel="sync_fifo",
        build_dir=tmp_path / "build",
        timescale=("1ns", "1ps"),
    )
    results_xml = runner.test(
        hdl_toplevel="sync_fifo",
        hdl_toplevel_lang="verilog",
        test_module="fifoverif.ip.sync_fifo.dv.test_sync_fifo_rtl",
        build_dir=tmp_path / "build",
        test_dir=tmp_path,
        seed=1,
    )
    num_tests, num_failed = get_results(results_xml)
    assert num_tests == 2
    assert num_failed == 0

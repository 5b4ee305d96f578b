# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/tools/dv.py

"""Build a design once and run its cocotb/pyuvm test module for each seed.

Every seed is one pytest session around test_framework(), which drives the
cocotb runner. Each seed's directory gets a manifest.json with the outcome
and a replay command that pins that seed.

Command-line interface:
    dv --design=<design> --test=<test_module> [OPTIONS]

Typical usage:
    # Every test in the module, default seed
    dv --design=sync_fifo --test=test_sync_fifo

    # One test case, 200 requests, three fixed seeds
    dv --design=sync_fifo --test=test_sync_fifo --testcase=SyncFifoBaseTest \\
        --plusarg=+SYNC_FIFO_TXN_COUNT=200 --seeds 1 2 3

    # Ten random seeds
    dv --design=sync_fifo --test=test_sync_fifo --nseeds=10
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import random
import shlex
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Sequence

import pytest
from cocotb_tools.runner import get_runner

# If executed as a script (path mode), __package__ is empty/None and __spec__ is None.
if (__package__ in (None, "")) and (__spec__ is None):
    print("[dv] ERROR: Please run as 'dv'", file=sys.stderr)
    raise SystemExit(2)

from fifoverif import utils  # isort:skip pylint: disable=wrong-import-position

PROJ_DIR: Final[Path] = utils.get_repo_root()
IP_ROOT: Final[Path] = PROJ_DIR / "src" / "fifoverif" / "ip"
FRAMEWORK: Final[str] = f"{Path(__file__).resolve()}::test_framework"
PYTEST_OPTS: Final[tuple[str, ...]] = ("-vv", "-s", "-ra", "-x")
DEFAULT_SEED = 42

log = logging.getLogger("dv")


@dataclass(frozen=True)
class RunCfg:  # pylint: disable=too-many-instance-attributes
    """One dv invocation; shared by every seed it runs."""

    cmd: str
    sim: str
    outdir: Path
    verbosity: str
    waves: bool
    design: str
    test: str
    testcase: str | None
    expect: str
    coverage_en: bool
    plusargs: tuple[str, ...]
    argv: tuple[str, ...] = ()

    @classmethod
    def from_args(cls, args: argparse.Namespace, argv: Sequence[str]) -> RunCfg:
        return cls(
            cmd=args.cmd,
            sim=args.sim,
            outdir=Path(args.outdir).resolve(),
            verbosity=args.verbosity,
            waves=args.waves == "1",
            design=args.design,
            test=args.test,
            testcase=args.testcase,
            expect=args.expect,
            coverage_en=args.coverage_en == "1",
            plusargs=tuple(args.plusargs),
            argv=tuple(argv),
        )

    @property
    def build_dir(self) -> Path:
        """One build per design, simulator and waves setting."""
        leaf = f"{self.design}.{self.sim}" + (".waves" if self.waves else "")
        return self.outdir / "builds" / leaf

    @property
    def test_module(self) -> str:
        return f"fifoverif.ip.{self.design}.dv.{self.test}"

    def test_dir(self, seed: int) -> Path:
        name = self.test or "build_only"
        if self.testcase:
            name = f"{name}.{self.testcase}"
        return self.outdir / "tests" / f"{self.design}.{name}.{seed}"


# === CLI ===


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for DV test execution."""
    ap = argparse.ArgumentParser(
        description="Build and run cocotb/pyuvm testbenches via pytest",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument(
        "--cmd",
        choices=["build", "test", "both"],
        default=os.getenv("CMD", "both"),
        help="run only build, only test, or both",
    )
    ap.add_argument(
        "--sim",
        choices=["icarus", "verilator"],
        default=os.getenv("SIM", "icarus"),
        help="simulator",
    )
    ap.add_argument("--outdir", default="out_dv", help="output directory")
    ap.add_argument(
        "--verbosity",
        choices=["critical", "error", "warning", "info", "debug"],
        default=os.getenv("VERBOSITY", "info"),
        help="log level for the testbench and this tool",
    )
    ap.add_argument(
        "--waves",
        choices=["0", "1"],
        default=os.getenv("WAVES", "0"),
        help="dump FST waveforms",
    )
    ap.add_argument("--design", default="", help="design to build (e.g. sync_fifo)")
    ap.add_argument(
        "--test",
        default="",
        help="test module, imported as fifoverif.ip.<design>.dv.<test>",
    )
    ap.add_argument("--testcase", default=None, help="run only this test class")
    ap.add_argument(
        "--expect",
        choices=["PASS", "FAIL"],
        default="PASS",
        help="expected result, recorded in each manifest",
    )
    ap.add_argument(
        "--seeds",
        nargs="+",
        metavar="SEED",
        help="explicit seeds (decimal, 0x..., or 'random'); overrides --nseeds",
    )
    ap.add_argument("--nseeds", type=int, default=0, help="number of random seeds")
    ap.add_argument(
        "--seed-base",
        type=int,
        default=1999,
        help="seeds the generator behind --nseeds and 'random'",
    )
    ap.add_argument(
        "--coverage-en",
        choices=["0", "1"],
        default=os.getenv("COVERAGE_EN", "1"),
        help="collect functional coverage",
    )
    ap.add_argument(
        "--plusarg",
        dest="plusargs",
        action="append",
        default=[],
        help="+NAME=value for the testbench (repeatable), "
        "e.g. --plusarg=+SYNC_FIFO_TXN_COUNT=200",
    )
    return ap.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Exit with a message on missing or malformed arguments."""
    if not args.design:
        raise SystemExit("[dv]: error: argument --design required")
    if args.cmd != "build" and not args.test:
        raise SystemExit(f"[dv]: error: argument --test required for --cmd={args.cmd}")
    if args.nseeds < 0:
        raise SystemExit(f"[dv]: error: --nseeds must be >= 0, got {args.nseeds}")
    bad = [p for p in args.plusargs if not p.startswith("+")]
    if bad:
        raise SystemExit(f"[dv]: error: --plusarg must start with '+': {bad[0]!r}")


def replay_argv(argv: Sequence[str], seed: int) -> list[str]:
    """argv with any --seeds/--nseeds removed and `--seeds <seed>` appended."""
    out: list[str] = []
    i = 0
    while i < len(argv):
        tok = argv[i]
        i += 1
        if tok == "--nseeds":
            i += 1
        elif tok == "--seeds":
            while i < len(argv) and not argv[i].startswith("-"):
                i += 1
        elif not tok.startswith(("--seeds=", "--nseeds=")):
            out.append(tok)
    return [*out, "--seeds", str(seed)]


def derive_seeds(args: argparse.Namespace) -> list[int]:
    """Explicit --seeds, else --nseeds draws from --seed-base, else DEFAULT_SEED."""
    rng = random.Random(args.seed_base & utils.SEED_MASK)
    if args.seeds:
        return [utils.normalize_seed(rng, s) for s in args.seeds]
    return [utils.normalize_seed(rng, "random") for _ in range(args.nseeds)] or [
        DEFAULT_SEED
    ]


def _configure_logging(verbosity: str) -> None:
    lvl = getattr(logging, verbosity.upper(), logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=lvl,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    logging.getLogger().setLevel(lvl)


# === Runner glue ===


def _srclist_for(design: str) -> Path:
    srclist = IP_ROOT / design / "rtl" / "srclist.f"
    if not srclist.is_file():
        raise FileNotFoundError(f"[dv] no srclist for design {design!r}: {srclist}")
    return srclist


def build_args(cfg: RunCfg) -> list[str]:
    """Simulator build switches plus `-f <absolute srclist>`."""
    srclist = _srclist_for(cfg.design)
    cfg.build_dir.mkdir(parents=True, exist_ok=True)
    out: list[str] = []
    if cfg.sim == "verilator":
        out += ["--timing", "--autoflush"]
        if cfg.waves:
            out.append("--trace-fst")
    abs_srclist = utils.absolutize_srclist(srclist, PROJ_DIR, cfg.build_dir)
    return [*out, "-f", str(abs_srclist)]


def sim_env(cfg: RunCfg, seed: int, test_dir: Path) -> tuple[list[str], dict[str, str]]:
    """Return (plusargs, extra_env) for one seed's simulation."""
    plusargs = [f"+COVERAGE_EN={int(cfg.coverage_en)}", *cfg.plusargs]
    if cfg.waves and cfg.sim == "icarus":
        # Icarus reads the dump path as a plusarg after the .vvp file
        plusargs.append(f"+dumpfile_path={test_dir / 'waves.fst'}")
    env = {
        "COCOTB_RANDOM_SEED": str(seed),
        "COCOTB_LOG_LEVEL": cfg.verbosity.upper(),
        "COCOTB_PLUSARGS": " ".join(plusargs),
        "COV_YAML": str(test_dir / "coverage.yaml"),
    }
    return plusargs, env


def run_build(cfg: RunCfg) -> None:
    log.info("building %s with %s in %s", cfg.design, cfg.sim, cfg.build_dir)
    get_runner(cfg.sim).build(
        hdl_toplevel=cfg.design,
        timescale=("1ns", "1ps"),
        waves=cfg.waves,
        build_dir=cfg.build_dir,
        build_args=build_args(cfg),
        log_file=str(cfg.build_dir / "build.log"),
    )


def run_test(cfg: RunCfg, seed: int, test_dir: Path) -> None:
    log.info("running %s seed=%d in %s", cfg.test_module, seed, test_dir)
    test_dir.mkdir(parents=True, exist_ok=True)
    plusargs, env = sim_env(cfg, seed, test_dir)
    get_runner(cfg.sim).test(
        hdl_toplevel_lang="verilog",
        hdl_toplevel=cfg.design,
        waves=cfg.waves,
        build_dir=cfg.build_dir,
        test_dir=test_dir,
        test_module=cfg.test_module,
        testcase=cfg.testcase,
        seed=seed,
        log_file=str(test_dir / "test.log"),
        test_args=(
            ["--trace-file", str(test_dir / "waves.fst")]
            if cfg.waves and cfg.sim == "verilator"
            else []
        ),
        plusargs=plusargs,
        extra_env=env,
    )


# === Pytest entrypoint ===

# Set by run_seed() for the pytest session it starts
_current: dict[str, Any] = {}


def test_framework() -> None:
    """Pytest entrypoint: build and/or test for the seed run_seed() selected."""
    if not _current:
        raise RuntimeError("[dv] test_framework run outside dv")
    cfg: RunCfg = _current["cfg"]
    if _current["build"]:
        run_build(cfg)
    elif not cfg.build_dir.is_dir():
        raise RuntimeError(f"[dv] build dir missing: {cfg.build_dir}; run --cmd build")
    if cfg.cmd != "build":
        run_test(cfg, _current["seed"], _current["test_dir"])


def run_seed(cfg: RunCfg, seed: int, *, build: bool) -> int:
    """Run one pytest session for `seed` and write its manifest.

    Returns 0 when the outcome matches cfg.expect, 1 otherwise.
    """
    test_dir = cfg.test_dir(seed)
    test_dir.mkdir(parents=True, exist_ok=True)
    _current.update(cfg=cfg, seed=seed, test_dir=test_dir, build=build)
    # pytest re-imports this file by path; make that resolve to this module
    sys.modules.setdefault("fifoverif.ip.tools.dv", sys.modules[__name__])

    t0 = time.time()
    try:
        rc = pytest.main([*PYTEST_OPTS, FRAMEWORK])
    finally:
        _current.clear()
    duration = time.time() - t0

    status = "PASS" if rc == 0 else "FAIL"
    replay = " ".join(shlex.quote(a) for a in ["dv", *replay_argv(cfg.argv, seed)])
    manifest = {
        "status": status,
        "expect": cfg.expect,
        "seed": seed,
        "duration_s": round(duration, 3),
        "finished_at": utils.iso_utc(),
        "replay_cmd": replay,
        "build_dir": str(cfg.build_dir),
        "test_module": cfg.test_module,
        "testcase": cfg.testcase,
    }
    (test_dir / "manifest.json").write_text(
        json.dumps(manifest, indent=2), encoding="utf-8"
    )

    ok = status == cfg.expect
    tag = f"{status} ({'EXPECTED' if ok else 'UNEXPECTED'})"
    print(f"{utils.green(tag) if ok else utils.red(tag)}: {replay}")
    return 0 if ok else 1


def main(argv: Sequence[str] | None = None) -> int:
    """Build once, then run the test module for every derived seed."""
    argv = list(sys.argv[1:] if argv is None else argv)
    args = parse_args(argv)
    validate_args(args)
    _configure_logging(args.verbosity)
    cfg = RunCfg.from_args(args, argv)

    if cfg.cmd == "build":
        return run_seed(cfg, 0, build=True)

    seeds = derive_seeds(args)
    log.info("seeds: %s", seeds)
    rc = 0
    for idx, seed in enumerate(seeds):
        rc |= run_seed(cfg, seed, build=cfg.cmd == "both" and idx == 0)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())

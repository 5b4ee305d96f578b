# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_utils.py

from __future__ import annotations

import random
import re
from pathlib import Path

import pytest

from fifoverif import utils


def test_normalize_seed_decimal_and_hex() -> None:
    rng = random.Random(0)
    assert utils.normalize_seed(rng, "42") == 42
    assert utils.normalize_seed(rng, "0x10") == 16


def test_normalize_seed_wraps_to_32_bits() -> None:
    assert utils.normalize_seed(random.Random(0), str(1 << 32 | 5)) == 5


def test_normalize_seed_random_is_reproducible() -> None:
    a = utils.normalize_seed(random.Random(1999), "random")
    b = utils.normalize_seed(random.Random(1999), "RAND")
    assert a == b
    assert 0 <= a < (1 << 32)


def test_normalize_seed_invalid_exits() -> None:
    with pytest.raises(SystemExit):
        utils.normalize_seed(random.Random(0), "banana")


def test_colors_wrap_text() -> None:
    assert utils.green("ok") == f"{utils.GREEN}ok{utils.RESET}"
    assert utils.red("no") == f"{utils.RED}no{utils.RESET}"
    assert utils.yellow("hm") == f"{utils.YELLOW}hm{utils.RESET}"


def test_iso_utc_format() -> None:
    assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\dZ", utils.iso_utc())


def test_repo_root_holds_pyproject() -> None:
    assert (utils.get_repo_root() / "pyproject.toml").is_file()


def test_absolutize_srclist_expands_nested(tmp_path: Path) -> None:
    (tmp_path / "rtl").mkdir()
    (tmp_path / "rtl" / "inner.f").write_text("rtl/b.sv\n")
    top = tmp_path / "rtl" / "top.f"
    top.write_text(
        "// comment\n"
        "\n"
        "+incdir+rtl/inc\n"
        "-f rtl/inner.f\n"
        "+define+FOO\n"
        "rtl/a.sv\n"
    )
    out_dir = tmp_path / "build"
    out_dir.mkdir()

    out = utils.absolutize_srclist(top, tmp_path, out_dir)

    assert out == out_dir / "srclist.abs.f"
    assert out.read_text().splitlines() == [
        f"+incdir+{(tmp_path / 'rtl' / 'inc').resolve()}",
        str((tmp_path / "rtl" / "b.sv").resolve()),
        "+define+FOO",
        str((tmp_path / "rtl" / "a.sv").resolve()),
    ]


def test_absolutize_srclist_keeps_missing_nested(tmp_path: Path) -> None:
    top = tmp_path / "top.f"
    top.write_text("-f missing.f\n")
    out = utils.absolutize_srclist(top, tmp_path, tmp_path)
    assert out.read_text() == "-f missing.f\n"

# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/utils.py

"""Helpers shared by the dv, dv-regress and dv-report command-line tools."""

from __future__ import annotations

import random
import time
from pathlib import Path

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RESET = "\033[0m"

SEED_MASK = 0xFFFF_FFFF
_RANDOM_SEED_WORDS = frozenset({"rand", "random", "auto"})


def _paint(color: str, s: str) -> str:
    return f"{color}{s}{RESET}"


def green(s: str) -> str:
    return _paint(GREEN, s)


def red(s: str) -> str:
    return _paint(RED, s)


def yellow(s: str) -> str:
    return _paint(YELLOW, s)


def iso_utc() -> str:
    """Current UTC time as YYYY-MM-DDTHH:MM:SSZ."""
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def get_repo_root() -> Path:
    """Nearest ancestor of this file holding pyproject.toml.

    Falls back to the parent of the enclosing src/ directory.
    """
    here = Path(__file__).resolve()
    for p in here.parents:
        if (p / "pyproject.toml").is_file():
            return p
    for p in here.parents:
        if p.name == "src":
            return p.parent
    return here.parents[-1]


def normalize_seed(rng: random.Random, s: str) -> int:
    """Turn a seed argument into a 32-bit int.

    Accepts decimal, 0x-prefixed hex, or rand/random/auto (drawn from rng).
    Raises SystemExit for anything else, so the CLI reports it directly.
    """
    if s.lower() in _RANDOM_SEED_WORDS:
        return rng.getrandbits(32)
    try:
        return int(s, 0) & SEED_MASK
    except ValueError as exc:
        raise SystemExit(
            f"[dv] Invalid seed '{s}'. Use decimal, 0x..., or 'random'."
        ) from exc


def _srclist_lines(srclist: Path, repo_root: Path) -> list[str]:
    """Expand one srclist, following -f includes, with absolute paths."""
    out: list[str] = []
    for raw in srclist.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        if line.startswith("+incdir+"):
            out.append(f"+incdir+{(repo_root / line[len('+incdir+'):]).resolve()}")
        elif line.startswith("-f "):
            nested = (repo_root / line[3:].strip()).resolve()
            # A missing include is passed through for the simulator to report.
            out.extend(_srclist_lines(nested, repo_root) if nested.exists() else [line])
        elif line.startswith(("-", "+")):
            out.append(line)
        else:
            out.append(str((repo_root / line).resolve()))
    return out


def absolutize_srclist(infile: Path, repo_root: Path, out_dir: Path) -> Path:
    """Write out_dir/srclist.abs.f: infile flattened with absolute paths."""
    out = out_dir / "srclist.abs.f"
    out.write_text("\n".join(_srclist_lines(infile, repo_root)) + "\n")
    return out

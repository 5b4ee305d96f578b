# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/utils_cli.py

"""Read testbench settings from environment variables and plusargs.

Follows the uvm_cmdline_processor pattern: settings may come from the
environment (handy for `dv` and CI) or from simulator plusargs (handy for
replaying a failing seed by hand).

Configuration Precedence:
    1. Environment variables (NAME or FV_NAME)
    2. Plusargs (+NAME or +NAME=value)
    3. Default values

Plusargs Format:
    Boolean flags: +NAME (treated as True) or +NAME=1/0/true/false/yes/no
    String values: +NAME=value
    Integer values: +NAME=123 or +NAME=0x7B (hex supported)
    Factory overrides: +uvm_set_type_override=req,over[,replace]
                      +uvm_set_inst_override=req,over,path

Environment Variables:
    PLUSARGS, COCOTB_PLUSARGS, or FV_PLUSARGS: Space-separated plusargs
    Individual settings: NAME or FV_NAME (e.g., SYNC_FIFO_TXN_COUNT=100)

Reference:
    UVM Class Reference Manual - uvm_cmdline_processor
    https://www.accellera.org/images/downloads/standards/uvm/UVM_Class_Reference_Manual_1.2.pdf

Example:
    >>> txn_count = get_int_setting("SYNC_FIFO_TXN_COUNT", 30)
    >>> coverage_en = get_bool_setting("COVERAGE_EN", True)
    >>> apply_factory_overrides_from_plusargs(logger)
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Tuple

import pyuvm

ENV_PREFIX = "FV_"

_TRUE_SET = {"1", "true", "yes", "y", "on"}
_FALSE_SET = {"0", "false", "no", "n", "off"}

# pyuvm typically throws lookup/value/type errors on bad overrides
_FACTORY_EXC: Tuple[type[BaseException], ...] = (KeyError, ValueError, TypeError)


def _parse_bool(s: str) -> bool | None:
    """Convert str to bool."""
    v = s.strip().lower()
    if v in _TRUE_SET:
        return True
    if v in _FALSE_SET:
        return False
    return None


def _parse_int(s: str) -> int | None:
    try:
        return int(s, 0)
    except ValueError:
        return None


def iter_plusargs() -> Iterable[str]:
    """Yield +args from the first non-empty plusarg env var."""
    s = (
        os.environ.get("PLUSARGS", "")
        or os.environ.get("COCOTB_PLUSARGS", "")
        or os.environ.get(f"{ENV_PREFIX}PLUSARGS", "")
    )
    return s.split()


def _get_plusarg(name: str) -> str | None:
    """Return the value of +NAME=val ('val') or bare +NAME ('1'); else None."""
    prefix = f"+{name}="
    for tok in iter_plusargs():
        if tok.startswith(prefix):
            return tok[len(prefix) :]
        if tok == f"+{name}":
            return "1"
    return None


def _env_values(name: str) -> Iterable[str]:
    for key in (name, f"{ENV_PREFIX}{name}"):
        v = os.environ.get(key)
        if v is not None:
            yield v


def get_bool_setting(name: str, default: bool) -> bool:
    """
    Resolve a boolean setting with precedence: env > plusarg > default.
    bare +NAME is treated as True
    """
    for v in _env_values(name):
        parsed = _parse_bool(v)
        if parsed is not None:
            return parsed
    v = _get_plusarg(name)
    if v is not None:
        parsed = _parse_bool(v)
        if parsed is not None:
            return parsed
    return default


def get_str_setting(name: str, default: str) -> str:
    """Resolve a string setting: env > plusarg > default (always returns str)."""
    for v in _env_values(name):
        return v
    v = _get_plusarg(name)
    return v if v is not None else default


def get_int_setting(name: str, default: int) -> int:
    """Resolve an int setting: env > plusarg > default (always returns int).

    Unparsable values are skipped, so a bad NAME falls through to FV_NAME,
    then the plusarg, then the default.
    """
    for v in _env_values(name):
        parsed = _parse_int(v)
        if parsed is not None:
            return parsed
    v = _get_plusarg(name)
    if v is not None:
        parsed = _parse_int(v)
        if parsed is not None:
            return parsed
    return default


def apply_factory_overrides_from_plusargs(logger: logging.Logger | None = None) -> None:
    """
    Parse +uvm_set_type_override / +uvm_set_inst_override from the plusargs
    and apply them via pyuvm's factory. Safe to call multiple times.
    """
    log = logger or logging.getLogger("fifoverif.utils_cli.factory")
    f = pyuvm.uvm_factory()

    for tok in iter_plusargs():
        if tok.startswith("+uvm_set_type_override="):
            parts = [p.strip() for p in tok.split("=", 1)[1].split(",")]
            if len(parts) not in (2, 3):
                log.warning("Bad +uvm_set_type_override: %s", tok)
                continue
            req, over = parts[0], parts[1]
            replace = True if len(parts) == 2 else (parts[2] != "0")
            try:
                f.set_type_override_by_name(req, over, replace=replace)
                log.debug(
                    "Factory: type override %s -> %s (replace=%s)", req, over, replace
                )
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)

        elif tok.startswith("+uvm_set_inst_override="):
            parts = [p.strip() for p in tok.split("=", 1)[1].split(",")]
            if len(parts) != 3:
                log.warning("Bad +uvm_set_inst_override: %s", tok)
                continue
            req, over, path = parts
            try:
                f.set_inst_override_by_name(req, over, path)
                log.debug("Factory: inst override %s @ %s -> %s", req, path, over)
            except _FACTORY_EXC as e:  # pragma: no cover
                log.warning("Override failed (%s): %s", tok, e)

# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/utils_dv.py

"""Helpers for pyuvm's config_db, cocotb signal handles and testbench logging.

Functions:
    Config DB:
        uvm_config_db(): Return cached config DB instance
        uvm_config_db_get_try(): Get config value or None if missing
        uvm_config_db_get(): Get config value or raise ConfigKeyError
        uvm_config_db_set(): Set config value
        config_int(): Read a positive/non-negative int with a fallback

    Signal Access:
        get_signal(): Get signal handle from DUT with validation
        get_signal_value_int(): Integer from Logic/LogicArray (None if X/Z)
        sim_time_ns(): Current simulation time for log messages

    Logging:
        desired_log_level(): Log level from COCOTB_LOG_LEVEL
        configure_component_logger(): Configure logger for a UVM component
        configure_non_component_logger(): Configure a plain logging.Logger

Example:
    >>> dut = uvm_config_db_get(self, "dut")
    >>> full = get_signal(dut, "full")
    >>> if get_signal_value_int(full.value) == 1:
    ...     self.logger.debug("full at %.1f ns", sim_time_ns())
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Union, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.types import Logic, LogicArray
from cocotb.utils import get_sim_time
from pyuvm import error_classes


class ConfigKeyError(KeyError):
    """Raised when a required key is missing from pyuvm's config_db."""


def desired_log_level(default: int = logging.INFO) -> int:
    """Return desired log level from env vars or default."""
    name = (os.getenv("COCOTB_LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, default)


def configure_component_logger(comp: pyuvm.uvm_component) -> None:
    """Configure logger for a component."""
    comp.set_logging_level(desired_log_level())


def configure_non_component_logger(logger: logging.Logger) -> None:
    """Configure logger for a non-component"""
    logger.setLevel(desired_log_level())
    # Bubble up to the cocotb handlers, no handlers of our own
    logger.propagate = True


@lru_cache(maxsize=1)
def uvm_config_db() -> Any:
    """Return pyuvm's config DB object (cached) without tripping static checkers."""
    if hasattr(pyuvm, "ConfigDB") and callable(getattr(pyuvm, "ConfigDB")):
        return getattr(pyuvm, "ConfigDB")()
    return getattr(pyuvm, "uvm_config_db")()


def uvm_config_db_get_try(
    comp: pyuvm.uvm_component, key: str, inst: str = ""
) -> Any | None:
    """Return value or None if missing (no logging/raise).
    Note: pyuvm allows wildcards only for set(), not get()."""
    if inst == "*":
        inst = ""
    try:
        return cast(Any, uvm_config_db().get(comp, inst, key))
    except error_classes.UVMConfigItemNotFound:
        return None


def uvm_config_db_get(comp: pyuvm.uvm_component, key: str) -> object:
    """Like uvm_config_db_get_try but raises if key is missing."""
    val = uvm_config_db_get_try(comp, key)
    if val is not None:
        return val
    raise ConfigKeyError(
        f"config_db[{key!r}] missing for component '{comp.get_full_name()}'. "
        "Did you forget to set it in the test's build_phase?"
    )


def uvm_config_db_set(
    ctx: pyuvm.uvm_component | None, inst_name: str, key: str, value: Any
) -> None:
    """Set a key in the config DB (inst_name like '' or '*' etc.)."""
    uvm_config_db().set(ctx, inst_name, key, value)


def config_int(
    comp: pyuvm.uvm_component, key: str, default: int, *, minimum: int = 0
) -> int:
    """Return config_db[key] if it is an int >= minimum, else default."""
    v = uvm_config_db_get_try(comp, key)
    if isinstance(v, bool) or not isinstance(v, int):
        return default
    if v < minimum:
        raise ValueError(
            f"{comp.get_full_name()}: {key} must be >= {minimum}, got {v}"
        )
    return v


def get_signal(dut: Any, signal_name: str) -> SimHandleBase:
    """Return dut.<signal_name> or raise a clear error.

    Raises RuntimeError if signal not found, TypeError if signal has no .value.
    """
    signal = getattr(dut, signal_name, None)
    if signal is None:
        raise RuntimeError(f"Signal '{signal_name}' not found on DUT")
    if not hasattr(signal, "value"):
        raise TypeError(f"Signal '{signal_name}' has no .value property")
    return cast(SimHandleBase, signal)


def get_signal_value_int(sig: Union[Logic, LogicArray]) -> int | None:
    """Return integer value if resolvable (no X/Z), else None."""
    if isinstance(sig, Logic):
        return (
            int(sig) if sig.is_resolvable else None
        )  # pyright: ignore[reportArgumentType]
    return sig.to_unsigned() if sig.is_resolvable else None


def sim_time_ns() -> float:
    """Current simulation time in ns (for log messages)."""
    return float(get_sim_time(unit="ns"))

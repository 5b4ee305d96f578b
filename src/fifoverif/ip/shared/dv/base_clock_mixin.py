# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_clock_mixin.py

"""Shared helpers for reading clk config, binding handles, and waiting edges."""

from __future__ import annotations

from typing import Any, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.triggers import ReadOnly, Timer

from . import utils_dv


class BaseClockMixin:
    """Mixin giving drivers and monitors one agreed notion of clock timing.

    Two points per clock period matter to the testbench:

    - the *drive edge*, where inputs change. This is the falling edge, half
      a period away from the rising edge the DUT samples on.
    - the *sample point*, where pins are read. This is pre_ps before the next
      rising edge, finished with ReadOnly, the cocotb equivalent of an SV
      clocking block's #1step input skew. Inputs seen there are exactly the
      values the DUT is about to latch; registered outputs seen there are
      the values the previous rising edge produced.

    Configuration (via config_db):
        clock_name (str): Name of clock signal
        clock_period_ps (int): Clock period in picoseconds

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs - UVM Verification
        Testing Techniques," SNUG 2016 (Austin)

    Example:
        >>> class MyDriver(BaseClockMixin, pyuvm.uvm_driver):
        ...     def __init__(self, name, parent):
        ...         super().__init__(name, parent)
        ...         self._clock_init_defaults(period_ps=2000)
    """

    def _clock_init_defaults(
        self,
        *,
        name: str = "clk",
        period_ps: int = 10_000,
        pre_ps: int = 1,
    ) -> None:
        """Set defaults in __init__ of the consumer."""
        self.clock_name: str = name
        self.clock_period_ps: int = period_ps
        self.pre_ps: int = pre_ps
        self._dut: Any | None = None
        self._clk: SimHandleBase | None = None
        self._preedge_delay_ps: int = 0

    def _as_comp(self) -> pyuvm.uvm_component:
        """Type-narrow self for config_db utils (mixin lives on components)."""
        return cast(pyuvm.uvm_component, self)

    def _clock_pull_config(self) -> None:
        """Read per-instance config once (EoE)."""
        comp = self._as_comp()
        comp.logger.debug("_clock_pull_config begin")
        v = utils_dv.uvm_config_db_get_try(comp, "clock_name")
        if isinstance(v, str) and v:
            self.clock_name = v
        v = utils_dv.uvm_config_db_get_try(comp, "clock_period_ps")
        if isinstance(v, int):
            self.clock_period_ps = v
        if self.clock_period_ps <= 0:
            raise ValueError(f"clock_period_ps must be > 0, got {self.clock_period_ps}")
        comp.logger.debug("_clock_pull_config end")

    def _clock_bind_handles(self) -> None:
        """Bind dut/signal once (EoE)."""
        comp = self._as_comp()
        comp.logger.debug("_clock_bind_handles begin")
        self._dut = utils_dv.uvm_config_db_get(comp, "dut")
        self._clk = utils_dv.get_signal(self._dut, self.clock_name)
        comp.logger.debug("_clock_bind_handles end")

    def clock_compute_skew(self) -> None:
        """Compute the sample offset once (EoE)."""
        comp = self._as_comp()
        comp.logger.debug("clock_compute_skew begin")
        if not 0 <= self.pre_ps < self.clock_period_ps:
            raise ValueError(
                f"pre_ps={self.pre_ps} must be in [0, {self.clock_period_ps})"
            )
        self._preedge_delay_ps = self.clock_period_ps - self.pre_ps
        comp.logger.debug("clock_compute_skew end")

    async def clock_drive_edge(self) -> None:
        """Align to the driving edge (runtime)."""
        assert (
            self._clk is not None
        ), "clock_drive_edge called before _clock_bind_handles"
        await self._clk.falling_edge

    async def clock_sample_point(self) -> None:
        """Wait rising edge, then delay to just before the next one (#1step)."""
        assert (
            self._clk is not None
        ), "clock_sample_point called before _clock_bind_handles"
        await self._clk.rising_edge
        if self._preedge_delay_ps > 0:
            await Timer(self._preedge_delay_ps, unit="ps")
        await ReadOnly()

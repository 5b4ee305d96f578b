# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_clock_driver.py

"""Free-running clock source for the bench."""

from __future__ import annotations

import cocotb
import pyuvm
from cocotb.clock import Clock
from cocotb.task import Task
from cocotb.triggers import Timer

from . import utils_dv
from .base_clock_mixin import BaseClockMixin


class BaseClockDriver(BaseClockMixin, pyuvm.uvm_component):
    """Toggle dut.<clock_name> from start_of_simulation until final_phase.

    The clock is launched before any run_phase awaits an edge. With a
    non-zero clock_init_delay_ps the pin stays at its initial level for that
    long first. With clock_enable False nothing is driven and the HDL is
    expected to own the clock.

    Configuration (via config_db):
        clock_enable (bool): Drive the clock (default: True)
        clock_name (str): Clock signal name (default: "clk")
        clock_period_ps (int): Period in picoseconds (default: 10000)
        clock_start_high (bool): First half period high (default: False)
        clock_init_delay_ps (int): Delay before the first toggle (default: 0)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self.clock_enable: bool = True
        self.clock_start_high: bool = False
        self.clock_init_delay_ps: int = 0
        self._task: Task | None = None
        self._clock_task: Task | None = None

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self.clock_enable = self._config_bool("clock_enable", self.clock_enable)
        self.clock_start_high = self._config_bool(
            "clock_start_high", self.clock_start_high
        )
        self.clock_init_delay_ps = utils_dv.config_int(
            self, "clock_init_delay_ps", self.clock_init_delay_ps
        )
        self._clock_bind_handles()
        self.logger.debug("end_of_elaboration_phase end")

    def start_of_simulation_phase(self) -> None:
        self.logger.debug("start_of_simulation_phase begin")
        super().start_of_simulation_phase()
        if self.clock_enable:
            self._task = cocotb.start_soon(self._run_clock())
        else:
            self.logger.info("dut.%s not driven (clock_enable=0)", self.clock_name)
        self.logger.debug("start_of_simulation_phase end")

    def final_phase(self) -> None:
        self.logger.debug("final_phase begin")
        for task in (self._task, self._clock_task):
            if task is not None and not task.done():
                task.cancel()
        self._task = self._clock_task = None
        super().final_phase()
        self.logger.debug("final_phase end")

    def _config_bool(self, key: str, default: bool) -> bool:
        v = utils_dv.uvm_config_db_get_try(self, key)
        return v if isinstance(v, bool) else default

    async def _run_clock(self) -> None:
        if self.clock_init_delay_ps > 0:
            await Timer(self.clock_init_delay_ps, unit="ps")
        self.logger.debug(
            "clock dut.%s: period=%d ps start_high=%s",
            self.clock_name,
            self.clock_period_ps,
            self.clock_start_high,
        )
        clock = Clock(self._clk, self.clock_period_ps, unit="ps")
        self._clock_task = cocotb.start_soon(
            clock.start(start_high=self.clock_start_high)
        )

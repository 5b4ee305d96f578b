# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_driver.py

"""Base driver with BFM hooks folded in, fed from a request channel."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm
from cocotb.triggers import NextTimeStep, ReadWrite

from . import utils_dv
from .base_agent import BaseAgentMixin
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseDriver(BaseAgentMixin, BaseClockMixin, pyuvm.uvm_driver, Generic[T]):
    """UVM driver that pulls items from a get port and drives them on pins.

    The driver is the only writer of the DUT's input pins. It reaches them
    through `pins`, a drive-only view bound by the environment, so a driver
    cannot read observation-only state by accident.

    The driver:
    - Applies initial DUT input values at time 0 with proper delta handling
    - Owns the reset sequence (reset(), called by the environment)
    - Aligns every pin change to clock_drive_edge() from BaseClockMixin
    - Forever: get item -> drive_item(pins, item)

    Subclasses must implement:
        drive_item(pins, tr): Drive DUT signals for one transaction
        drive_reset(pins, active): Put the inputs in/out of reset

    Configuration (via config_db):
        reset_cycles (int): Drive edges reset is held for (default: 3)

    Attributes:
        initial_dut_input_values: Dict mapping signal names to initial values
        get_port: Blocking get port from the request channel
        pins: Drive-only view of the DUT inputs (bound by the environment)
        item_count: Number of items driven

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016

    Example:
        >>> class MyDriver(BaseDriver[MyItem]):
        ...     async def drive_item(self, pins, tr):
        ...         await self.clock_drive_edge()
        ...         pins.set_data(tr.data)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self._agent_init()
        self.initial_dut_input_values: dict[str, int] = {}
        self.reset_cycles: int = 3
        self.get_port: pyuvm.uvm_get_port
        self.pins: Any = None
        self.item_count: int = 0

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.get_port = pyuvm.uvm_get_port("get_port", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_bind_handles()
        self.clock_compute_skew()
        self.reset_cycles = utils_dv.config_int(
            self, "reset_cycles", self.reset_cycles, minimum=1
        )
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        await self.apply_initial_dut_inputs()
        self.logger.debug("run_phase end")

    async def apply_initial_dut_inputs(self) -> None:
        """
        Reference: SNUG 2016 "Applying Stimulus & Sampling Outputs." Apply DUT
        inputs at time 0 using a non-blocking-style write and advance one delta
        cycle to avoid races.
        """
        self.logger.debug("apply_initial_dut_inputs begin")
        for sig_name, val in self.initial_dut_input_values.items():
            utils_dv.get_signal(self._dut, sig_name).value = val
        await ReadWrite()  # like an NBA at t=0
        await NextTimeStep()
        self.logger.debug("apply_initial_dut_inputs end")

    async def reset(self) -> None:
        """Assert reset, hold for reset_cycles drive edges, release."""
        self.logger.debug("reset begin: %d cycles", self.reset_cycles)
        await self.clock_drive_edge()
        self.drive_reset(self.pins, True)
        for _ in range(self.reset_cycles):
            await self.clock_drive_edge()
        self.drive_reset(self.pins, False)
        self.logger.debug("reset end @ %.1f ns", utils_dv.sim_time_ns())

    async def main_loop(self) -> None:
        tr: T
        while True:
            tr = await self.get_port.get()
            await self.drive_item(self.pins, tr)
            self.item_count += 1

    def drive_reset(self, pins: Any, active: bool) -> None:
        """Drive the reset pin and quiesce the other inputs."""
        raise NotImplementedError("Implement reset driving here")

    async def drive_item(self, pins: Any, tr: T) -> None:
        """Drive DUT signals for one transaction."""
        raise NotImplementedError("Implement DUT signal driving here")

# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_monitor.py

"""Base monitor with BFM sampling hook, feeding an observation channel."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_agent import BaseAgentMixin
from .base_clock_mixin import BaseClockMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseMonitor(BaseAgentMixin, BaseClockMixin, pyuvm.uvm_monitor, Generic[T]):
    """Passive monitor sampling pins at the #1step point of every clock.

    The monitor only reads the DUT, through `pins`, a read-only view bound
    by the environment. Each call to sample_dut() returns one observation
    (or None for a window that carried no transaction). Observations are
    frozen, then sent on two paths:

    - put_port: the blocking observation channel to the checker
    - ap: analysis port for subscribers (coverage)

    Subclasses must implement:
        sample_dut(pins): Sample DUT signals and return a transaction or None

    Attributes:
        ap: Analysis port for broadcasting observed transactions
        put_port: Blocking put port towards the observation channel
        pins: Read-only view of the DUT pins (bound by the environment)
        item_count: Number of transactions forwarded
        idle_count: Number of windows that carried no transaction

    Reference:
        C.E. Cummings, "Applying Stimulus & Sampling Outputs - UVM Verification
        Testing Techniques," SNUG 2016 (Austin)

    Example:
        >>> class MyMonitor(BaseMonitor[MyItem]):
        ...     async def sample_dut(self, pins):
        ...         await self.clock_sample_point()
        ...         item = MyItem()
        ...         item.data = pins.data
        ...         return item
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._clock_init_defaults()
        self._agent_init()
        self.ap: pyuvm.uvm_analysis_port
        self.put_port: pyuvm.uvm_put_port
        self.pins: Any = None
        self.item_count: int = 0
        self.idle_count: int = 0

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.ap = pyuvm.uvm_analysis_port("ap", self)
        self.put_port = pyuvm.uvm_put_port("put_port", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._clock_pull_config()
        self._clock_bind_handles()
        self.clock_compute_skew()
        self.logger.debug("end_of_elaboration_phase end")

    async def main_loop(self) -> None:
        tr: T | None
        while True:
            tr = await self.sample_dut(self.pins)
            if tr is None:
                self.idle_count += 1
                continue
            tr.freeze()
            self.item_count += 1
            self.ap.write(tr)
            await self.put_port.put(tr)

    async def sample_dut(self, pins: Any) -> T | None:
        """Return the next observed transaction (or None to skip)."""
        raise NotImplementedError("Implement sample_dut here")

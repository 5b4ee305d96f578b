# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_driver.py


"""Driver for sync_fifo."""

from __future__ import annotations

import random

import pyuvm

from fifoverif.ip.shared.dv import BaseDriver, utils_dv

from .sync_fifo_item import OpKind, SyncFifoItem
from .sync_fifo_pins import DATA_MASK, SyncFifoDriveView


class SyncFifoDriver(BaseDriver[SyncFifoItem]):  # pylint: disable=too-many-ancestors
    """Drive one request over two drive edges.

    Edge 1 asserts the enable for `kind` (and data_in for a WRITE), edge 2
    deasserts it. The enable is therefore high across exactly one rising
    edge. A WRITE with no data_in gets a payload drawn uniformly from
    [payload_min, payload_max].

    Configuration (via config_db):
        payload_min (int): Smallest drawn payload (default: 1)
        payload_max (int): Largest drawn payload (default: 20)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.initial_dut_input_values = {"rst": 0, "wr_en": 0, "rd_en": 0, "data_in": 0}
        self.payload_min: int = 1
        self.payload_max: int = 20

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self.payload_min = utils_dv.config_int(self, "payload_min", self.payload_min)
        self.payload_max = utils_dv.config_int(self, "payload_max", self.payload_max)
        if not self.payload_min <= self.payload_max <= DATA_MASK:
            raise ValueError(
                f"payload range [{self.payload_min}, {self.payload_max}] "
                f"not within [0, {DATA_MASK}]"
            )

    def drive_reset(self, pins: SyncFifoDriveView, active: bool) -> None:
        if active:
            pins.idle(zero_data=True)
        pins.set_reset(active)
        self.logger.debug("rst=%d", int(active))

    async def drive_item(self, pins: SyncFifoDriveView, tr: SyncFifoItem) -> None:
        await self.clock_drive_edge()
        if tr.kind is OpKind.WRITE:
            if tr.data_in is None:
                tr.data_in = random.randint(self.payload_min, self.payload_max)
            tr.wr_en, tr.rd_en = 1, 0
            pins.set_write(tr.data_in)
        elif tr.kind is OpKind.READ:
            tr.wr_en, tr.rd_en = 0, 1
            pins.set_read()
        else:
            raise ValueError(f"{self.get_full_name()}: request has no kind: {tr}")
        self.logger.debug("drove %s", tr)

        await self.clock_drive_edge()
        pins.idle()

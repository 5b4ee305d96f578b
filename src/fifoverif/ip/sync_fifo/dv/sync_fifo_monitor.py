# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_monitor.py


"""Monitor for sync_fifo pins (control/flags, then data_out one edge later)."""

from __future__ import annotations

from fifoverif.ip.shared.dv import BaseMonitor

from .sync_fifo_item import OpKind, SyncFifoItem
from .sync_fifo_pins import SyncFifoObserveView


class SyncFifoMonitor(BaseMonitor[SyncFifoItem]):  # pylint: disable=too-many-ancestors
    """Reconstruct one request per observation window.

    At a sample point, wr_en, rd_en, data_in, full and empty are captured:
    the values the DUT latches on the coming rising edge. If neither enable
    is set the window carried no request and None is returned. Otherwise the
    monitor waits for the next sample point, one clock later, and captures
    data_out, which that rising edge registered.
    """

    async def sample_dut(self, pins: SyncFifoObserveView) -> SyncFifoItem | None:
        await self.clock_sample_point()
        wr_en = pins.wr_en or 0
        rd_en = pins.rd_en or 0
        if not (wr_en or rd_en):
            return None

        item = SyncFifoItem(f"obs{self.item_count}")
        item.wr_en = wr_en
        item.rd_en = rd_en
        item.kind = OpKind.WRITE if wr_en else OpKind.READ
        item.data_in = pins.data_in
        item.full = pins.full
        item.empty = pins.empty

        await self.clock_sample_point()
        item.data_out = pins.data_out
        self.logger.debug("observed %s", item)
        return item

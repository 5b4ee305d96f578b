# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_env.py

"""Environment for sync_fifo."""

from __future__ import annotations

from typing import Any

from fifoverif.ip.shared.dv import BaseEnv

from .sync_fifo_checker import SyncFifoChecker
from .sync_fifo_pins import SyncFifoDriveView, SyncFifoObserveView


class SyncFifoEnv(BaseEnv):
    """Single-clock FIFO loop: one generator, driver, monitor and checker.

    The driver gets a drive-only view of rst/wr_en/rd_en/data_in, the monitor
    an observe-only view of every pin.
    """

    chk: SyncFifoChecker

    def make_pins(self, dut: Any) -> tuple[SyncFifoDriveView, SyncFifoObserveView]:
        return SyncFifoDriveView(dut), SyncFifoObserveView(dut)

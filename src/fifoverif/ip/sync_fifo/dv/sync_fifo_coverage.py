# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_coverage.py


"""Coverage."""

from __future__ import annotations

import pyuvm
from cocotb_coverage.coverage import CoverCross, CoverPoint

from fifoverif.ip.shared.dv import BaseCoverage

from .sync_fifo_item import OpKind, SyncFifoItem


class SyncFifoCoverage(BaseCoverage[SyncFifoItem]):
    """Track operation kind against the FIFO state it met.

    Cover points: kind, full, empty, and the crosses kind x full and
    kind x empty (a write into a full FIFO, a read from an empty one).
    """

    cov_root = "top.sync_fifo"

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.writes: int = 0
        self.reads: int = 0
        self.full_hits: int = 0
        self.empty_hits: int = 0

    @CoverPoint(
        "top.sync_fifo.kind",
        xf=lambda self, tt: tt.kind.name,
        bins=[k.name for k in OpKind],
    )
    @CoverPoint(
        "top.sync_fifo.full",
        xf=lambda self, tt: bool(tt.full),
        bins=[True, False],
    )
    @CoverPoint(
        "top.sync_fifo.empty",
        xf=lambda self, tt: bool(tt.empty),
        bins=[True, False],
    )
    @CoverCross(
        "top.sync_fifo.kindXfull",
        items=["top.sync_fifo.kind", "top.sync_fifo.full"],
    )
    @CoverCross(
        "top.sync_fifo.kindXempty",
        items=["top.sync_fifo.kind", "top.sync_fifo.empty"],
    )
    def sample(self, tt: SyncFifoItem) -> None:
        if tt.kind is OpKind.WRITE:
            self.writes += 1
        else:
            self.reads += 1
        if tt.full:
            self.full_hits += 1
        if tt.empty:
            self.empty_hits += 1

    def report_phase(self) -> None:
        """Print coverage summary."""
        self.logger.debug("report_phase begin")
        super().report_phase()
        self.logger.info(
            "SyncFifoCoverage summary: writes=%d reads=%d full=%d empty=%d",
            self.writes,
            self.reads,
            self.full_hits,
            self.empty_hits,
        )
        self.logger.debug("report_phase end")

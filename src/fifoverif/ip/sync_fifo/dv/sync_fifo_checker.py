# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_checker.py

"""In-line checker for sync_fifo against the queue reference model."""

from __future__ import annotations

import pyuvm

from fifoverif.ip.shared.dv import BaseChecker

from .sync_fifo_item import SyncFifoItem
from .sync_fifo_pins import DATA_MASK
from .sync_fifo_ref_model import SyncFifoRefModel, SyncFifoUnderflowError


class SyncFifoChecker(BaseChecker[SyncFifoItem]):  # pylint: disable=too-many-ancestors
    """Update the model from each observation and check read data.

    Write and read branches are independent:

    - wr_en and not full: push data_in
    - rd_en and not empty: pop the expected head and compare it with
      data_out; an empty model is recorded as an underflow

    A write seen with full == 1 or a read seen with empty == 1 was ignored
    by the DUT and is ignored here as well.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self._model = SyncFifoRefModel(f"{name}.ref_model")
        self._inject_remaining: int = 0
        self._match_log: list[int] = []

    @property
    def model(self) -> SyncFifoRefModel:
        return self._model

    @property
    def match_log(self) -> tuple[int, ...]:
        """Values read back correctly, in delivery order."""
        return tuple(self._match_log)

    def inject_mismatch(self, count: int = 1) -> None:
        """Corrupt the next `count` expected values (the model is untouched)."""
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        self._inject_remaining += count
        self.logger.warning("fault injection armed: %d compare(s)", count)

    def on_dut_reset(self) -> None:
        self._model.clear()
        self.logger.debug("ref model cleared on reset")

    def check_item(self, tr: SyncFifoItem) -> None:
        if tr.wr_en and not tr.full:
            if tr.data_in is None:
                self.record_mismatch(None, None, "write with unresolved data_in")
            else:
                self._model.push(tr.data_in)

        if tr.rd_en and not tr.empty:
            try:
                expected = self._model.pop()
            except SyncFifoUnderflowError:
                self.record_underflow(
                    tr.data_out, f"DUT read while model empty: {tr}"
                )
                return
            if self._inject_remaining > 0:
                self._inject_remaining -= 1
                expected ^= DATA_MASK
                self.logger.warning("fault injection: expected forced to %d", expected)
            if tr.data_out == expected:
                self.record_pass(expected, expected)
                self._match_log.append(expected)
            else:
                self.record_mismatch(
                    expected,
                    tr.data_out,
                    f"REF_MODEL_STATE: {self._model.snapshot_state()}",
                )

    def report_phase(self) -> None:
        super().report_phase()
        self.logger.info(
            "model: %d write(s), %d read(s) accepted, %d left",
            self._model.writes_accepted,
            self._model.reads_accepted,
            len(self._model),
        )

# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_item.py


"""Request/observation item for sync_fifo verification."""

from __future__ import annotations

import enum

from fifoverif.ip.shared.dv import BaseItem


class OpKind(enum.Enum):
    """Stimulus kind, one enable per request."""

    WRITE = 0
    READ = 1


class SyncFifoItem(BaseItem):
    """One FIFO request, and later the observation of it.

    The generator sets `kind` (and optionally `data_in`). The driver fills
    the enables and the payload it actually drove. The monitor builds a
    fresh item from the pins: wr_en, rd_en, data_in, full and empty from the
    control sample, data_out from the sample one clock later.

    Inputs: kind, wr_en, rd_en, data_in
    Outputs: data_out, full, empty
    """

    def __init__(self, name: str = "sync_fifo_item") -> None:
        super().__init__(name)
        self.kind: OpKind | None = None
        self.wr_en: int = 0
        self.rd_en: int = 0
        self.data_in: int | None = None
        self.data_out: int | None = None
        self.full: int | None = None
        self.empty: int | None = None

    def _in_fields(self) -> tuple[str, ...]:
        return ("kind", "wr_en", "rd_en", "data_in")

    def _out_fields(self) -> tuple[str, ...]:
        return ("data_out", "full", "empty")

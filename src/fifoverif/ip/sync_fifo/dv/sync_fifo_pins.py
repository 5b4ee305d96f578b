# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_pins.py

"""Disjoint drive-only and observe-only views of the sync_fifo pins."""

from __future__ import annotations

from typing import Any

from fifoverif.ip.shared.dv import utils_dv

DATA_MASK = 0xFF


class SyncFifoDriveView:
    """Write access to the DUT inputs (rst, wr_en, rd_en, data_in) only.

    Held by the driver; it has no way to read outputs.
    """

    __slots__ = ("_rst", "_wr_en", "_rd_en", "_data_in")

    def __init__(self, dut: Any) -> None:
        self._rst = utils_dv.get_signal(dut, "rst")
        self._wr_en = utils_dv.get_signal(dut, "wr_en")
        self._rd_en = utils_dv.get_signal(dut, "rd_en")
        self._data_in = utils_dv.get_signal(dut, "data_in")

    def set_reset(self, active: bool) -> None:
        self._rst.value = int(active)

    def set_write(self, data: int) -> None:
        self._wr_en.value = 1
        self._rd_en.value = 0
        self._data_in.value = data & DATA_MASK

    def set_read(self) -> None:
        self._wr_en.value = 0
        self._rd_en.value = 1

    def idle(self, *, zero_data: bool = False) -> None:
        """Deassert both enables (and optionally zero data_in)."""
        self._wr_en.value = 0
        self._rd_en.value = 0
        if zero_data:
            self._data_in.value = 0


class SyncFifoObserveView:
    """Read access to every sync_fifo pin; it cannot drive anything.

    Values are ints, or None while a pin is unresolvable (X/Z).
    """

    __slots__ = ("_dut",)

    def __init__(self, dut: Any) -> None:
        for name in ("rst", "wr_en", "rd_en", "data_in", "data_out", "full", "empty"):
            utils_dv.get_signal(dut, name)
        self._dut = dut

    def _read(self, name: str) -> int | None:
        return utils_dv.get_signal_value_int(getattr(self._dut, name).value)

    @property
    def rst(self) -> int | None:
        return self._read("rst")

    @property
    def wr_en(self) -> int | None:
        return self._read("wr_en")

    @property
    def rd_en(self) -> int | None:
        return self._read("rd_en")

    @property
    def data_in(self) -> int | None:
        return self._read("data_in")

    @property
    def data_out(self) -> int | None:
        return self._read("data_out")

    @property
    def full(self) -> int | None:
        return self._read("full")

    @property
    def empty(self) -> int | None:
        return self._read("empty")

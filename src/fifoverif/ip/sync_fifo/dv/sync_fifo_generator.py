# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_generator.py


"""Request generators for sync_fifo verification."""

from __future__ import annotations

import pyuvm
from cocotb_coverage import crv

from fifoverif.ip.shared.dv import BaseGenerator, RandomizationError, utils_dv

from .sync_fifo_item import OpKind, SyncFifoItem


class SyncFifoStimulus(crv.Randomized):
    """Randomized enables: exactly one of wr_en/rd_en, 50/50."""

    def __init__(self) -> None:
        crv.Randomized.__init__(self)
        self.wr_en: int = 0
        self.rd_en: int = 0
        self.add_rand("wr_en", [0, 1])
        self.add_rand("rd_en", [0, 1])
        self.add_constraint(lambda wr_en, rd_en: wr_en != rd_en)


class SyncFifoGenerator(BaseGenerator[SyncFifoItem]):
    """Generate seq_len random WRITE/READ requests.

    WRITE payloads are left unset so the driver draws them.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.writes: int = 0
        self.reads: int = 0
        self._stim: SyncFifoStimulus | None = None

    def make_stimulus(self) -> SyncFifoStimulus:
        """Build the randomization object (override to change constraints)."""
        return SyncFifoStimulus()

    async def body_pre(self) -> None:
        self.logger.debug("body_pre begin")
        await super().body_pre()
        self._stim = self.make_stimulus()
        self.logger.debug("body_pre end")

    def randomize_kind(self) -> OpKind:
        """Randomize once and return the request kind; failures are fatal."""
        assert self._stim is not None
        try:
            self._stim.randomize()
        except Exception as exc:
            raise RandomizationError(
                f"{self.get_full_name()}: randomize() failed: {exc}"
            ) from exc
        wr_en, rd_en = self._stim.wr_en, self._stim.rd_en
        if {wr_en, rd_en} != {0, 1}:
            raise RandomizationError(
                f"{self.get_full_name()}: enables not mutually exclusive: "
                f"wr_en={wr_en} rd_en={rd_en}"
            )
        return OpKind.WRITE if wr_en else OpKind.READ

    async def set_item_inputs(self, item: SyncFifoItem, index: int) -> None:
        item.kind = self.randomize_kind()
        if item.kind is OpKind.WRITE:
            self.writes += 1
        else:
            self.reads += 1

    async def body_post(self) -> None:
        self.logger.info(
            "random stimulus @ %.1f ns: %d write(s), %d read(s)",
            utils_dv.sim_time_ns(),
            self.writes,
            self.reads,
        )


class SyncFifoDirectedGenerator(BaseGenerator[SyncFifoItem]):
    """Replay a fixed list of (kind, data_in) requests.

    seq_len always equals len(ops); a data_in of None lets the driver draw
    the payload.
    """

    ops: tuple[tuple[OpKind, int | None], ...] = ()

    def end_of_elaboration_phase(self) -> None:
        super().end_of_elaboration_phase()
        self.seq_len = len(self.ops)

    async def set_item_inputs(self, item: SyncFifoItem, index: int) -> None:
        item.kind, item.data_in = self.ops[index]


def _writes(*values: int) -> tuple[tuple[OpKind, int | None], ...]:
    return tuple((OpKind.WRITE, v) for v in values)


def _reads(count: int) -> tuple[tuple[OpKind, int | None], ...]:
    return tuple((OpKind.READ, None) for _ in range(count))


class SyncFifoWriteThenReadGenerator(SyncFifoDirectedGenerator):
    """Five writes, then five reads."""

    ops = _writes(10, 20, 30, 40, 50) + _reads(5)


class SyncFifoReadEmptyGenerator(SyncFifoDirectedGenerator):
    """A single read straight after reset."""

    ops = _reads(1)


class SyncFifoOverflowGenerator(SyncFifoDirectedGenerator):
    """Fill all 16 entries, attempt a 17th write, then read once."""

    ops = _writes(*range(1, 18)) + _reads(1)


class SyncFifoFillDrainGenerator(SyncFifoDirectedGenerator):
    """Fill, drain completely, then read once more from empty."""

    ops = _writes(*range(101, 117)) + _reads(17)

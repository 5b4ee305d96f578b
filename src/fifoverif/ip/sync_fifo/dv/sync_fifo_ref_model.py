# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/sync_fifo_ref_model.py

"""sync_fifo reference model (queue-based).

This model ignores pointers and storage and keeps a logical FIFO of the
values the DUT accepted:

* push(): called for every observed write with full == 0
* pop(): called for every observed read with empty == 0; returns the value
  data_out must carry one clock later

The model itself is unbounded. Capacity is enforced by the caller, which
trusts the observed full/empty flags; a queue longer than `depth` is only
reported as a warning.

Plain Python (no simulator imports) so it can be unit tested on the host.
"""

from __future__ import annotations

import logging
from collections import deque


class SyncFifoUnderflowError(IndexError):
    """pop() on an empty reference model."""


class SyncFifoRefModel:
    """Logical FIFO of accepted write data, in order."""

    def __init__(
        self, name: str = "sync_fifo_ref_model", depth: int = 16, width: int = 8
    ) -> None:
        if depth <= 0:
            raise ValueError(f"depth must be > 0, got {depth}")
        if width <= 0:
            raise ValueError(f"width must be > 0, got {width}")
        self.name = name
        self.logger = logging.getLogger(f"uvm.{name}")
        self.depth = depth
        self.data_mask = (1 << width) - 1
        self._fifo: deque[int] = deque()
        self._writes_accepted: int = 0
        self._reads_accepted: int = 0

    def __len__(self) -> int:
        return len(self._fifo)

    @property
    def writes_accepted(self) -> int:
        return self._writes_accepted

    @property
    def reads_accepted(self) -> int:
        return self._reads_accepted

    def contents(self) -> tuple[int, ...]:
        """Queued values, head first."""
        return tuple(self._fifo)

    def push(self, value: int) -> None:
        value &= self.data_mask
        self._fifo.append(value)
        self._writes_accepted += 1
        self.logger.debug("REF WRITE: data=%d, fifo_len=%d", value, len(self._fifo))
        if len(self._fifo) > self.depth:
            self.logger.warning(
                "Ref-model holds %d entries, more than depth=%d",
                len(self._fifo),
                self.depth,
            )

    def pop(self) -> int:
        """Remove and return the head; raise SyncFifoUnderflowError if empty."""
        if not self._fifo:
            raise SyncFifoUnderflowError(f"{self.name}: pop from empty model")
        value = self._fifo.popleft()
        self._reads_accepted += 1
        self.logger.debug("REF READ: expected=%d, fifo_len=%d", value, len(self._fifo))
        return value

    def clear(self) -> None:
        """Drop all entries and counters (reset)."""
        self._fifo.clear()
        self._writes_accepted = 0
        self._reads_accepted = 0

    def snapshot_state(self) -> dict[str, object]:
        """Return a snapshot of logical FIFO state for debug."""
        return {
            "fifo_len": len(self._fifo),
            "depth": self.depth,
            "head": self._fifo[0] if self._fifo else None,
            "contents": list(self._fifo),
            "writes_accepted": self._writes_accepted,
            "reads_accepted": self._reads_accepted,
        }

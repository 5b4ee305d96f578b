# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_handshake.py

"""Counting one-shot handshake used to throttle one agent on another."""

from __future__ import annotations

import logging

from cocotb.triggers import Event

from . import utils_dv


class BaseHandshake:
    """Persistent pulse counter built on a cocotb Event.

    A producer calls pulse(); a consumer awaits take(). Each take() consumes
    exactly one pulse, so a pulse raised before anyone waits is never lost
    (semaphore semantics, not a transient edge). The protocol expects at most
    one pulse outstanding; a second one is still kept but logged as a
    warning because it means the two sides fell out of lockstep.

    Attributes:
        name: Name used for the logger (uvm.<name>)
        pulse_count: Total number of pulses raised so far
        take_count: Total number of pulses consumed so far

    Example:
        >>> proceed = BaseHandshake("proceed")
        >>> proceed.pulse()          # checker side
        >>> await proceed.take()     # generator side, returns at once
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger: logging.Logger = logging.getLogger(f"uvm.{name}")
        utils_dv.configure_non_component_logger(self.logger)
        self._event = Event()
        self._pending: int = 0
        self.pulse_count: int = 0
        self.take_count: int = 0

    @property
    def pending(self) -> int:
        """Pulses raised but not yet taken."""
        return self._pending

    @property
    def fired(self) -> bool:
        """True once at least one pulse has been raised."""
        return self.pulse_count > 0

    def pulse(self) -> None:
        """Raise one pulse and wake a waiter."""
        self._pending += 1
        self.pulse_count += 1
        if self._pending > 1:
            self.logger.warning(
                "%s: %d pulses outstanding (expected at most 1)",
                self.name,
                self._pending,
            )
        self._event.set()

    async def take(self) -> None:
        """Block until a pulse is available, then consume it."""
        while self._pending == 0:
            await self._event.wait()
            if self._pending == 0:
                self._event.clear()
        self._pending -= 1
        self.take_count += 1
        if self._pending == 0:
            self._event.clear()

# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_agent.py

"""Run/stop lifecycle shared by the generator, driver, monitor and checker."""

from __future__ import annotations

from typing import cast

import pyuvm
from cocotb.triggers import Event


class BaseAgentMixin:
    """Mixin turning a component's main loop into an env-owned, stoppable task.

    The loop lives in main_loop() and is entered through run(), not
    run_phase(), so pyuvm does not start it on its own. The environment
    starts run() with cocotb.start_soon once reset is done, and on teardown
    cancels the task and awaits `stopped`, which run() sets on every exit
    path (normal return, exception or cancellation).

    Subclasses must implement:
        main_loop(): The agent's body (forever loop or bounded)

    Attributes:
        stopped: Event set when run() has exited
        running: True between run() entry and exit

    Example:
        >>> task = cocotb.start_soon(agent.run())
        >>> ...
        >>> task.cancel()
        >>> await agent.stopped.wait()
    """

    def _agent_init(self) -> None:
        """Call from the consumer's __init__."""
        self.stopped: Event = Event()
        self.running: bool = False

    async def run(self) -> None:
        """Run main_loop() and acknowledge exit through `stopped`."""
        comp = cast(pyuvm.uvm_component, self)
        comp.logger.debug("run begin")
        if self.stopped.is_set():
            raise RuntimeError(f"{comp.get_full_name()} already ran")
        self.running = True
        try:
            await self.main_loop()
        finally:
            self.running = False
            self.stopped.set()
            comp.logger.debug("run end")

    async def main_loop(self) -> None:
        """Agent body."""
        raise NotImplementedError("Implement main_loop here")

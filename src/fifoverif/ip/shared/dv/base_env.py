# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_env.py

"""Environment scaffold (UVM-style, factory-first) owning the run lifecycle."""

from __future__ import annotations

import enum
from typing import Any

import cocotb
import pyuvm
from cocotb.task import Task

from . import utils_dv
from .base_agent import BaseAgentMixin
from .base_checker import BaseChecker
from .base_coverage import BaseCoverage
from .base_driver import BaseDriver
from .base_generator import BaseGenerator
from .base_handshake import BaseHandshake
from .base_monitor import BaseMonitor


class EnvState(enum.Enum):
    """Environment lifecycle, advanced only by BaseEnv.run()."""

    IDLE = enum.auto()
    RESETTING = enum.auto()
    RUNNING = enum.auto()
    DRAINING = enum.auto()
    REPORTED = enum.auto()


class BaseEnv(pyuvm.uvm_env):
    """Build, wire and run one closed verification loop.

    Data flow:
        gen -> req_fifo -> drv -> pins -> mon -> obs_fifo -> chk
        chk -> proceed -> gen, gen -> done -> env
        mon.ap -> cov

    Both channels are uvm_tlm_fifo with a depth of one. The proceed and done
    handshakes are owned here and handed to the agents in connect_phase.

    Pin views are produced by make_pins(dut), which subclasses implement: it
    returns a (drive_view, observe_view) pair, given to the driver and the
    monitor respectively.

    Lifecycle (run()):
        IDLE -> RESETTING: settle edges, then drv.reset()
        RESETTING -> RUNNING: the four agents start as cocotb tasks
        RUNNING -> DRAINING: gen pulsed done
        DRAINING -> REPORTED: agent tasks cancelled and acknowledged;
            chk.error_count is returned

    Configuration (via config_db):
        coverage_en (bool): Build the coverage subscriber (default: True)
        reset_settle_cycles (int): Drive edges waited before reset (default: 0)

    Example:
        >>> # In a test's run_phase
        >>> errors = await self.env.run()
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.gen: BaseGenerator
        self.drv: BaseDriver
        self.mon: BaseMonitor
        self.chk: BaseChecker
        self.cov: BaseCoverage | None = None
        self.req_fifo: pyuvm.uvm_tlm_fifo
        self.obs_fifo: pyuvm.uvm_tlm_fifo
        self.proceed = BaseHandshake(f"{name}.proceed")
        self.done = BaseHandshake(f"{name}.done")
        self.reset_settle_cycles: int = 0
        self._coverage_en: bool = True
        self._state = EnvState.IDLE
        self._tasks: list[Task] = []

    @property
    def state(self) -> EnvState:
        return self._state

    @property
    def agents(self) -> tuple[BaseAgentMixin, ...]:
        """The four looping agents, in start order."""
        return (self.chk, self.mon, self.drv, self.gen)

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()

        create = pyuvm.uvm_factory().create_component_by_type
        parent_inst_path = self.get_full_name()

        self.gen = create(
            BaseGenerator, parent_inst_path=parent_inst_path, name="gen", parent=self
        )
        self.drv = create(
            BaseDriver, parent_inst_path=parent_inst_path, name="drv", parent=self
        )
        self.mon = create(
            BaseMonitor, parent_inst_path=parent_inst_path, name="mon", parent=self
        )
        self.chk = create(
            BaseChecker, parent_inst_path=parent_inst_path, name="chk", parent=self
        )

        cvrg = utils_dv.uvm_config_db_get_try(self, "coverage_en")
        if isinstance(cvrg, bool):
            self._coverage_en = cvrg
        if self._coverage_en:
            self.cov = create(
                BaseCoverage,
                parent_inst_path=parent_inst_path,
                name="coverage",
                parent=self,
            )

        self.req_fifo = pyuvm.uvm_tlm_fifo("req_fifo", self)
        self.obs_fifo = pyuvm.uvm_tlm_fifo("obs_fifo", self)
        self.logger.debug("build_phase end")

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        super().connect_phase()
        self.gen.put_port.connect(self.req_fifo.put_export)
        self.drv.get_port.connect(self.req_fifo.get_export)
        self.mon.put_port.connect(self.obs_fifo.put_export)
        self.chk.get_port.connect(self.obs_fifo.get_export)
        if self.cov is not None:
            self.mon.ap.connect(self.cov.analysis_export)

        self.gen.proceed = self.proceed
        self.gen.done = self.done
        self.chk.proceed = self.proceed

        dut = utils_dv.uvm_config_db_get(self, "dut")
        self.drv.pins, self.mon.pins = self.make_pins(dut)
        self.logger.debug("connect_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.reset_settle_cycles = utils_dv.config_int(
            self, "reset_settle_cycles", self.reset_settle_cycles
        )
        self.logger.debug("end_of_elaboration_phase end")

    def make_pins(self, dut: Any) -> tuple[Any, Any]:
        """Return (drive_view, observe_view) over the DUT."""
        raise NotImplementedError("Implement make_pins here")

    def _set_state(self, state: EnvState) -> None:
        self.logger.debug("state %s -> %s", self._state.name, state.name)
        self._state = state

    async def run(self) -> int:
        """Reset, run the loop until the generator is done, return the error count."""
        if self._state is not EnvState.IDLE:
            raise RuntimeError(
                f"{self.get_full_name()}: run() called in state {self._state.name}"
            )
        self._set_state(EnvState.RESETTING)
        for _ in range(self.reset_settle_cycles):
            await self.drv.clock_drive_edge()
        await self.drv.reset()
        self.chk.on_dut_reset()

        self._set_state(EnvState.RUNNING)
        self._tasks = [cocotb.start_soon(agent.run()) for agent in self.agents]
        await self.done.take()

        self._set_state(EnvState.DRAINING)
        await self.stop_agents()

        self._set_state(EnvState.REPORTED)
        errors = self.chk.error_count
        self.logger.info(
            "run complete @ %.1f ns: %d error(s)", utils_dv.sim_time_ns(), errors
        )
        return errors

    async def stop_agents(self) -> None:
        """Cancel every agent task still running and wait for each to stop."""
        for task in self._tasks:
            if not task.done():
                task.cancel()
        for agent in self.agents:
            await agent.stopped.wait()
        self._tasks = []
        self.logger.debug("all agents stopped")

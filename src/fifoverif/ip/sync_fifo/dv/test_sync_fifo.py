# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/test_sync_fifo.py


"""Tests for sync_fifo verification."""

from __future__ import annotations

import pyuvm

from fifoverif.ip.shared.dv import (
    BaseChecker,
    BaseCoverage,
    BaseDriver,
    BaseEnv,
    BaseGenerator,
    BaseItem,
    BaseMonitor,
    BaseTest,
    EnvState,
    RandomizationError,
    utils_cli,
    utils_dv,
)

from .sync_fifo_checker import SyncFifoChecker
from .sync_fifo_coverage import SyncFifoCoverage
from .sync_fifo_driver import SyncFifoDriver
from .sync_fifo_env import SyncFifoEnv
from .sync_fifo_generator import (
    SyncFifoFillDrainGenerator,
    SyncFifoGenerator,
    SyncFifoOverflowGenerator,
    SyncFifoReadEmptyGenerator,
    SyncFifoStimulus,
    SyncFifoWriteThenReadGenerator,
)
from .sync_fifo_item import SyncFifoItem
from .sync_fifo_monitor import SyncFifoMonitor


@pyuvm.test()
class SyncFifoBaseTest(BaseTest):
    """Random stimulus: SYNC_FIFO_TXN_COUNT requests, 50/50 write/read.

    Every request is observed and checked exactly once, and the generator
    signals done exactly once.
    """

    env: SyncFifoEnv

    def build_envs(self) -> None:
        super().build_envs()
        txn_count = utils_cli.get_int_setting("SYNC_FIFO_TXN_COUNT", 30)
        payload_min = utils_cli.get_int_setting("SYNC_FIFO_PAYLOAD_MIN", 1)
        payload_max = utils_cli.get_int_setting("SYNC_FIFO_PAYLOAD_MAX", 20)
        utils_dv.uvm_config_db_set(self, "env.gen", "seq_len", txn_count)
        utils_dv.uvm_config_db_set(self, "env.drv", "payload_min", payload_min)
        utils_dv.uvm_config_db_set(self, "env.drv", "payload_max", payload_max)

    def set_factory_overrides(self) -> None:
        override_type_type = pyuvm.uvm_factory().set_type_override_by_type

        override_type_type(BaseItem, SyncFifoItem)
        override_type_type(BaseEnv, SyncFifoEnv)
        override_type_type(BaseGenerator, SyncFifoGenerator)
        override_type_type(BaseDriver, SyncFifoDriver)
        override_type_type(BaseMonitor, SyncFifoMonitor)
        override_type_type(BaseChecker, SyncFifoChecker)
        override_type_type(BaseCoverage, SyncFifoCoverage)

    def check_result(self, errors: int) -> None:
        env = self.env
        n = env.gen.seq_len
        assert env.state is EnvState.REPORTED, env.state
        assert env.gen.sent_count == n, (env.gen.sent_count, n)
        assert env.drv.item_count == n, (env.drv.item_count, n)
        assert env.mon.item_count == n, (env.mon.item_count, n)
        assert env.chk.obs_cnt == n, (env.chk.obs_cnt, n)
        assert env.proceed.pulse_count == n, (env.proceed.pulse_count, n)
        assert env.done.pulse_count == 1, env.done.pulse_count
        assert all(not agent.running for agent in env.agents)


@pyuvm.test()
class SyncFifoWriteThenReadTest(SyncFifoBaseTest):
    """Writes 10..50 then five reads return them in order."""

    def set_factory_overrides(self) -> None:
        super().set_factory_overrides()
        pyuvm.uvm_factory().set_type_override_by_type(
            BaseGenerator, SyncFifoWriteThenReadGenerator
        )

    def check_result(self, errors: int) -> None:
        super().check_result(errors)
        assert self.env.chk.match_log == (10, 20, 30, 40, 50), self.env.chk.match_log
        assert len(self.env.chk.model) == 0


@pyuvm.test()
class SyncFifoReadEmptyTest(SyncFifoBaseTest):
    """A read right after reset is ignored by DUT and model alike."""

    def set_factory_overrides(self) -> None:
        super().set_factory_overrides()
        pyuvm.uvm_factory().set_type_override_by_type(
            BaseGenerator, SyncFifoReadEmptyGenerator
        )

    def check_result(self, errors: int) -> None:
        super().check_result(errors)
        assert self.env.chk.vect_cnt == 0, self.env.chk.vect_cnt
        assert self.env.chk.error_count == 0


@pyuvm.test()
class SyncFifoOverflowTest(SyncFifoBaseTest):
    """A 17th write is dropped while full; the next read returns the first."""

    def set_factory_overrides(self) -> None:
        super().set_factory_overrides()
        pyuvm.uvm_factory().set_type_override_by_type(
            BaseGenerator, SyncFifoOverflowGenerator
        )

    def check_result(self, errors: int) -> None:
        super().check_result(errors)
        model = self.env.chk.model
        assert model.writes_accepted == 16, model.writes_accepted
        assert self.env.chk.match_log == (1,), self.env.chk.match_log
        assert model.contents() == tuple(range(2, 17)), model.contents()


@pyuvm.test()
class SyncFifoFillDrainTest(SyncFifoBaseTest):
    """Fill to 16, drain all 16 in order, then one read from empty."""

    def set_factory_overrides(self) -> None:
        super().set_factory_overrides()
        pyuvm.uvm_factory().set_type_override_by_type(
            BaseGenerator, SyncFifoFillDrainGenerator
        )

    def check_result(self, errors: int) -> None:
        super().check_result(errors)
        assert self.env.chk.match_log == tuple(range(101, 117))
        assert self.env.chk.vect_cnt == 16, self.env.chk.vect_cnt


@pyuvm.test()
class SyncFifoFaultInjectionTest(SyncFifoWriteThenReadTest):
    """One corrupted expectation costs exactly one error; later reads still match."""

    expected_errors = 1

    def start_of_simulation_phase(self) -> None:
        super().start_of_simulation_phase()
        self.env.chk.inject_mismatch(1)

    def check_result(self, errors: int) -> None:
        SyncFifoBaseTest.check_result(self, errors)
        chk = self.env.chk
        assert [e.kind for e in chk.errors] == ["mismatch"], chk.errors
        assert chk.errors[0].actual == 10, chk.errors[0]
        assert chk.match_log == (20, 30, 40, 50), chk.match_log


@pyuvm.test()
class SyncFifoRerunRejectedTest(SyncFifoWriteThenReadTest):
    """The environment runs once; a second run() is refused."""

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.rerun_rejected = False

    async def run_phase(self) -> None:
        await super().run_phase()
        try:
            await self.env.run()
        except RuntimeError as exc:
            self.logger.info("second run rejected: %s", exc)
            self.rerun_rejected = True

    def check_result(self, errors: int) -> None:
        super().check_result(errors)
        assert self.rerun_rejected


class _SyncFifoBrokenStimulus(SyncFifoStimulus):
    def __init__(self) -> None:
        super().__init__()
        self.add_constraint(lambda wr_en, rd_en: wr_en == rd_en)


class _SyncFifoBrokenGenerator(SyncFifoGenerator):
    def make_stimulus(self) -> SyncFifoStimulus:
        return _SyncFifoBrokenStimulus()


@pyuvm.test(expect_error=RandomizationError, timeout_time=1, timeout_unit="ms")
class SyncFifoRandomizationErrorTest(SyncFifoBaseTest):
    """Stimulus that cannot honor one-enable-per-request aborts the run."""

    def set_factory_overrides(self) -> None:
        super().set_factory_overrides()
        pyuvm.uvm_factory().set_type_override_by_type(
            BaseGenerator, _SyncFifoBrokenGenerator
        )

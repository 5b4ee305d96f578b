# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_checker.py

"""Reusable in-line checker: observation channel in, proceed pulse out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_agent import BaseAgentMixin
from .base_handshake import BaseHandshake
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


@dataclass(frozen=True)
class CheckError:
    """One recorded checker error."""

    kind: str  # "mismatch" | "underflow"
    index: int  # observation number (0-based)
    expected: int | None
    actual: int | None
    time_ns: float
    detail: str = ""


class BaseChecker(BaseAgentMixin, pyuvm.uvm_scoreboard, Generic[T]):
    """Scoreboard that checks each observation as it arrives.

    Forever: get one observation from the channel, check_item() it, then
    pulse `proceed` so the generator may release the next request. Errors
    never stop the run; they are recorded and counted and surfaced at the
    end (report_phase banner, error_count for the test).

    Subclasses must implement:
        check_item(tr): Update the model and compare (sync, must not block)

    Statistics (read-only):
        error_count: Number of errors recorded (never decreases)
        vect_cnt: Number of comparisons performed
        pass_cnt: Number of passing comparisons
        obs_cnt: Number of observations processed
        errors: Tuple of CheckError records

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self._agent_init()
        self.get_port: pyuvm.uvm_get_port
        self.proceed: BaseHandshake | None = None
        self._errors: list[CheckError] = []
        self._vect_cnt: int = 0
        self._pass_cnt: int = 0
        self._obs_cnt: int = 0

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.get_port = pyuvm.uvm_get_port("get_port", self)
        self.logger.debug("build_phase end")

    @property
    def error_count(self) -> int:
        """Errors recorded so far."""
        return len(self._errors)

    @property
    def errors(self) -> tuple[CheckError, ...]:
        """Recorded errors, oldest first."""
        return tuple(self._errors)

    @property
    def vect_cnt(self) -> int:
        """Comparisons performed."""
        return self._vect_cnt

    @property
    def pass_cnt(self) -> int:
        """Comparisons that matched."""
        return self._pass_cnt

    @property
    def obs_cnt(self) -> int:
        """Observations processed."""
        return self._obs_cnt

    async def main_loop(self) -> None:
        if self.proceed is None:
            raise RuntimeError(f"{self.get_full_name()}: proceed handshake not connected")
        tr: T
        while True:
            tr = await self.get_port.get()
            self.check_item(tr)
            self._obs_cnt += 1
            self.proceed.pulse()

    def on_dut_reset(self) -> None:
        """Return the model to its reset state; called after the DUT reset."""

    def check_item(self, tr: T) -> None:
        """Update the model from one observation and compare outputs."""
        raise NotImplementedError("Implement check_item here")

    def record_pass(self, expected: int, actual: int) -> None:
        self._vect_cnt += 1
        self._pass_cnt += 1
        self.logger.debug(
            "PASS exp=%s act=%s vect_cnt=%d", expected, actual, self._vect_cnt
        )

    def record_mismatch(
        self, expected: int | None, actual: int | None, detail: str = ""
    ) -> None:
        self._vect_cnt += 1
        self._record("mismatch", expected, actual, detail)

    def record_underflow(self, actual: int | None, detail: str = "") -> None:
        self._record("underflow", None, actual, detail)

    def _record(
        self, kind: str, expected: int | None, actual: int | None, detail: str
    ) -> None:
        err = CheckError(
            kind=kind,
            index=self._obs_cnt,
            expected=expected,
            actual=actual,
            time_ns=utils_dv.sim_time_ns(),
            detail=detail,
        )
        self._errors.append(err)
        self.logger.error(
            "%s at observation %d (%.1f ns): exp=%s act=%s %s",
            kind.upper(),
            err.index,
            err.time_ns,
            expected,
            actual,
            detail,
        )

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        super().report_phase()
        if self.error_count == 0:
            self.logger.info(
                "*** TEST PASSED - %d observed, %d compared, %d passed ***",
                self._obs_cnt,
                self._vect_cnt,
                self._pass_cnt,
            )
        else:
            self.logger.error(
                "*** TEST FAILED - %d observed, %d compared, %d passed, "
                "%d error(s) ***",
                self._obs_cnt,
                self._vect_cnt,
                self._pass_cnt,
                self.error_count,
            )
        self.logger.debug("report_phase end")

# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/base_coverage.py

"""Functional coverage subscriber on the monitor's analysis port."""

from __future__ import annotations

import os
from typing import Generic, TypeVar

import pyuvm
from cocotb_coverage.coverage import coverage_db

from . import utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseCoverage(pyuvm.uvm_subscriber, Generic[T]):
    """Sample every observation into cocotb-coverage cover points.

    Subclasses decorate sample() with @CoverPoint/@CoverCross, naming the
    points under `cov_root`. The subscriber sees the same frozen
    observations the checker gets and never blocks the monitor.

    Configuration (via config_db):
        coverage_en (bool): Sample at all (default: True)

    Environment Variables:
        COV_YAML: Export the coverage database to this YAML file at the end

    Attributes:
        cov_root: Coverage database node summarized in report_phase
        sampled: Observations sampled so far
    """

    cov_root: str = "top"

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.yaml_path: str | None = os.getenv("COV_YAML")
        self.enabled: bool = True
        self.sampled: int = 0

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        cvrg = utils_dv.uvm_config_db_get_try(self, "coverage_en")
        if isinstance(cvrg, bool):
            self.enabled = cvrg
        self.logger.debug("end_of_elaboration_phase end: enabled=%s", self.enabled)

    def write(self, tt: T) -> None:
        if self.enabled:
            self.sample(tt)
            self.sampled += 1

    def sample(self, tt: T) -> None:
        """Decorate with CoverPoint/CoverCross in subclasses."""
        raise NotImplementedError("Implement sample here")

    def cover_percentage(self) -> float | None:
        """Coverage of `cov_root` in percent, None if nothing was declared there."""
        node = coverage_db.get(self.cov_root)
        if node is None:
            return None
        return float(node.cover_percentage)

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        super().report_phase()
        if self.enabled:
            pct = self.cover_percentage()
            self.logger.info(
                "coverage %s: %s after %d sample(s)",
                self.cov_root,
                "n/a" if pct is None else f"{pct:.1f}%",
                self.sampled,
            )
            coverage_db.report_coverage(self.logger.debug, bins=True)
            if self.yaml_path:
                coverage_db.export_to_yaml(filename=self.yaml_path)
                self.logger.info("coverage written to %s", self.yaml_path)
        self.logger.debug("report_phase end")

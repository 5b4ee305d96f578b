# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/dv/__init__.py

"""Shared design verification infrastructure.

Base classes for building a closed-loop, UVM-style testbench with cocotb and
pyuvm: a generator throttled by a proceed handshake, a driver and a monitor
sharing one notion of clock timing, an in-line checker and an environment
that owns the channels and the run lifecycle.

Base Classes:
- BaseEnv / EnvState: Environment and its lifecycle
- BaseTest: Test case framework
- BaseAgentMixin: Stoppable run() wrapper around an agent's main loop
- BaseGenerator: Produces items, one per proceed pulse
- BaseDriver: Drives DUT inputs and owns reset
- BaseMonitor: Samples DUT pins into frozen observations
- BaseChecker: Checks observations as they arrive
- BaseCoverage: Functional coverage collection
- BaseItem: Transaction item base class
- BaseHandshake: Counting pulse/take primitive

Clock Infrastructure:
- BaseClockDriver: Clock generation component
- BaseClockMixin: Mixin for clock-aware components

Utilities:
- utils_dv: Design verification utility functions
- utils_cli: Command-line interface utilities
"""

from __future__ import annotations

from fifoverif import __version__

from . import utils_cli, utils_dv
from .base_agent import BaseAgentMixin
from .base_checker import BaseChecker, CheckError
from .base_clock_driver import BaseClockDriver
from .base_clock_mixin import BaseClockMixin
from .base_coverage import BaseCoverage
from .base_driver import BaseDriver
from .base_env import BaseEnv, EnvState
from .base_generator import BaseGenerator, RandomizationError
from .base_handshake import BaseHandshake
from .base_item import BaseItem, FrozenItemError
from .base_monitor import BaseMonitor
from .base_test import BaseTest

__all__ = (
    "BaseAgentMixin",
    "BaseChecker",
    "BaseClockDriver",
    "BaseClockMixin",
    "BaseCoverage",
    "BaseDriver",
    "BaseEnv",
    "BaseGenerator",
    "BaseHandshake",
    "BaseItem",
    "BaseMonitor",
    "BaseTest",
    "CheckError",
    "EnvState",
    "FrozenItemError",
    "RandomizationError",
    "utils_dv",
    "utils_cli",
    "__version__",
)

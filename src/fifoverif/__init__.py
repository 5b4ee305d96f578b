# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/__init__.py

"""fifoverif: closed-loop verification of a synchronous FIFO.

The package holds a UVM-style testbench, built on cocotb and pyuvm, that
drives randomized read/write requests into a 16-entry by 8-bit synchronous
FIFO, observes its pins independently and checks the observed behavior
against a queue-based reference model.

Main Components:

ip:
    - shared/dv: reusable testbench base classes (handshakes, generator,
      driver, monitor, checker, environment, test) and config/logging helpers
    - sync_fifo: the FIFO simulation model (rtl/) and its testbench (dv/)
    - tools: DV command-line tools (dv, dv-regress, dv-report)

utils:
    Common utilities used by the command-line tools
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("fifoverif")
except PackageNotFoundError:
    __version__ = "0+local"

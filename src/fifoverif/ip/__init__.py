# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/__init__.py

"""IP under verification and its verification infrastructure.

Modules:
- sync_fifo: 16-entry by 8-bit synchronous FIFO

Subpackages:
- tools: DV command-line tools (dv, dv-regress, dv-report)
- shared: Testbench base classes and utilities shared across IP

Each IP module contains:
- rtl/: SystemVerilog simulation model and srclist.f
- dv/: Design verification testbench (cocotb/pyuvm)
"""

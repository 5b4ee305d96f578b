# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/__init__.py

"""Synchronous FIFO (16 entries x 8 bits).

Subpackages:
- rtl: SystemVerilog simulation model of the FIFO
- dv: Design verification testbench (cocotb/pyuvm)
"""

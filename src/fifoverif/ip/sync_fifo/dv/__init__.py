# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/sync_fifo/dv/__init__.py

"""Design verification testbench for sync_fifo.

A closed-loop, UVM-style testbench for the 16x8 synchronous FIFO using
cocotb and pyuvm.

Components:
- sync_fifo_env: Environment owning channels, handshakes and the run lifecycle
- sync_fifo_generator: Random (and directed) request generators
- sync_fifo_driver: Drives requests on the DUT inputs, owns reset
- sync_fifo_monitor: Samples control/flags, then data_out one edge later
- sync_fifo_checker: In-line checker against the reference model
- sync_fifo_ref_model: Queue-based reference model
- sync_fifo_item: Request/observation item
- sync_fifo_pins: Drive-only and observe-only pin views
- sync_fifo_coverage: Functional coverage collection

To run tests:
    dv --design=sync_fifo --test=test_sync_fifo
    dv-regress --file=src/fifoverif/ip/sync_fifo/dv/dv_regress.yaml
"""

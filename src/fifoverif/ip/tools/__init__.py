# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/tools/__init__.py

"""Command-line tools for the cocotb/pyuvm benches.

- dv: build and run one testbench module over one or more seeds
- dv-regress: run a YAML-defined list of dv jobs
- dv-report: summarize the manifests written by dv
"""

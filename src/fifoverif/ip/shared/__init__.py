# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/fifoverif/ip/shared/__init__.py

"""Shared components and utilities for IP testbenches.

Subpackages:
- dv: Shared design verification infrastructure (base classes, utilities)
"""

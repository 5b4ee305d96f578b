# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/conftest.py

"""Shared fixtures for host-side tests (no simulator needed)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from fifoverif.ip.sync_fifo.dv.sync_fifo_ref_model import SyncFifoRefModel


@pytest.fixture
def model() -> SyncFifoRefModel:
    """A fresh 16x8 reference model."""
    return SyncFifoRefModel("test_model")


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Write a dv-style manifest.json under tmp_path/out/tests/<name>/."""

    def _write(name: str, **fields: object) -> Path:
        run_dir = tmp_path / "out" / "tests" / name
        run_dir.mkdir(parents=True, exist_ok=True)
        (run_dir / "manifest.json").write_text(json.dumps(fields), encoding="utf-8")
        return run_dir

    return _write

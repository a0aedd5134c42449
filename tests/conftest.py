"""Pytest configuration to make `src` importable without installing the package."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

SRC_PATH: Path = Path(__file__).resolve().parents[1] / "src"

if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator shared by randomized tests."""
    return np.random.default_rng(20240617)

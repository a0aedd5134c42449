"""Tests for tolerance utilities."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from bsplinecurve.tolerance import (
    get_conservative_tolerance,
    get_default_tolerance,
    get_machine_epsilon,
    get_strict_tolerance,
    get_tolerance,
)

NO_LONGDOUBLE = np.dtype(np.longdouble) == np.dtype(np.float64)


class TestTolerance:
    """Test suite for tolerance utilities."""

    @pytest.mark.parametrize(
        ("dtype", "expected"),
        [
            (np.float16, 1e-3),
            (np.float32, 1e-6),
            ("float64", 1e-12),
            (np.longdouble, 1e-12 if NO_LONGDOUBLE else 1e-15),
        ],
    )
    def test_get_default_tolerance(
        self, dtype: np.dtype[np.floating[Any]] | type[np.floating[Any]] | str, expected: float
    ) -> None:
        """Default preset for each floating dtype."""
        assert get_default_tolerance(dtype) == expected

    @pytest.mark.parametrize(
        ("preset", "f32", "f64"),
        [("default", 1e-6, 1e-12), ("strict", 1e-7, 1e-15), ("conservative", 1e-5, 1e-10)],
    )
    def test_presets(self, preset: Any, f32: float, f64: float) -> None:
        """Each preset has its own values."""
        assert get_tolerance(np.float32, preset) == f32
        assert get_tolerance(np.float64, preset) == f64

    def test_shortcuts(self) -> None:
        """Shortcuts agree with `get_tolerance`."""
        assert get_strict_tolerance(np.float64) == get_tolerance(np.float64, "strict")
        assert get_conservative_tolerance("float32") == get_tolerance("float32", "conservative")

    def test_machine_epsilon(self) -> None:
        """Machine epsilon comes from numpy's finfo."""
        assert get_machine_epsilon(np.float64) == float(np.finfo(np.float64).eps)
        assert get_machine_epsilon(np.dtype("float32")) == float(np.finfo(np.float32).eps)

    @pytest.mark.parametrize("dtype", [np.int32, "int64", np.bool_, np.complex128])
    def test_unsupported_dtype(self, dtype: Any) -> None:
        """Reject non floating-point dtypes."""
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_default_tolerance(dtype)
        with pytest.raises(ValueError, match="Unsupported dtype"):
            get_machine_epsilon(dtype)

    def test_unknown_preset(self) -> None:
        """Reject unknown preset names."""
        with pytest.raises(ValueError, match="Unknown tolerance preset"):
            get_tolerance(np.float64, "loose")  # type: ignore[arg-type]

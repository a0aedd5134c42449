"""Per-dtype tolerances used when comparing curve parameters and values."""

from functools import cache
from typing import Any, Literal, NamedTuple, cast

import numpy as np
from numpy import typing as npt

TolerancePreset = Literal["default", "strict", "conservative"]


class _PresetValues(NamedTuple):
    """Tolerance of a preset for each supported floating-point type."""

    float16: float
    float32: float
    float64: float
    longdouble: float


_PRESETS: dict[str, _PresetValues] = {
    "default": _PresetValues(1e-3, 1e-6, 1e-12, 1e-15),
    "strict": _PresetValues(1e-4, 1e-7, 1e-15, 1e-18),
    "conservative": _PresetValues(1e-2, 1e-5, 1e-10, 1e-12),
}


@cache
def _as_float_dtype(name: str) -> np.dtype[np.floating[Any]]:
    """Return the floating dtype named `name`.

    Raises:
        ValueError: If the dtype is not a floating-point type.
    """
    dtype_obj = np.dtype(name)
    if dtype_obj.kind != "f":
        raise ValueError(f"Unsupported dtype: {name}")
    return cast(np.dtype[np.floating[Any]], dtype_obj)


def get_tolerance(dtype: npt.DTypeLike, preset: TolerancePreset = "default") -> float:
    """Get the tolerance of a preset for a floating-point dtype.

    Args:
        dtype (npt.DTypeLike): NumPy floating-point data type.
        preset (TolerancePreset): One of "default", "strict" or "conservative".
            Defaults to "default".

    Returns:
        float: Tolerance value.

    Raises:
        ValueError: If dtype is not a floating-point type or the preset is unknown.

    Example:
        >>> get_tolerance(np.float32)
        1e-06
        >>> get_tolerance("float64", "strict")
        1e-15
    """
    if preset not in _PRESETS:
        raise ValueError(f"Unknown tolerance preset: {preset!r}")
    values = _PRESETS[preset]
    dtype_obj = _as_float_dtype(np.dtype(dtype).name)

    if dtype_obj.type == np.float16:
        return values.float16
    if dtype_obj.type == np.float32:
        return values.float32
    if dtype_obj.type == np.float64:
        return values.float64
    return values.longdouble


def get_default_tolerance(dtype: npt.DTypeLike) -> float:
    """Shortcut for `get_tolerance(dtype, "default")`."""
    return get_tolerance(dtype, "default")


def get_strict_tolerance(dtype: npt.DTypeLike) -> float:
    """Shortcut for `get_tolerance(dtype, "strict")`."""
    return get_tolerance(dtype, "strict")


def get_conservative_tolerance(dtype: npt.DTypeLike) -> float:
    """Shortcut for `get_tolerance(dtype, "conservative")`."""
    return get_tolerance(dtype, "conservative")


def get_machine_epsilon(dtype: npt.DTypeLike) -> float:
    """Get machine epsilon for a given floating-point dtype.

    Args:
        dtype (npt.DTypeLike): NumPy floating-point data type.

    Returns:
        float: Smallest positive number that added to 1.0 gives a value
            different from 1.0.

    Raises:
        ValueError: If dtype is not a floating-point type.
    """
    return float(np.finfo(_as_float_dtype(np.dtype(dtype).name)).eps)


__all__ = [
    "TolerancePreset",
    "get_conservative_tolerance",
    "get_default_tolerance",
    "get_machine_epsilon",
    "get_strict_tolerance",
    "get_tolerance",
]

"""Knot vector generation utilities for B-spline curves.

This module provides functions to create knot vectors that match a given
number of control points and degree, either clamped at both ends (open) or
uniform everywhere (unclamped), over a configurable parameter domain.
"""

from typing import Any, cast

import numpy as np
import numpy.typing as npt


def _validate_knot_input(
    num_control_points: int,
    degree: int,
    domain: tuple[np.floating[Any], np.floating[Any]],
) -> None:
    """Validate input parameters for knot vector generation.

    Args:
        num_control_points (int): Number of control points of the curve.
        degree (int): Curve degree.
        domain (tuple[np.floating, np.floating]): Domain boundaries as (start, end).

    Raises:
        ValueError: If any parameter is invalid.
    """
    if not (np.isfinite(domain[0]) and np.isfinite(domain[1])):
        raise ValueError("domain ends must be finite")

    if domain[0] >= domain[1]:
        raise ValueError("domain[0] must be less than domain[1]")

    if degree < 0:
        raise ValueError("degree must be non-negative")

    if num_control_points <= degree:
        raise ValueError(
            f"num_control_points must be greater than the degree, "
            f"got {num_control_points} for degree {degree}"
        )


def _get_domain_and_dtype(
    domain: tuple[float | np.floating[Any], float | np.floating[Any]] | None,
    dtype: npt.DTypeLike | None,
) -> tuple[np.floating[Any], np.floating[Any], np.dtype[np.floating[Any]]]:
    """Resolve the domain ends and the floating dtype of a knot vector.

    Args:
        domain (Optional[tuple[float | np.floating, float | np.floating]]):
            Domain boundaries as (start, end). Defaults to (0.0, 1.0).
        dtype (Optional[npt.DTypeLike]): Data type of the knot vector. If None,
            taken from numpy floating domain ends, float64 otherwise.

    Returns:
        tuple[np.floating, np.floating, np.dtype]: Tuple of (start, end, dtype).

    Raises:
        ValueError: If dtype is not float32 or float64, or the domain ends
            have different numpy dtypes.
    """
    start_raw, end_raw = (0.0, 1.0) if domain is None else domain

    if dtype is None:
        dtypes = {np.dtype(type(v)) for v in (start_raw, end_raw) if isinstance(v, np.floating)}
        if len(dtypes) > 1:
            raise ValueError("start and end must have the same dtype")
        dtype = dtypes.pop() if dtypes else np.float64

    dtype_obj = np.dtype(dtype)
    if dtype_obj not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise ValueError("dtype must be float64 or float32")
    dtype_obj = cast(np.dtype[np.floating[Any]], dtype_obj)

    if np.ndim(start_raw) != 0 or np.ndim(end_raw) != 0:
        raise ValueError("domain ends must be scalar values")

    return dtype_obj.type(start_raw), dtype_obj.type(end_raw), dtype_obj


def create_uniform_open_knot_vector(
    num_control_points: int,
    degree: int,
    domain: tuple[float | np.floating[Any], float | np.floating[Any]] | None = None,
    dtype: npt.DTypeLike | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Create a uniform open (clamped) knot vector.

    An open knot vector has the first and last knots repeated (degree+1) times,
    so that the curve starts at the first control point and ends at the last
    one. Interior knots are uniformly spaced.

    Args:
        num_control_points (int): Number of control points. Must be greater
            than `degree`.
        degree (int): Curve degree. Must be non-negative.
        domain (Optional[tuple[float | np.floating, float | np.floating]]):
            Knot domain as (start, end). Defaults to (0.0, 1.0).
        dtype (Optional[npt.DTypeLike]): Data type of the knot vector.
            If None, inferred from the domain or defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Knot vector of length
            ``num_control_points + degree + 1``.

    Raises:
        ValueError: If any parameter is invalid.

    Example:
        >>> create_uniform_open_knot_vector(4, 2)
        array([0. , 0. , 0. , 0.5, 1. , 1. , 1. ])
    """
    start, end, dtype_obj = _get_domain_and_dtype(domain, dtype)
    _validate_knot_input(num_control_points, degree, (start, end))

    num_intervals = num_control_points - degree
    interior = np.linspace(start, end, num_intervals + 1, dtype=dtype_obj)[1:-1]

    return np.concatenate(
        [
            np.full(degree + 1, start, dtype=dtype_obj),
            interior,
            np.full(degree + 1, end, dtype=dtype_obj),
        ]
    )


def create_uniform_knot_vector(
    num_control_points: int,
    degree: int,
    domain: tuple[float | np.floating[Any], float | np.floating[Any]] | None = None,
    dtype: npt.DTypeLike | None = None,
) -> npt.NDArray[np.float32 | np.float64]:
    """Create a uniform (unclamped) knot vector.

    All knots are equally spaced, and `degree` knots are placed before and
    after the domain so that the knot domain of the curve is exactly
    `domain`. The curve does not pass through its end control points.

    Args:
        num_control_points (int): Number of control points. Must be greater
            than `degree`.
        degree (int): Curve degree. Must be non-negative.
        domain (Optional[tuple[float | np.floating, float | np.floating]]):
            Knot domain as (start, end). Defaults to (0.0, 1.0).
        dtype (Optional[npt.DTypeLike]): Data type of the knot vector.
            If None, inferred from the domain or defaults to float64.

    Returns:
        npt.NDArray[np.float32 | np.float64]: Knot vector of length
            ``num_control_points + degree + 1``.

    Raises:
        ValueError: If any parameter is invalid.

    Example:
        >>> create_uniform_knot_vector(3, 1, domain=(0.0, 2.0))
        array([-1.,  0.,  1.,  2.,  3.])
    """
    start, end, dtype_obj = _get_domain_and_dtype(domain, dtype)
    _validate_knot_input(num_control_points, degree, (start, end))

    num_intervals = num_control_points - degree
    step = (end - start) / dtype_obj.type(num_intervals)
    offsets = np.arange(-degree, num_control_points + 1, dtype=dtype_obj)

    knots = start + offsets * step
    # Keep the domain ends exact regardless of rounding in the products.
    knots[degree] = start
    knots[num_control_points] = end
    return knots.astype(dtype_obj, copy=False)


__all__ = [
    "create_uniform_knot_vector",
    "create_uniform_open_knot_vector",
]

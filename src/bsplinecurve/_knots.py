"""Numba kernels for knot vectors and de Boor's algorithm.

The functions in this module assume validated inputs: 1D, non-decreasing,
NaN-free knot vectors whose length matches the number of control points and
the degree. Validation and error reporting live in `bsplinecurve.curve`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import numba as nb
import numpy as np
import numpy.typing as npt

F = TypeVar("F", bound=Callable[..., Any])

if TYPE_CHECKING:
    # During type-checking, make the decorator a no-op that preserves types.
    def nb_jit(*args: object, **kwargs: object) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return func

        return decorator
else:
    # At runtime, use the real Numba decorator.
    nb_jit = nb.jit  # type: ignore[attr-defined]


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _is_non_decreasing_impl(knots: npt.NDArray[np.float32 | np.float64]) -> bool:
    """Check whether a knot vector is sorted in non-decreasing order.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): 1D knot vector.

    Returns:
        bool: True if every knot is greater than or equal to the previous one.
    """
    for i in range(1, knots.size):
        if knots[i] < knots[i - 1]:
            return False
    return True


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _find_span_impl(
    knots: npt.NDArray[np.float32 | np.float64],
    degree: int,
    t: float,
) -> int:
    """Find the knot span index used to evaluate a curve at `t`.

    The index returned is the first `i` with ``knots[i] > t`` (the upper
    bound of `t`), so that ``knots[i - 1] <= t < knots[i]``. It is clamped to
    the range of spans that have `degree + 1` control points available:
    a missing upper bound (``t >= knots[-1]``) or one beyond
    ``len(knots) - degree - 1`` maps to ``len(knots) - degree - 1``, and an
    upper bound of 0 maps to `degree`.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Sorted knot vector.
        degree (int): Curve degree.
        t (float): Parameter value.

    Returns:
        int: Span index.
    """
    last = knots.size - degree - 1
    upper = np.searchsorted(knots, t, side="right")
    if upper == knots.size:
        return last
    if upper == 0:
        return degree
    if upper >= last:
        return last
    return int(upper)


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _find_spans_impl(
    knots: npt.NDArray[np.float32 | np.float64],
    degree: int,
    pts: npt.NDArray[np.float32 | np.float64],
) -> npt.NDArray[np.int_]:
    """Vectorized `_find_span_impl` over a 1D array of parameters."""
    spans = np.empty(pts.size, dtype=np.int_)
    for k in range(pts.size):
        spans[k] = _find_span_impl(knots, degree, pts[k])
    return spans


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _is_in_domain_impl(
    knots: npt.NDArray[np.float32 | np.float64],
    degree: int,
    pts: npt.NDArray[np.float32 | np.float64],
    tol: float,
) -> npt.NDArray[np.bool_]:
    """Check if parameters are within the knot domain (up to tolerance).

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Sorted knot vector.
        degree (int): Curve degree.
        pts (npt.NDArray[np.float32 | np.float64]): 1D array of parameters.
        tol (float): Absolute tolerance at the domain ends.

    Returns:
        npt.NDArray[np.bool_]: True where the parameter is inside the domain.
    """
    knot_begin, knot_end = knots[degree], knots[-degree - 1]
    return np.logical_and(  # type: ignore[no-any-return]
        (knot_begin < pts) | np.isclose(knot_begin, pts, rtol=0.0, atol=tol),
        (pts < knot_end) | np.isclose(pts, knot_end, rtol=0.0, atol=tol),
    )


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _de_boor_impl(
    knots: npt.NDArray[np.float32 | np.float64],
    control_points: npt.NDArray[np.float32 | np.float64],
    degree: int,
    span: int,
    t: float,
    out: npt.NDArray[np.float32 | np.float64],
) -> bool:
    """Evaluate de Boor's algorithm bottom-up for array control points.

    The `degree + 1` control points affecting `span` are copied into a
    scratch buffer. Each of the `degree` levels blends neighbouring entries
    in place, the left entry of every pair being overwritten since it is no
    longer needed at the current level. After the last level the value of
    the curve is in the first row of the buffer.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Sorted knot vector.
        control_points (npt.NDArray[np.float32 | np.float64]): 2D array of
            shape (num_control_points, dim).
        degree (int): Curve degree.
        span (int): Span index as returned by `_find_span_impl`.
        t (float): Parameter value.
        out (npt.NDArray[np.float32 | np.float64]): Output array of shape (dim,).

    Returns:
        bool: False if a blend factor was not finite (degenerate knot span),
            in which case `out` is left untouched.
    """
    tmp = control_points[span - degree - 1 : span, :].copy()

    for level in range(degree):
        for j in range(degree - level):
            idx = j + level + 1 + span - degree
            denominator = knots[idx + degree - level - 1] - knots[idx - 1]
            if denominator == 0:
                return False
            alpha = (t - knots[idx - 1]) / denominator
            if not np.isfinite(alpha):
                return False
            tmp[j, :] = tmp[j, :] * (1 - alpha) + tmp[j + 1, :] * alpha

    out[:] = tmp[0, :]
    return True


@nb_jit(
    nopython=True,
    cache=True,
    parallel=False,
)
def _de_boor_many_impl(
    knots: npt.NDArray[np.float32 | np.float64],
    control_points: npt.NDArray[np.float32 | np.float64],
    degree: int,
    pts: npt.NDArray[np.float32 | np.float64],
    out: npt.NDArray[np.float32 | np.float64],
) -> int:
    """Evaluate de Boor's algorithm at every parameter of `pts`.

    Args:
        knots (npt.NDArray[np.float32 | np.float64]): Sorted knot vector.
        control_points (npt.NDArray[np.float32 | np.float64]): 2D array of
            shape (num_control_points, dim).
        degree (int): Curve degree.
        pts (npt.NDArray[np.float32 | np.float64]): 1D array of parameters,
            all inside the knot domain.
        out (npt.NDArray[np.float32 | np.float64]): Output array of shape
            (pts.size, dim).

    Returns:
        int: -1 on success, otherwise the index of the first parameter that
            hit a degenerate knot span.
    """
    spans = _find_spans_impl(knots, degree, pts)
    for k in range(pts.size):
        if not _de_boor_impl(knots, control_points, degree, spans[k], pts[k], out[k]):
            return k
    return -1


def _warmup_numba_functions() -> None:
    """Precompile numba functions with float64 signatures for faster first call."""
    knots_dummy = np.array([0.0, 0.0, 0.0, 1.0, 1.0, 1.0], dtype=np.float64)
    cps_dummy = np.zeros((3, 1), dtype=np.float64)
    pts_dummy = np.array([0.5], dtype=np.float64)
    out_dummy = np.empty((1, 1), dtype=np.float64)
    degree_dummy = 2

    _is_non_decreasing_impl(knots_dummy)
    _find_span_impl(knots_dummy, degree_dummy, 0.5)
    _is_in_domain_impl(knots_dummy, degree_dummy, pts_dummy, 1e-12)
    _de_boor_many_impl(knots_dummy, cps_dummy, degree_dummy, pts_dummy, out_dummy)


# Precompile numba functions on module import (skip during type checking)
if not TYPE_CHECKING:
    _warmup_numba_functions()


__all__ = [
    "_de_boor_impl",
    "_de_boor_many_impl",
    "_find_span_impl",
    "_find_spans_impl",
    "_is_in_domain_impl",
    "_is_non_decreasing_impl",
]

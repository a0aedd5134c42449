"""B-spline curves evaluated with de Boor's algorithm."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar

import numpy as np
from numpy import typing as npt

from ._knots import (
    _de_boor_impl,
    _de_boor_many_impl,
    _find_span_impl,
    _is_in_domain_impl,
    _is_non_decreasing_impl,
)
from .errors import (
    DegenerateKnotSpanError,
    InvalidControlPointCountError,
    InvalidKnotCountError,
    InvalidKnotValueError,
    ParameterOutOfDomainError,
)
from .interpolate import Interpolable, interpolate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _validate_degree(degree: int) -> int:
    """Check that `degree` is a non-negative integer and return it as `int`.

    Raises:
        TypeError: If `degree` is not an integer.
        ValueError: If `degree` is negative.
    """
    if isinstance(degree, bool) or not isinstance(degree, (int, np.integer)):
        raise TypeError(f"degree must be a non-negative integer, got {degree!r}")
    if degree < 0:
        raise ValueError(f"degree must be a non-negative integer, got {degree}")
    return int(degree)


def _normalize_knots(
    knots: Sequence[Any] | npt.NDArray[Any],
) -> npt.NDArray[np.float32 | np.float64]:
    """Convert knots to a sorted float32 or float64 array.

    float32 and float64 inputs keep their dtype, any other real input is
    converted to float64: float16 and integers are promoted, longdouble is
    rounded to float64 since the compiled kernels only handle float32 and
    float64. The returned array is always a copy.

    Raises:
        InvalidKnotValueError: If the knots are not real numbers, are not a
            1D sequence, or contain NaN.
    """
    arr = np.asarray(knots)
    if arr.ndim != 1:
        raise InvalidKnotValueError(f"knots must be a 1D sequence, got {arr.ndim} dimensions")

    if arr.dtype.kind == "f" and arr.dtype in (np.float32, np.float64):
        arr = arr.copy()
    elif arr.dtype.kind in "iuf":
        arr = arr.astype(np.float64)
    elif arr.dtype.kind == "O":
        try:
            arr = arr.astype(np.float64)
        except (TypeError, ValueError) as err:
            raise InvalidKnotValueError(f"knots must be real numbers: {err}") from err
    else:
        raise InvalidKnotValueError(f"knots must be real numbers, got dtype {arr.dtype}")

    if np.any(np.isnan(arr)):
        raise InvalidKnotValueError("knots cannot be ordered: the knot vector contains NaN")

    if not _is_non_decreasing_impl(arr):
        logger.debug("Knot vector %s is not sorted, sorting it in ascending order", arr)
        arr.sort(kind="stable")

    return arr


def _as_numeric_control_points(
    points: Sequence[Any] | npt.NDArray[Any],
    knots_dtype: np.dtype[Any],
) -> npt.NDArray[np.float32 | np.float64] | None:
    """Convert control points to a float array if they are plain numbers.

    Numbers, numeric numpy arrays and (nested) sequences of numbers with a
    common shape are numeric. Integer values take the dtype of the knots.

    Returns:
        npt.NDArray[np.float32 | np.float64] | None: Float copy of the
            control points, or None if they must be blended as objects.
    """
    if isinstance(points, np.ndarray):
        arr = points
    else:
        if any(isinstance(p, Interpolable) for p in points):
            return None
        try:
            arr = np.asarray(points)
        except ValueError:
            # ragged sequences (e.g. points of different sizes)
            return None

    if arr.dtype.kind == "f" and arr.dtype in (np.float32, np.float64):
        return arr.copy()
    if arr.dtype.kind in "iuf":
        return arr.astype(knots_dtype)
    return None


class BsplineCurve(Generic[T]):
    """A B-spline curve of a given degree over generic control points.

    The curve is defined by its `degree`, a sequence of control points and
    a non-decreasing knot vector of length
    ``num_control_points + degree + 1``. It is evaluated at parameters of
    the knot domain ``[knots[degree], knots[-degree - 1]]``.

    Control points may be numbers, numpy arrays or sequences of numbers
    (positions, colors, ...), which are stored as a float array and
    evaluated by compiled kernels, or arbitrary objects that can be blended
    with `bsplinecurve.interpolate.interpolate`.

    The knots should be supplied sorted. Unsorted knots are sorted in
    ascending order, which may pair knots with different control points
    than the caller intended.

    A curve is immutable after construction and can be evaluated from
    several threads at once.

    Example:
        >>> curve = BsplineCurve(1, [0.0, 1.0], [0.0, 0.0, 1.0, 1.0])
        >>> float(curve.point(0.25))
        0.25
    """

    def __init__(
        self,
        degree: int,
        control_points: Iterable[T] | npt.ArrayLike,
        knots: Iterable[Any] | npt.ArrayLike,
    ) -> None:
        """Initialize a B-spline curve.

        Args:
            degree (int): Polynomial degree of the curve segments.
            control_points (Iterable[T] | npt.ArrayLike): Control points, in
                curve order. They are copied.
            knots (Iterable[Any] | npt.ArrayLike): Knot vector with
                ``len(control_points) + degree + 1`` real values. It is copied
                and sorted.

        Raises:
            TypeError: If `degree` is not an integer.
            ValueError: If `degree` is negative.
            InvalidControlPointCountError: If there are not more control
                points than the degree.
            InvalidKnotCountError: If the number of knots is not
                ``len(control_points) + degree + 1``.
            InvalidKnotValueError: If a knot is NaN or not a real number.
        """
        self._degree = _validate_degree(degree)

        points: Sequence[Any] | npt.NDArray[Any]
        if isinstance(control_points, np.ndarray):
            if control_points.ndim == 0:
                raise TypeError("control_points must be a sequence")
            points = control_points
        else:
            points = list(control_points)  # type: ignore[arg-type]
        knots_seq: Sequence[Any] | npt.NDArray[Any] = (
            knots if isinstance(knots, np.ndarray) else list(knots)  # type: ignore[arg-type]
        )

        num_points = len(points)
        if num_points <= self._degree:
            raise InvalidControlPointCountError(num_points, self._degree)

        expected_knots = num_points + self._degree + 1
        if len(knots_seq) != expected_knots:
            raise InvalidKnotCountError(len(knots_seq), expected_knots)

        self._knots = _normalize_knots(knots_seq)
        self._knots.flags.writeable = False

        numeric = _as_numeric_control_points(points, self._knots.dtype)
        self._control_points: npt.NDArray[np.float32 | np.float64] | tuple[T, ...]
        self._packed_points: npt.NDArray[np.float32 | np.float64] | None
        if numeric is not None:
            numeric.flags.writeable = False
            self._control_points = numeric
            self._packed_points = np.ascontiguousarray(numeric.reshape(num_points, -1))
            self._packed_points.flags.writeable = False
        else:
            self._control_points = tuple(copy.copy(p) for p in points)
            self._packed_points = None

        logger.debug(
            "Created %s curve of degree %d with %d control points and domain %s",
            "numeric" if self.is_numeric else "generic",
            self._degree,
            num_points,
            self.knot_domain(),
        )

    @property
    def degree(self) -> int:
        """The polynomial degree of the curve."""
        return self._degree

    @property
    def num_control_points(self) -> int:
        """The number of control points."""
        return len(self._control_points)

    @property
    def num_knots(self) -> int:
        """The number of knots."""
        return int(self._knots.size)

    @property
    def dtype(self) -> np.dtype[np.float32 | np.float64]:
        """The floating-point type of the knots and parameters."""
        return self._knots.dtype

    @property
    def is_numeric(self) -> bool:
        """Whether control points are stored as a float array."""
        return self._packed_points is not None

    def control_points(self) -> Iterator[T]:
        """Get an iterator over the control points, in curve order."""
        return iter(self._control_points)  # type: ignore[arg-type]

    def knots(self) -> Iterator[np.floating[Any]]:
        """Get an iterator over the sorted knots."""
        return iter(self._knots)

    def knot_domain(self) -> tuple[np.floating[Any], np.floating[Any]]:
        """Get the parameter domain ``(knots[degree], knots[-degree - 1])``.

        The curve can only be evaluated for parameters in this closed
        interval.
        """
        return self._knots[self._degree], self._knots[-self._degree - 1]

    def is_in_domain(
        self, pts: npt.ArrayLike, tol: float = 0.0
    ) -> npt.NDArray[np.bool_] | np.bool_:
        """Check whether parameters are inside the knot domain.

        Args:
            pts (npt.ArrayLike): Parameter value or array of values.
            tol (float): Absolute tolerance at the domain ends. Defaults to 0,
                which accepts exactly the parameters `point` accepts. See
                `bsplinecurve.tolerance` for per-dtype values.

        Returns:
            npt.NDArray[np.bool_] | np.bool_: Mask with the shape of `pts`.
        """
        if tol < 0:
            raise ValueError("tol must be non-negative")
        pts_arr = np.asarray(pts, dtype=self.dtype)
        mask = _is_in_domain_impl(self._knots, self._degree, pts_arr.ravel(), tol)
        if pts_arr.ndim == 0:
            return mask[0]  # type: ignore[no-any-return]
        return mask.reshape(pts_arr.shape)  # type: ignore[no-any-return]

    def point(self, t: Any) -> T:
        """Compute the point of the curve at parameter `t`.

        Args:
            t (Any): Parameter inside `knot_domain()` (inclusive).

        Returns:
            T: The point of the curve. For numeric curves this is a numpy
                scalar (scalar control points) or a new array with the shape
                of one control point.

        Raises:
            ParameterOutOfDomainError: If `t` is NaN or outside the knot domain.
            DegenerateKnotSpanError: If a blend factor is not finite.
        """
        t_val = self._check_parameter(t)
        span = _find_span_impl(self._knots, self._degree, t_val)

        if self._packed_points is None:
            return self._de_boor_generic(t_val, span)

        out = np.empty(self._packed_points.shape[1], dtype=self._packed_points.dtype)
        if not _de_boor_impl(self._knots, self._packed_points, self._degree, span, t_val, out):
            raise DegenerateKnotSpanError(t, span)
        return self._unpack(out)  # type: ignore[return-value]

    def tabulate(self, pts: npt.ArrayLike) -> npt.NDArray[np.float32 | np.float64] | list[T]:
        """Evaluate the curve at several parameters.

        Args:
            pts (npt.ArrayLike): Parameters inside `knot_domain()`.

        Returns:
            npt.NDArray[np.float32 | np.float64] | list[T]: For numeric curves,
                an array of shape ``(*pts.shape, *control_point_shape)``. For
                other curves, a list with the points for the flattened `pts`.

        Raises:
            ParameterOutOfDomainError: If any parameter is NaN or outside the
                knot domain.
            DegenerateKnotSpanError: If a blend factor is not finite.
        """
        pts_arr = np.asarray(pts, dtype=self.dtype)
        flat = np.ascontiguousarray(pts_arr.ravel())

        lo, hi = self.knot_domain()
        outside = ~((flat >= lo) & (flat <= hi))
        if np.any(outside):
            raise ParameterOutOfDomainError(flat[np.argmax(outside)], (lo, hi))

        if self._packed_points is None:
            return [
                self._de_boor_generic(t, _find_span_impl(self._knots, self._degree, t))
                for t in flat
            ]

        out = np.empty((flat.size, self._packed_points.shape[1]), dtype=self._packed_points.dtype)
        bad = _de_boor_many_impl(self._knots, self._packed_points, self._degree, flat, out)
        if bad >= 0:
            t_bad = flat[bad]
            raise DegenerateKnotSpanError(t_bad, _find_span_impl(self._knots, self._degree, t_bad))

        point_shape = self._control_points.shape[1:]  # type: ignore[union-attr]
        return out.reshape(pts_arr.shape + point_shape)

    def _check_parameter(self, t: Any) -> np.floating[Any]:
        """Convert `t` to the knots dtype and check it is inside the domain."""
        if np.ndim(t) != 0:
            raise TypeError(f"t must be a scalar parameter, got shape {np.shape(t)}")
        t_val = self.dtype.type(t)
        lo, hi = self.knot_domain()
        if not lo <= t_val <= hi:
            raise ParameterOutOfDomainError(t, (lo, hi))
        return t_val

    def _unpack(self, value: npt.NDArray[np.float32 | np.float64]) -> Any:
        """Give a packed row the shape of one control point."""
        point_shape = self._control_points.shape[1:]  # type: ignore[union-attr]
        if not point_shape:
            return value[0]
        return value.reshape(point_shape)

    def _de_boor_generic(self, t: np.floating[Any], span: int) -> T:
        """Iterative de Boor's algorithm over arbitrary control points.

        Computes the recursive de Boor tree from the bottom up: each level
        reuses the results of the previous one and overwrites the entries
        that are no longer needed.
        """
        degree = self._degree
        knots = self._knots
        points: tuple[T, ...] = self._control_points  # type: ignore[assignment]

        tmp = [points[j + span - degree - 1] for j in range(degree + 1)]
        for level in range(degree):
            for j in range(degree - level):
                idx = j + level + 1 + span - degree
                denominator = knots[idx + degree - level - 1] - knots[idx - 1]
                if denominator == 0:
                    raise DegenerateKnotSpanError(t, span)
                alpha = (t - knots[idx - 1]) / denominator
                if not np.isfinite(alpha):
                    raise DegenerateKnotSpanError(t, span)
                tmp[j] = interpolate(tmp[j], tmp[j + 1], alpha.item())
        return tmp[0]

    def __repr__(self) -> str:
        lo, hi = self.knot_domain()
        return (
            f"{type(self).__name__}(degree={self._degree}, "
            f"num_control_points={self.num_control_points}, domain=[{lo}, {hi}])"
        )


__all__ = ["BsplineCurve"]

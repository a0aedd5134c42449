"""Linear blending of control points.

A B-spline curve only ever combines two control points at a time through
`interpolate(a, b, t)`. Numbers, numpy arrays and any type with scalar
multiplication and addition get the linear blend ``a * (1 - t) + b * t``.
Types that need something else (e.g. spherical interpolation of unit
quaternions) either implement the `Interpolable` protocol or register an
implementation with `interpolate.register`.
"""

from __future__ import annotations

from functools import singledispatch
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Interpolable(Protocol):
    """Objects that know how to blend themselves with another instance."""

    def interpolate(self, other: Any, t: Any) -> Any:
        """Blend `self` towards `other` by the weight `t`.

        A weight of 0 must give `self` and a weight of 1 must give `other`.
        """
        ...


@singledispatch
def interpolate(a: Any, b: Any, t: Any) -> Any:
    """Blend `a` towards `b` by the weight `t`.

    Args:
        a (Any): First value, returned for `t == 0`.
        b (Any): Second value, returned for `t == 1`.
        t (Any): Blend weight.

    Returns:
        Any: The blended value.
    """
    if isinstance(a, Interpolable):
        return a.interpolate(b, t)
    return a * (1 - t) + b * t


__all__ = ["Interpolable", "interpolate"]

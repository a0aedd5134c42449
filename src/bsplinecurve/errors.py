"""Exceptions raised when building or evaluating B-spline curves."""

from __future__ import annotations

from typing import Any


class BsplineError(ValueError):
    """Base class of all B-spline curve errors."""


class InvalidControlPointCountError(BsplineError):
    """Raised when a curve has no more control points than its degree."""

    def __init__(self, num_control_points: int, degree: int) -> None:
        self.num_control_points = num_control_points
        self.degree = degree
        super().__init__(
            f"Too few control points for curve: got {num_control_points}, "
            f"a degree {degree} curve needs at least {degree + 1}"
        )


class InvalidKnotCountError(BsplineError):
    """Raised when the knot count differs from `num_control_points + degree + 1`."""

    def __init__(self, received: int, expected: int) -> None:
        self.received = received
        self.expected = expected
        super().__init__(f"Invalid number of knots, got {received}, expected {expected}")


class InvalidKnotValueError(BsplineError):
    """Raised when a knot cannot be ordered (NaN or non-real values)."""


class ParameterOutOfDomainError(BsplineError):
    """Raised when a curve is evaluated outside of its knot domain."""

    def __init__(self, t: Any, domain: tuple[Any, Any]) -> None:
        self.t = t
        self.domain = domain
        super().__init__(
            f"Parameter {t} is outside of the knot domain [{domain[0]}, {domain[1]}]"
        )


class DegenerateKnotSpanError(BsplineError):
    """Raised when a blend factor is not finite (zero-width knot span)."""

    def __init__(self, t: Any, span: int) -> None:
        self.t = t
        self.span = span
        super().__init__(
            f"Degenerate knot span {span} while evaluating at {t}: "
            "blend factor is not finite"
        )


__all__ = [
    "BsplineError",
    "DegenerateKnotSpanError",
    "InvalidControlPointCountError",
    "InvalidKnotCountError",
    "InvalidKnotValueError",
    "ParameterOutOfDomainError",
]

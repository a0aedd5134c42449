"""Smoke tests for package metadata.

Validates public attributes exposed via the package API.
"""

from __future__ import annotations

import logging
from typing import Final

import bsplinecurve


def test_package_all_exports() -> None:
    """Ensure all expected symbols are exported."""
    expected_metadata: Final[set[str]] = {"__version__", "__license__", "__author__"}
    assert expected_metadata.issubset(set(bsplinecurve.__all__))

    expected_public_api: Final[set[str]] = {
        # Curve
        "BsplineCurve",
        "Interpolable",
        "interpolate",
        # Errors
        "BsplineError",
        "DegenerateKnotSpanError",
        "InvalidControlPointCountError",
        "InvalidKnotCountError",
        "InvalidKnotValueError",
        "ParameterOutOfDomainError",
        # Knot vectors
        "create_uniform_knot_vector",
        "create_uniform_open_knot_vector",
        # Tolerance
        "get_conservative_tolerance",
        "get_default_tolerance",
        "get_machine_epsilon",
        "get_strict_tolerance",
        "get_tolerance",
    }
    assert expected_public_api.issubset(set(bsplinecurve.__all__))

    for name in bsplinecurve.__all__:
        assert hasattr(bsplinecurve, name)


def test_metadata_values() -> None:
    """Metadata attributes are non-empty strings."""
    assert bsplinecurve.__version__ == "0.1.0"
    assert bsplinecurve.__license__ == "MIT"
    assert isinstance(bsplinecurve.__author__, str)


def test_library_logger_is_silent_by_default() -> None:
    """The package logger only carries a NullHandler."""
    handlers = logging.getLogger("bsplinecurve").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)

"""Public API surface for bsplinecurve.

Defines package metadata and exported interfaces.
"""

import logging
from typing import Final

from .curve import BsplineCurve
from .errors import (
    BsplineError,
    DegenerateKnotSpanError,
    InvalidControlPointCountError,
    InvalidKnotCountError,
    InvalidKnotValueError,
    ParameterOutOfDomainError,
)
from .interpolate import Interpolable, interpolate
from .knots import create_uniform_knot_vector, create_uniform_open_knot_vector
from .tolerance import (
    get_conservative_tolerance,
    get_default_tolerance,
    get_machine_epsilon,
    get_strict_tolerance,
    get_tolerance,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package metadata
__version__: Final[str] = "0.1.0"
__license__: Final[str] = "MIT"
__author__: Final[str] = "Pablo Antolin <pablo.antolin@epfl.ch>"

# Public interface: only functions/classes that don't start with _
__all__ = [
    "BsplineCurve",
    "BsplineError",
    "DegenerateKnotSpanError",
    "Interpolable",
    "InvalidControlPointCountError",
    "InvalidKnotCountError",
    "InvalidKnotValueError",
    "ParameterOutOfDomainError",
    "__author__",
    "__license__",
    "__version__",
    "create_uniform_knot_vector",
    "create_uniform_open_knot_vector",
    "get_conservative_tolerance",
    "get_default_tolerance",
    "get_machine_epsilon",
    "get_strict_tolerance",
    "get_tolerance",
    "interpolate",
]

"""
Thin seam between the solver and the unit library.

The core works on SI magnitudes internally and only touches pint here and at
the public boundary, so the quantity backend stays swappable.
"""

import numpy as np
from pint import Quantity as Q

from .errors import InvalidGeometry

AMPERE = "ampere"
METER = "meter"
RADIAN = "radian"
TESLA = "tesla"
HENRY = "henry"


def to_si(value, unit):
    """
    Returns the magnitude of `value` expressed in `unit`.

    Bare numbers are treated as dimensionless, so passing a float where a
    length is expected raises pint's DimensionalityError like any other
    dimension mismatch.
    """
    return Q(value).to(unit).magnitude


def scalar_to_si(value, unit, name):
    """Like to_si, but insists on a single (0-d) value."""
    magnitude = to_si(value, unit)
    if np.ndim(magnitude) != 0:
        raise InvalidGeometry(f"{name} must be a scalar quantity")
    return float(magnitude)


def quantity(magnitude, unit):
    """Wraps a raw SI magnitude (scalar or array) into a quantity."""
    return Q(magnitude, unit)

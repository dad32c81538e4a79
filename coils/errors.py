from pint import DimensionalityError

# Raised by pint whenever a quantity of the wrong physical dimension is passed.
DimensionMismatch = DimensionalityError


class CoilError(Exception):
    """Base class for errors raised by the coil field solver."""


class InvalidGeometry(CoilError, ValueError):
    """A coil (or query point) violates a geometric invariant."""


class OnConductorSingularity(CoilError, ValueError):
    """
    The query point lies on the idealised zero-thickness conductor,
    where the flux density is undefined.
    """

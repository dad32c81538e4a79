"""
Coil geometry model.

Every coil is an immutable value object. Quantities are normalised to SI
units on construction, so two coils describing the same geometry compare
(and hash) equal regardless of the units they were built with.
"""

from dataclasses import dataclass, replace
from numbers import Integral

import numpy as np

from .errors import InvalidGeometry
from .quantity import AMPERE, METER, quantity, scalar_to_si


def _set(obj, name, value):
    object.__setattr__(obj, name, value)


def _current(value):
    return quantity(scalar_to_si(value, AMPERE, "current"), AMPERE)


def _length(value, name, positive=False):
    magnitude = scalar_to_si(value, METER, name)
    if not np.isfinite(magnitude):
        raise InvalidGeometry(f"{name} must be finite, got {value}")
    if positive and magnitude <= 0:
        raise InvalidGeometry(f"{name} must be positive, got {value}")
    if magnitude < 0:
        raise InvalidGeometry(f"{name} must be non-negative, got {value}")
    return quantity(magnitude, METER)


def _turns(value, name):
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidGeometry(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidGeometry(f"{name} must be positive, got {value}")
    return int(value)


class Coil:
    """Marker base shared by all coil kinds; the operations live in coils.field and coils.conductor."""

    __slots__ = ()


@dataclass(frozen=True)
class CurrentLoop(Coil):
    """
    An ideal, infinitely thin circular current loop.

    Args:
        current: Signed current through the loop (sign encodes direction).
        radius: Loop radius, strictly positive.
        height: Axial offset of the loop plane, zero by default.
    """
    current: object
    radius: object
    height: object = quantity(0.0, METER)

    def __post_init__(self):
        _set(self, "current", _current(self.current))
        _set(self, "radius", _length(self.radius, "radius", positive=True))
        height = scalar_to_si(self.height, METER, "height")
        if not np.isfinite(height):
            raise InvalidGeometry(f"height must be finite, got {self.height}")
        _set(self, "height", quantity(height, METER))


@dataclass(frozen=True)
class Helical(Coil):
    """
    A coil wound on a grid of radial_turns x axial_turns turns in series.

    The winding occupies the annulus [inner_radius, outer_radius] and the
    axial span [height - length/2, height + length/2].
    """
    current: object
    inner_radius: object
    outer_radius: object
    length: object
    height: object = quantity(0.0, METER)
    radial_turns: int = 1
    axial_turns: int = 1

    def __post_init__(self):
        _set(self, "current", _current(self.current))
        _set(self, "inner_radius", _length(self.inner_radius, "inner_radius"))
        _set(self, "outer_radius", _length(self.outer_radius, "outer_radius", positive=True))
        _set(self, "length", _length(self.length, "length"))
        height = scalar_to_si(self.height, METER, "height")
        if not np.isfinite(height):
            raise InvalidGeometry(f"height must be finite, got {self.height}")
        _set(self, "height", quantity(height, METER))
        _set(self, "radial_turns", _turns(self.radial_turns, "radial_turns"))
        _set(self, "axial_turns", _turns(self.axial_turns, "axial_turns"))

        if self.inner_radius > self.outer_radius:
            raise InvalidGeometry(
                f"inner_radius ({self.inner_radius}) exceeds outer_radius ({self.outer_radius})"
            )

    @property
    def turns(self):
        """Total number of turns in the winding."""
        return self.radial_turns * self.axial_turns

    @property
    def mean_radius(self):
        return (self.outer_radius + self.inner_radius) / 2

    @classmethod
    def pancake(cls, current, inner_radius, outer_radius, turns, height=quantity(0.0, METER)):
        """Factory method for a flat coil whose turns are spread only radially."""
        return cls(
            current=current,
            inner_radius=inner_radius,
            outer_radius=outer_radius,
            length=quantity(0.0, METER),
            height=height,
            radial_turns=turns,
            axial_turns=1
        )

    @classmethod
    def solenoid(cls, current, radius, length, turns, height=quantity(0.0, METER)):
        """Factory method for a single-layer coil whose turns are stacked only axially."""
        return cls(
            current=current,
            inner_radius=radius,
            outer_radius=radius,
            length=length,
            height=height,
            radial_turns=1,
            axial_turns=turns
        )


@dataclass(frozen=True)
class Helmholtz(Coil):
    """
    Two copies of a Helical coil, coaxial and `separation` apart, carrying
    current in the same direction.

    The pair is centred on the template's own height; the copies sit at
    coil.height -/+ separation/2. When no separation is given the ideal one
    for the configuration is derived from the (already validated) template.
    """
    coil: Helical
    separation: object = None

    # Sign applied to the current of the second (upper) copy.
    current_sign = 1

    def __post_init__(self):
        if not isinstance(self.coil, Helical):
            raise InvalidGeometry(f"{type(self).__name__} requires a Helical coil, got {type(self.coil).__name__}")
        separation = self.default_separation(self.coil) if self.separation is None else self.separation
        _set(self, "separation", _length(separation, "separation"))

    @classmethod
    def default_separation(cls, coil):
        """Ideal Helmholtz spacing: the mean radius of the coil."""
        return (coil.outer_radius + coil.inner_radius) / 2

    @property
    def height(self):
        return self.coil.height

    @property
    def copies(self):
        """The two component coils, lower copy first."""
        half = self.separation / 2
        lower = replace(self.coil, height=self.coil.height - half)
        upper = replace(
            self.coil,
            height=self.coil.height + half,
            current=self.current_sign * self.coil.current
        )
        return lower, upper


@dataclass(frozen=True)
class AntiHelmholtz(Helmholtz):
    """A Helmholtz pair with the current of the second copy reversed."""

    current_sign = -1

    @classmethod
    def default_separation(cls, coil):
        """Maximum-gradient-linearity spacing: sqrt(3) times the mean radius."""
        return 3 ** 0.5 * (coil.outer_radius + coil.inner_radius) / 2


Pancake = Helical.pancake
Solenoid = Helical.solenoid

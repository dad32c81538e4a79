"""
Reduces compound coils to the elemental circular loops they are built from.
"""

import logging
from functools import lru_cache

import numpy as np

from .geometry import CurrentLoop, Helical, Helmholtz
from .quantity import AMPERE, METER, quantity, to_si

logger = logging.getLogger(__name__)


def radial_positions(coil):
    """
    Radii of the radial_turns sub-annulus centres, in metres.

    Evenly spaced between inner_radius and outer_radius; a single radial
    turn sits at the mean radius.
    """
    inner = to_si(coil.inner_radius, METER)
    outer = to_si(coil.outer_radius, METER)
    step = (outer - inner) / coil.radial_turns
    return inner + (np.arange(coil.radial_turns) + 0.5) * step


def axial_positions(coil):
    """Heights of the axial_turns centres across [height - length/2, height + length/2], in metres."""
    length = to_si(coil.length, METER)
    bottom = to_si(coil.height, METER) - length / 2
    step = length / coil.axial_turns
    return bottom + (np.arange(coil.axial_turns) + 0.5) * step


@lru_cache(maxsize=128)
def discretize(coil):
    """
    Converts a coil into an ordered tuple of CurrentLoops.

    Helical coils yield radial_turns x axial_turns loops (radial layer
    major, bottom to top within a layer), each carrying the full coil
    current since the turns are in series. (Anti-)Helmholtz pairs yield the
    loops of the lower copy followed by those of the upper copy.

    Coils are immutable, so the result is memoised.
    """
    if isinstance(coil, CurrentLoop):
        return (coil,)

    if isinstance(coil, Helical):
        loops = tuple(
            CurrentLoop(current=coil.current, radius=quantity(r, METER), height=quantity(h, METER))
            for r in radial_positions(coil)
            for h in axial_positions(coil)
        )
        logger.debug("Discretized %d x %d helical coil into %d loops",
                     coil.radial_turns, coil.axial_turns, len(loops))
        return loops

    if isinstance(coil, Helmholtz):
        lower, upper = coil.copies
        return discretize(lower) + discretize(upper)

    raise TypeError(f"Cannot discretize object of type {type(coil).__name__}")


current_loops = discretize


@lru_cache(maxsize=128)
def loop_arrays(coil):
    """
    Radii, currents and heights of the discretized loops as read-only SI
    numpy arrays, in discretization order.
    """
    loops = discretize(coil)
    radii = np.array([to_si(loop.radius, METER) for loop in loops])
    currents = np.array([to_si(loop.current, AMPERE) for loop in loops])
    heights = np.array([to_si(loop.height, METER) for loop in loops])
    for array in (radii, currents, heights):
        array.flags.writeable = False
    return radii, currents, heights

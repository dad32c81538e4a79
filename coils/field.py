"""
Magnetic flux density of coils.

A CurrentLoop is evaluated directly with the analytical solution; every
other coil is discretized into loops whose fields are summed (Biot-Savart is
linear in the source current).
"""

import numpy as np

from .discretize import loop_arrays
from .errors import InvalidGeometry
from .geometry import CurrentLoop, Helical, Helmholtz
from .physics import Magnetics
from .quantity import AMPERE, METER, TESLA, quantity, to_si


def _query_point(rho, z):
    rho = np.asarray(to_si(rho, METER), dtype=float)
    z = np.asarray(to_si(z, METER), dtype=float)
    if np.any(rho < 0):
        raise InvalidGeometry("Radial coordinate rho must be non-negative.")
    return rho, z


def evaluate_field(coil, rho, z):
    """
    Computes the radial and axial magnetic flux density due to a coil.

    Args:
        coil: A CurrentLoop, Helical, Helmholtz or AntiHelmholtz coil.
        rho: Radial coordinate (length quantity, scalar or array, >= 0).
        z: Axial coordinate in the global frame (length quantity).

    Returns:
        (B_rho, B_z) as flux density quantities broadcast to the shape of the query points.
    """
    rho, z = _query_point(rho, z)
    radii, currents, heights = loop_arrays(coil)

    # Loops along the first axis, query points along the rest.
    shape = (len(radii),) + (1,) * np.broadcast(rho, z).ndim
    b_rho, b_z = Magnetics.loop_field(
        radii.reshape(shape),
        currents.reshape(shape),
        rho,
        z - heights.reshape(shape),
    )
    return quantity(np.sum(b_rho, axis=0), TESLA), quantity(np.sum(b_z, axis=0), TESLA)


def evaluate_field_on_axis(coil, z=None):
    """
    Computes the magnetic flux density on the symmetry axis (rho = 0).

    Cheaper than evaluate_field since no elliptic integrals are needed.

    Args:
        coil: Any coil.
        z: Axial coordinate, by default the height of the coil.

    Returns:
        (0 T, B_z)
    """
    z = coil.height if z is None else z
    z = np.asarray(to_si(z, METER), dtype=float)
    radii, currents, heights = loop_arrays(coil)

    shape = (len(radii),) + (1,) * z.ndim
    b_z = Magnetics.loop_field_on_axis(
        radii.reshape(shape),
        currents.reshape(shape),
        z - heights.reshape(shape),
    )
    b_z = np.sum(b_z, axis=0)
    return quantity(np.zeros_like(b_z)[()], TESLA), quantity(b_z, TESLA)


def approximate_field_on_axis(coil):
    """
    Simplified closed-form axial flux density at the centre of a coil.

    Usually, you want evaluate_field or evaluate_field_on_axis. These
    formulas assume idealised geometry (infinitely long solenoid, uniform
    flat spiral, thin Helmholtz coils), so they only agree with the summed
    loops asymptotically and are meant as a cross-check.

    Returns:
        (0 T, B_z)
    """
    zero = quantity(0.0, TESLA)

    if isinstance(coil, CurrentLoop):
        return evaluate_field_on_axis(coil)

    if isinstance(coil, Helmholtz):
        template = coil.coil
        b_z = Magnetics.helmholtz_center_field(
            template.turns,
            to_si(template.current, AMPERE),
            to_si(template.mean_radius, METER),
            to_si(coil.separation, METER),
            sign=coil.current_sign,
        )
        return zero, quantity(b_z, TESLA)

    if isinstance(coil, Helical):
        current = to_si(coil.current, AMPERE)
        length = to_si(coil.length, METER)
        if length > 0:
            return zero, quantity(Magnetics.solenoid_field(coil.turns, current, length), TESLA)

        inner = to_si(coil.inner_radius, METER)
        outer = to_si(coil.outer_radius, METER)
        if inner == 0:
            raise InvalidGeometry("The flat spiral approximation requires a positive inner_radius.")
        return zero, quantity(Magnetics.flat_spiral_field(coil.turns, current, inner, outer), TESLA)

    raise TypeError(f"No approximate field formula for {type(coil).__name__}")


mfd = evaluate_field
mfdz = evaluate_field_on_axis
mfdz_approx = approximate_field_on_axis

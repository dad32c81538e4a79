"""
Conductor path, wire length and inductance of coils.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .config import SolverSettings
from .discretize import axial_positions, radial_positions
from .geometry import CurrentLoop, Helical, Helmholtz
from .physics import Magnetics
from .quantity import HENRY, METER, RADIAN, quantity, to_si

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ConductorPath:
    """
    Ordered cylindrical coordinates (rho, phi, z) tracing a wire.

    The three fields are equally long quantity arrays; iterating yields one
    (rho, phi, z) tuple per point.
    """
    rho: object
    phi: object
    z: object

    def __len__(self):
        return len(self.rho)

    def __iter__(self):
        return zip(self.rho, self.phi, self.z)

    @classmethod
    def from_si(cls, rho, phi, z):
        return cls(quantity(rho, METER), quantity(phi, RADIAN), quantity(z, METER))

    @classmethod
    def concatenate(cls, paths):
        return cls.from_si(
            np.concatenate([to_si(p.rho, METER) for p in paths]),
            np.concatenate([to_si(p.phi, RADIAN) for p in paths]),
            np.concatenate([to_si(p.z, METER) for p in paths]),
        )

    def to_cartesian(self):
        """Returns (x, y, z) length quantity arrays."""
        rho = to_si(self.rho, METER)
        phi = to_si(self.phi, RADIAN)
        return quantity(rho * np.cos(phi), METER), quantity(rho * np.sin(phi), METER), self.z

    def to_frame(self):
        """Tabulates the path in SI units."""
        return pd.DataFrame({
            "rho_m": to_si(self.rho, METER),
            "phi_rad": to_si(self.phi, RADIAN),
            "z_m": to_si(self.z, METER),
        })


def _helical_path(coil, points_per_turn):
    """
    Winds the radial layers one after another, alternating the axial
    direction, so the path is continuous. Each turn is centred on its grid
    position and advances one pitch axially and one radial step (shared by
    the turns of its layer) radially.
    """
    radii = radial_positions(coil)
    heights = axial_positions(coil)
    n_axial = coil.axial_turns
    pitch = to_si(coil.length, METER) / n_axial
    layer_width = (to_si(coil.outer_radius, METER) - to_si(coil.inner_radius, METER)) / coil.radial_turns

    t = np.linspace(0.0, 1.0, points_per_turn, endpoint=False)
    rho, phi, z = [], [], []
    for i, radius in enumerate(radii):
        direction = 1 if i % 2 == 0 else -1
        order = range(n_axial) if direction == 1 else reversed(range(n_axial))
        for step, j in enumerate(order):
            rho.append(radius - layer_width / 2 + (step + t) * layer_width / n_axial)
            phi.append(2 * np.pi * t)
            z.append(heights[j] + direction * (t - 0.5) * pitch)

    # Close the path at the end of the final turn.
    rho.append([radius - layer_width / 2 + (step + 1) * layer_width / n_axial])
    phi.append([2 * np.pi])
    z.append([heights[j] + direction * 0.5 * pitch])
    return ConductorPath.from_si(np.concatenate(rho), np.concatenate(phi), np.concatenate(z))


def conductor_coordinates(coil, points_per_turn=None):
    """
    Returns the coordinates of the conductor in cylindrical coordinates.

    Args:
        coil: Any coil.
        points_per_turn: Samples per turn, SolverSettings default if None.

    Returns:
        ConductorPath
    """
    if points_per_turn is None:
        points_per_turn = SolverSettings.default().points_per_turn
    if points_per_turn < 1:
        raise ValueError("points_per_turn must be at least 1")

    if isinstance(coil, CurrentLoop):
        phi = np.linspace(0.0, 2 * np.pi, points_per_turn + 1)
        return ConductorPath.from_si(
            np.full(phi.shape, to_si(coil.radius, METER)),
            phi,
            np.full(phi.shape, to_si(coil.height, METER)),
        )

    if isinstance(coil, Helical):
        return _helical_path(coil, points_per_turn)

    if isinstance(coil, Helmholtz):
        return ConductorPath.concatenate([conductor_coordinates(c, points_per_turn) for c in coil.copies])

    raise TypeError(f"No conductor path for {type(coil).__name__}")


def conductor_length(coil):
    """
    Returns the total length of the conductor.

    Each turn of a Helical coil contributes sqrt((2 pi r)^2 + p^2), where r
    is the radius of its layer and p = length / axial_turns is the axial
    advance per turn (zero for a pancake).
    """
    if isinstance(coil, CurrentLoop):
        return quantity(2 * np.pi * to_si(coil.radius, METER), METER)

    if isinstance(coil, Helical):
        pitch = to_si(coil.length, METER) / coil.axial_turns
        per_turn = np.sqrt((2 * np.pi * radial_positions(coil)) ** 2 + pitch**2)
        return quantity(float(coil.axial_turns * np.sum(per_turn)), METER)

    if isinstance(coil, Helmholtz):
        return 2 * conductor_length(coil.coil)

    raise TypeError(f"No conductor length for {type(coil).__name__}")


def inductance(coil):
    """
    Returns the approximate inductance of an (anti-)Helmholtz pair.

    This is a composition of two textbook estimates made by this library. It
    is not the closed-form Helmholtz coil inductance quoted in reference
    tables (e.g. de.wikipedia "Helmholtz-Spule", section Induktivität).

    Formula: L = 2 L_self + 2 s M
    Where: L_self is Wheeler's estimate for one coil, M the Maxwell mutual
    inductance at the pair separation and s = +1 (Helmholtz) or -1
    (AntiHelmholtz). M is capped at L_self, i.e. the coupling factor never
    exceeds one; coincident coils (zero separation) are fully coupled.

    Returns:
        Inductance quantity [H]
    """
    if not isinstance(coil, Helmholtz):
        raise TypeError(f"Inductance is only defined for (anti-)Helmholtz pairs, not {type(coil).__name__}")

    template = coil.coil
    radius = to_si(template.mean_radius, METER)
    l_self = Magnetics.self_inductance(
        template.turns,
        radius,
        to_si(template.length, METER),
        to_si(template.outer_radius, METER) - to_si(template.inner_radius, METER),
    )

    separation = to_si(coil.separation, METER)
    if separation == 0:
        mutual = l_self
    else:
        mutual = Magnetics.mutual_inductance(template.turns, radius, separation)
        if mutual > l_self:
            logger.info("Mutual inductance %.3g H exceeds self inductance %.3g H; capping coupling at 1.",
                        mutual, l_self)
            mutual = l_self

    return quantity(float(2 * l_self + 2 * coil.current_sign * mutual), HENRY)

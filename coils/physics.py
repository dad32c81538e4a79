import numpy as np
from scipy.special import ellipe, ellipk, ellipkm1

from .config import MU_0
from .errors import OnConductorSingularity

# Wheeler's multilayer coefficient, 0.8 uH/inch expressed in H/m.
WHEELER_COEFFICIENT = 0.8e-6 / 0.0254


class Magnetics:
    """
    Library of magnetic formulas.
    Decouples 'Physics' from 'Units': every method takes and returns raw SI
    magnitudes (floats or numpy arrays) and broadcasts over its arguments.
    """

    @staticmethod
    def loop_field(radius, current, rho, z):
        """
        Applies the analytical Biot-Savart solution for a thin circular loop.

        Formula (Simpson et al., 2001), with C = mu0 I / pi:
            alpha^2 = (a - rho)^2 + z^2
            beta^2  = (a + rho)^2 + z^2
            k^2     = 4 a rho / beta^2 = 1 - alpha^2 / beta^2
            B_rho = C z / (2 alpha^2 beta rho) [(a^2 + rho^2 + z^2) E(k^2) - alpha^2 K(k^2)]
            B_z   = C / (2 alpha^2 beta) [(a^2 - rho^2 - z^2) E(k^2) + alpha^2 K(k^2)]

        `z` is measured from the plane of the loop. K is evaluated from the
        complementary parameter alpha^2 / beta^2 (scipy's ellipkm1), which
        stays accurate as k^2 -> 1 next to the conductor. Points on the axis
        (rho = 0) take the on-axis formula, since the expression above has a
        removable singularity there.

        Returns:
            (B_rho, B_z) [Tesla]
        """
        a, current, rho, z = np.broadcast_arrays(
            np.asarray(radius, dtype=float),
            np.asarray(current, dtype=float),
            np.asarray(rho, dtype=float),
            np.asarray(z, dtype=float),
        )

        # alpha^2 is the squared distance to the conductor in the (rho, z) plane.
        alpha2 = (a - rho) ** 2 + z**2
        if np.any(alpha2 == 0):
            raise OnConductorSingularity("Query point lies on the current loop conductor.")

        on_axis = rho == 0

        beta2 = (a + rho) ** 2 + z**2
        beta = np.sqrt(beta2)
        m1 = alpha2 / beta2
        k_m = ellipkm1(m1)
        e_m = ellipe(1 - m1)
        c = MU_0 * current / np.pi

        # On-axis entries are overwritten below; keep their divisor finite.
        rho_safe = np.where(on_axis, 1.0, rho)
        b_rho = c * z / (2 * alpha2 * beta * rho_safe) * ((a**2 + rho**2 + z**2) * e_m - alpha2 * k_m)
        b_z = c / (2 * alpha2 * beta) * (((a - rho) * (a + rho) - z**2) * e_m + alpha2 * k_m)

        b_rho = np.where(on_axis, 0.0, b_rho)
        b_z = np.where(on_axis, Magnetics.loop_field_on_axis(a, current, z), b_z)
        return b_rho[()], b_z[()]

    @staticmethod
    def loop_field_on_axis(radius, current, z):
        """
        Axial flux density on the symmetry axis of a thin circular loop.

        Formula: B_z = mu0 I a^2 / (2 (a^2 + z^2)^(3/2))
        """
        a = np.asarray(radius, dtype=float)
        z = np.asarray(z, dtype=float)
        b_z = MU_0 * np.asarray(current, dtype=float) * a**2 / (2 * (a**2 + z**2) ** 1.5)
        return b_z[()]

    @staticmethod
    def solenoid_field(turns, current, length):
        """
        Flux density inside an infinitely long solenoid.

        Formula: B = mu0 N I / L
        """
        return MU_0 * turns * current / length

    @staticmethod
    def flat_spiral_field(turns, current, inner_radius, outer_radius):
        """
        Flux density at the centre of a flat (zero-length) spiral winding,
        assuming the turns are spread uniformly between the two radii.

        Formula: B = mu0 N I ln(Ro / Ri) / (2 (Ro - Ri))
        which tends to mu0 N I / (2 R) as Ro -> Ri.
        """
        if outer_radius == inner_radius:
            return MU_0 * turns * current / (2 * outer_radius)
        return MU_0 * turns * current * np.log(outer_radius / inner_radius) / (2 * (outer_radius - inner_radius))

    @staticmethod
    def helmholtz_center_field(turns, current, radius, separation, sign=1):
        """
        Axial flux density midway between two N-turn thin coils.

        The second coil carries `sign * current`. For sign = +1 and
        separation = radius this is the textbook (4/5)^(3/2) mu0 N I / R.
        """
        b_first = Magnetics.loop_field_on_axis(radius, turns * current, separation / 2)
        return b_first + sign * b_first

    @staticmethod
    def self_inductance(turns, mean_radius, length, depth):
        """
        Wheeler's approximation for a multilayer air-core coil.

        Formula: L = 0.8 a^2 N^2 / (6a + 9b + 10c)  [uH, inches]
        Where: a = mean radius, b = winding length, c = winding depth.

        Returns:
            Inductance [H]
        """
        return WHEELER_COEFFICIENT * mean_radius**2 * turns**2 / (6 * mean_radius + 9 * length + 10 * depth)

    @staticmethod
    def mutual_inductance(turns, radius, separation):
        """
        Maxwell's formula for two coaxial N-turn loops of equal radius.

        Formula: M = mu0 N^2 R [(2/k - k) K(k^2) - (2/k) E(k^2)]
        Where: k^2 = 4 R^2 / (4 R^2 + d^2)

        Diverges as the separation goes to zero.
        """
        m = 4 * radius**2 / (4 * radius**2 + separation**2)
        k = np.sqrt(m)
        return MU_0 * turns**2 * radius * ((2 / k - k) * ellipk(m) - 2 / k * ellipe(m))

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np
import pandas as pd

from .config import SolverSettings
from .conductor import conductor_length, inductance
from .discretize import discretize
from .errors import InvalidGeometry
from .field import approximate_field_on_axis, evaluate_field, evaluate_field_on_axis
from .geometry import Helmholtz
from .quantity import HENRY, METER, TESLA, quantity, to_si

logger = logging.getLogger(__name__)


class FieldAnalyzer:
    """
    Main controller class.
    Instantiate this once with solver settings, then evaluate any number of coils.
    """

    def __init__(self, config: Optional[SolverSettings] = None):
        self.config = config if config is not None else SolverSettings.default()

    def _evaluate_points(self, coil, rho, z):
        """
        Evaluates flattened query points in chunks on a thread pool.

        Every point is independent, so chunks can run in any order; results
        are reassembled in input order.
        """
        size = self.config.chunk_size
        bounds = [(start, min(start + size, len(rho))) for start in range(0, len(rho), size)]

        def run(bound):
            start, stop = bound
            b_rho, b_z = evaluate_field(coil, quantity(rho[start:stop], METER), quantity(z[start:stop], METER))
            return to_si(b_rho, TESLA), to_si(b_z, TESLA)

        if len(bounds) <= 1:
            results = [run(bound) for bound in bounds]
        else:
            logger.debug("Evaluating %d points in %d chunks", len(rho), len(bounds))
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                results = list(executor.map(run, bounds))

        if not results:
            return np.empty(0), np.empty(0)
        return (np.concatenate([np.atleast_1d(r[0]) for r in results]),
                np.concatenate([np.atleast_1d(r[1]) for r in results]))

    def field_map(self, coil, rho, z):
        """
        Evaluates the flux density on the (rho, z) grid spanned by two 1D
        length arrays.

        Returns:
            DataFrame with columns rho_m, z_m, b_rho_t, b_z_t, b_abs_t
            (one row per grid point, rho major).
        """
        rho_grid, z_grid = np.meshgrid(
            np.atleast_1d(to_si(rho, METER)),
            np.atleast_1d(to_si(z, METER)),
            indexing="ij"
        )
        rho_flat = rho_grid.ravel()
        z_flat = z_grid.ravel()

        b_rho, b_z = self._evaluate_points(coil, rho_flat, z_flat)

        return pd.DataFrame({
            "rho_m": rho_flat,
            "z_m": z_flat,
            "b_rho_t": b_rho,
            "b_z_t": b_z,
            "b_abs_t": np.hypot(b_rho, b_z),
        })

    def axial_profile(self, coil, z):
        """
        Tabulates the summed on-axis flux density along z.
        """
        z_values = np.atleast_1d(to_si(z, METER))
        _, b_z = evaluate_field_on_axis(coil, quantity(z_values, METER))
        return pd.DataFrame({
            "z_m": z_values,
            "b_z_t": np.atleast_1d(to_si(b_z, TESLA)),
        })

    def homogeneity(self, coil, radius, samples=21):
        """
        Relative deviation of |B| from its value at the coil centre.

        Samples the axis over [height - radius, height + radius] and the
        centre plane over rho in [0, radius].

        Returns:
            max(| |B| - |B0| |) / |B0|
        """
        r = to_si(radius, METER)
        if r < 0:
            raise InvalidGeometry("radius must be non-negative")
        center = to_si(coil.height, METER)
        offsets = np.linspace(-r, r, samples)
        radial = np.linspace(0.0, r, samples)

        rho = np.concatenate((np.zeros(samples), radial))
        z = np.concatenate((center + offsets, np.full(samples, center)))
        b_rho, b_z = self._evaluate_points(coil, rho, z)
        b_abs = np.hypot(b_rho, b_z)

        _, b_center = evaluate_field_on_axis(coil)
        b0 = abs(to_si(b_center, TESLA))
        if b0 == 0:
            raise ValueError("Centre field is zero; homogeneity is undefined.")
        return float(np.max(np.abs(b_abs - b0)) / b0)

    def summary(self, coil):
        """
        Collects the headline figures of a coil.
        """
        _, b_center = evaluate_field_on_axis(coil)
        try:
            _, b_approx = approximate_field_on_axis(coil)
            b_approx = float(to_si(b_approx, TESLA))
        except InvalidGeometry as e:
            logger.info("No approximate centre field for %s: %s", type(coil).__name__, e)
            b_approx = np.nan

        result = {
            "kind": type(coil).__name__,
            "turns": len(discretize(coil)),
            "conductor_length_m": float(to_si(conductor_length(coil), METER)),
            "b_center_t": float(to_si(b_center, TESLA)),
            "b_center_approx_t": b_approx,
            "inductance_h": np.nan,
        }
        if isinstance(coil, Helmholtz):
            result["inductance_h"] = float(to_si(inductance(coil), HENRY))
        return result

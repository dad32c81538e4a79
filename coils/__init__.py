"""
Coils - magnetic flux density, conductor geometry and inductance of
current-carrying coils (loops, solenoids, pancakes and Helmholtz pairs).

Quantities are pint quantities; results come back in SI units.
"""

from .analyzer import FieldAnalyzer
from .conductor import ConductorPath, conductor_coordinates, conductor_length, inductance
from .config import MU_0, SolverSettings
from .discretize import current_loops, discretize
from .errors import CoilError, DimensionMismatch, InvalidGeometry, OnConductorSingularity
from .field import (
    approximate_field_on_axis,
    evaluate_field,
    evaluate_field_on_axis,
    mfd,
    mfdz,
    mfdz_approx,
)
from .geometry import AntiHelmholtz, Coil, CurrentLoop, Helical, Helmholtz, Pancake, Solenoid

__all__ = [
    'FieldAnalyzer',
    'ConductorPath',
    'conductor_coordinates',
    'conductor_length',
    'inductance',
    'MU_0',
    'SolverSettings',
    'current_loops',
    'discretize',
    'CoilError',
    'DimensionMismatch',
    'InvalidGeometry',
    'OnConductorSingularity',
    'approximate_field_on_axis',
    'evaluate_field',
    'evaluate_field_on_axis',
    'mfd',
    'mfdz',
    'mfdz_approx',
    'AntiHelmholtz',
    'Coil',
    'CurrentLoop',
    'Helical',
    'Helmholtz',
    'Pancake',
    'Solenoid',
]

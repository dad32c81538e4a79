import numpy as np
import pytest
from pint import Quantity as Q

from coils.conductor import conductor_coordinates, conductor_length, inductance
from coils.geometry import AntiHelmholtz, CurrentLoop, Helical, Helmholtz, Pancake, Solenoid


def _polyline_length(path):
    x, y, z = path.to_cartesian()
    points = np.column_stack([x.to("m").magnitude, y.to("m").magnitude, z.to("m").magnitude])
    return np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1))


def test_current_loop_length_is_circumference():
    loop = CurrentLoop(current=Q(1.0, "A"), radius=Q(0.1, "m"))

    assert np.isclose(conductor_length(loop).to("m").magnitude, 2 * np.pi * 0.1)


def test_current_loop_path_is_closed_circle():
    loop = CurrentLoop(current=Q(1.0, "A"), radius=Q(0.1, "m"), height=Q(0.2, "m"))

    path = conductor_coordinates(loop, points_per_turn=36)

    assert len(path) == 37
    assert np.allclose(path.rho.to("m").magnitude, 0.1)
    assert np.allclose(path.z.to("m").magnitude, 0.2)
    assert path.phi[0].magnitude == 0.0
    assert np.isclose(path.phi[-1].to("rad").magnitude, 2 * np.pi)
    rho, phi, z = next(iter(path))
    assert np.isclose(rho.to("m").magnitude, 0.1)


def test_pancake_length_is_sum_of_circumferences():
    coil = Pancake(current=Q(1.0, "A"), inner_radius=Q(0.02, "m"), outer_radius=Q(0.06, "m"), turns=8)

    assert np.isclose(conductor_length(coil).to("m").magnitude, 2 * np.pi * 8 * 0.04)


def test_solenoid_length_is_unrolled_helix():
    coil = Solenoid(current=Q(1.0, "A"), radius=Q(0.01, "m"), length=Q(0.5, "m"), turns=30)

    expected = np.hypot(30 * 2 * np.pi * 0.01, 0.5)
    assert np.isclose(conductor_length(coil).to("m").magnitude, expected)


@pytest.mark.parametrize("field", ["radial_turns", "axial_turns"])
def test_conductor_length_increases_with_turns(field):
    lengths = []
    for turns in range(1, 7):
        coil = Helical(
            current=Q(1.0, "A"),
            inner_radius=Q(0.03, "m"),
            outer_radius=Q(0.05, "m"),
            length=Q(0.04, "m"),
            **{field: turns}
        )
        lengths.append(conductor_length(coil).to("m").magnitude)

    assert np.all(np.diff(lengths) > 0)


def test_helical_path_is_continuous_and_bounded():
    coil = Helical(
        current=Q(1.0, "A"),
        inner_radius=Q(0.03, "m"),
        outer_radius=Q(0.05, "m"),
        length=Q(0.06, "m"),
        height=Q(0.1, "m"),
        radial_turns=2,
        axial_turns=3,
    )

    path = conductor_coordinates(coil, points_per_turn=50)
    rho = path.rho.to("m").magnitude
    z = path.z.to("m").magnitude

    assert len(path) == 6 * 50 + 1
    assert np.all((rho >= 0.03 - 1e-12) & (rho <= 0.05 + 1e-12))
    assert np.all((z >= 0.07 - 1e-12) & (z <= 0.13 + 1e-12))
    # Starts at the bottom of the inner layer, second layer winds back down.
    assert np.isclose(rho[0], 0.03) and np.isclose(z[0], 0.07)
    assert np.isclose(rho[-1], 0.05) and np.isclose(z[-1], 0.07)
    x, y, _ = path.to_cartesian()
    steps = np.hypot(np.diff(x.to("m").magnitude), np.diff(y.to("m").magnitude))
    assert np.max(steps) < 2 * np.pi * 0.05 / 50 * 1.1


def test_solenoid_path_length_matches_conductor_length():
    coil = Solenoid(current=Q(1.0, "A"), radius=Q(0.02, "m"), length=Q(0.1, "m"), turns=10)

    path = conductor_coordinates(coil, points_per_turn=200)

    assert np.isclose(_polyline_length(path), conductor_length(coil).to("m").magnitude, rtol=1e-3)


def test_pair_path_and_length_double_the_template():
    template = Solenoid(current=Q(1.0, "A"), radius=Q(0.05, "m"), length=Q(0.01, "m"), turns=4)
    pair = AntiHelmholtz(coil=template)

    path = conductor_coordinates(pair, points_per_turn=20)
    single = conductor_coordinates(template, points_per_turn=20)

    assert len(path) == 2 * len(single)
    assert np.isclose(conductor_length(pair).to("m").magnitude, 2 * conductor_length(template).to("m").magnitude)
    frame = path.to_frame()
    assert list(frame.columns) == ["rho_m", "phi_rad", "z_m"]
    assert len(frame) == len(path)


def test_helmholtz_inductance_is_positive_inductance():
    template = Helical(
        current=Q(1.0, "A"),
        inner_radius=Q(0.09, "m"),
        outer_radius=Q(0.11, "m"),
        length=Q(0.02, "m"),
        radial_turns=5,
        axial_turns=5,
    )

    value = inductance(Helmholtz(coil=template))

    assert value.check("[inductance]")
    assert value.to("H").magnitude > 0


def test_anti_helmholtz_inductance_is_lower():
    template = Solenoid(current=Q(1.0, "A"), radius=Q(0.1, "m"), length=Q(0.01, "m"), turns=20)

    l_parallel = inductance(Helmholtz(coil=template, separation=Q(0.1, "m")))
    l_anti = inductance(AntiHelmholtz(coil=template, separation=Q(0.1, "m")))

    assert 0 < l_anti.to("H").magnitude < l_parallel.to("H").magnitude


def test_inductance_scales_with_turns_squared():
    def pair(turns):
        return Helmholtz(coil=Solenoid(current=Q(1.0, "A"), radius=Q(0.1, "m"), length=Q(0.01, "m"), turns=turns))

    ratio = inductance(pair(20)).to("H").magnitude / inductance(pair(10)).to("H").magnitude

    assert np.isclose(ratio, 4.0)


def test_coincident_coils_are_fully_coupled():
    template = Solenoid(current=Q(1.0, "A"), radius=Q(0.1, "m"), length=Q(0.01, "m"), turns=20)

    l_parallel = inductance(Helmholtz(coil=template, separation=Q(0.0, "m")))
    l_anti = inductance(AntiHelmholtz(coil=template, separation=Q(0.0, "m")))

    assert l_anti.to("H").magnitude == 0.0
    assert l_parallel.to("H").magnitude > 0.0


def test_inductance_is_not_defined_for_single_coils():
    with pytest.raises(TypeError):
        inductance(CurrentLoop(current=Q(1.0, "A"), radius=Q(0.1, "m")))
    with pytest.raises(TypeError):
        inductance(Solenoid(current=Q(1.0, "A"), radius=Q(0.1, "m"), length=Q(0.01, "m"), turns=20))

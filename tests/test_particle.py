# test_particle.py

import numpy as np
import pytest

from particle import Particle, hsl_to_rgb


def test_left_wall_reflects_with_restitution_then_friction():
    p = Particle((19.0, 100.0), (-100.0, 0.0), 20.0, 0.5)
    p.update(0.01, 800.0, 600.0)

    assert p.position[0] == 20.0
    # 100 * 0.8 after the bounce, then one 0.99 friction multiply
    assert p.velocity[0] == pytest.approx(79.2)
    assert p.position[1] == 100.0
    assert p.velocity[1] == 0.0


def test_right_and_bottom_walls_clamp_inside_arena():
    p = Particle((795.0, 595.0), (100.0, 50.0), 10.0, 0.1)
    p.update(0.1, 800.0, 600.0)

    assert p.position[0] == 790.0
    assert p.position[1] == 590.0
    assert p.velocity[0] == pytest.approx(-80.0 * 0.99)
    assert p.velocity[1] == pytest.approx(-40.0 * 0.99)


def test_free_flight_integrates_and_applies_friction_once():
    p = Particle((100.0, 100.0), (10.0, -20.0), 5.0, 0.2)
    p.update(0.5, 800.0, 600.0)

    np.testing.assert_allclose(p.position, [105.0, 90.0])
    np.testing.assert_allclose(p.velocity, [9.9, -19.8])


def test_inactive_particle_is_not_updated():
    p = Particle((100.0, 100.0), (10.0, 0.0), 5.0, 0.2, active=False)
    p.update(1.0, 800.0, 600.0)

    np.testing.assert_array_equal(p.position, [100.0, 100.0])
    np.testing.assert_array_equal(p.velocity, [10.0, 0.0])


@pytest.mark.parametrize("hue, bucket", [(0.0, 0), (0.05, 0), (0.1, 1), (0.55, 5), (0.999999, 9)])
def test_bucket_from_hue(hue, bucket):
    assert Particle((0, 0), (0, 0), 1.0, hue).bucket == bucket


@pytest.mark.parametrize("hue", [-0.1, 1.0, 1.5])
def test_hue_outside_unit_interval_is_rejected(hue):
    with pytest.raises(ValueError):
        Particle((0, 0), (0, 0), 1.0, hue)


def test_non_positive_radius_is_rejected():
    with pytest.raises(ValueError):
        Particle((0, 0), (0, 0), 0.0, 0.5)


def test_hsl_primaries():
    assert hsl_to_rgb(0.0, 1.0, 0.5) == (255, 0, 0)
    assert hsl_to_rgb(1.0 / 3.0, 1.0, 0.5) == (0, 255, 0)
    assert hsl_to_rgb(2.0 / 3.0, 1.0, 0.5) == (0, 0, 255)


def test_color_uses_hue():
    red = Particle((0, 0), (0, 0), 1.0, 0.0).color
    assert red[0] > red[1] and red[0] > red[2]

#!/usr/bin/env python3
"""
Tests for ripple and gravity well effects and the vector field primitives.

Covers:
1. Lifetimes (ripple growth to max radius, well countdown)
2. Force direction and falloff
3. Degenerate geometry (zero radius, glyph exactly at the origin)
4. Fade alpha for rendering

Usage:
    pytest glyph_field/test_effects.py
    python glyph_field/test_effects.py
"""

import numpy as np

from glyph_field.effects import GravityWell, Ripple
from glyph_field.vector_field import distances, linear_falloff, offsets, unit_vectors


def test_linear_falloff():
    d = np.array([0.0, 25.0, 50.0, 100.0, 150.0])
    assert np.allclose(linear_falloff(d, 100.0), [1.0, 0.75, 0.5, 0.0, 0.0])


def test_linear_falloff_zero_radius():
    d = np.array([0.0, 1.0])
    weight = linear_falloff(d, 0.0)
    assert np.all(weight == 0.0)
    assert np.all(np.isfinite(weight))


def test_unit_vectors_zero_length():
    disp = offsets(np.array([[3.0, 4.0], [1.0, 1.0]]), (0.0, 0.0))
    # Second row starts at (1, 1): point it at itself
    disp[1] = 0.0
    unit = unit_vectors(disp, distances(disp))
    assert np.allclose(unit[0], [-0.6, -0.8])
    assert np.all(unit[1] == 0.0)


def test_ripple_lifetime():
    """Ripple (max radius 100, speed 2) survives 49 advances and expires on the 50th."""
    ripple = Ripple(0.0, 0.0, max_radius=100.0, speed=2.0)
    alive = [ripple.advance() for _ in range(50)]

    assert all(alive[:49])
    assert alive[49] is False
    assert ripple.radius == 100.0


def test_ripple_fresh_has_no_force():
    ripple = Ripple(10.0, 10.0)
    positions = np.array([[10.0, 10.0], [11.0, 10.0], [50.0, 50.0]])
    assert np.all(ripple.force_on(positions) == 0.0)


def test_ripple_pushes_outward():
    ripple = Ripple(0.0, 0.0, impulse=0.05)
    ripple.radius = 10.0

    force = ripple.force_on(np.array([[5.0, 0.0], [0.0, -2.5]]))

    # (1 - 5/10) * 0.05 away from the origin along +x
    assert np.allclose(force[0], [0.025, 0.0])
    # (1 - 2.5/10) * 0.05 away from the origin along -y
    assert np.allclose(force[1], [0.0, -0.0375])


def test_ripple_edge_and_outside():
    ripple = Ripple(0.0, 0.0)
    ripple.radius = 10.0
    force = ripple.force_on(np.array([[10.0, 0.0], [20.0, 0.0]]))
    assert np.all(force == 0.0)


def test_ripple_at_origin_is_finite():
    ripple = Ripple(5.0, 5.0)
    ripple.radius = 4.0
    force = ripple.force_on(np.array([[5.0, 5.0]]))
    assert np.all(np.isfinite(force))
    assert np.all(force == 0.0)


def test_ripple_fade_alpha():
    ripple = Ripple(0.0, 0.0, max_radius=100.0)
    assert ripple.fade_alpha == 1.0
    ripple.radius = 25.0
    assert np.isclose(ripple.fade_alpha, 0.75)
    ripple.radius = 120.0
    assert ripple.fade_alpha == 0.0


def test_well_lifetime():
    """Gravity well (lifespan 100) survives 99 advances and expires on the 100th."""
    well = GravityWell(0.0, 0.0, lifespan=100)
    alive = [well.advance() for _ in range(100)]

    assert all(alive[:99])
    assert alive[99] is False
    assert well.remaining_life == 0


def test_well_pulls_toward_center():
    well = GravityWell(0.0, 0.0, strength=0.1, radius=100.0)
    force = well.force_on(np.array([[50.0, 0.0], [0.0, 0.0], [150.0, 0.0]]))

    # Displacement (-50, 0) scaled by (100 - 50) / 100 * 0.1
    assert np.allclose(force[0], [-2.5, 0.0])
    # No displacement at the center, nothing outside the radius
    assert np.all(force[1] == 0.0)
    assert np.all(force[2] == 0.0)


def test_well_zero_radius():
    well = GravityWell(0.0, 0.0, radius=0.0)
    force = well.force_on(np.array([[0.0, 0.0], [1.0, 1.0]]))
    assert np.all(np.isfinite(force))
    assert np.all(force == 0.0)


def test_well_fade_alpha():
    well = GravityWell(0.0, 0.0, lifespan=100)
    assert np.isclose(well.fade_alpha, 0.2)
    for _ in range(50):
        well.advance()
    assert np.isclose(well.fade_alpha, 0.1)


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"{name}: ✓ PASSED")

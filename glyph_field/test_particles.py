#!/usr/bin/env python3
"""
Tests for glyph particle force composition, integration and mirroring.

Covers:
1. Fixed point at rest and convergence back to rest
2. Pointer repulsion (present, absent, out of range)
3. Force superposition
4. Mirror enforcement and update order

Usage:
    pytest glyph_field/test_particles.py
    python glyph_field/test_particles.py
"""

import numpy as np

from glyph_field.effects import GravityWell, Ripple
from glyph_field.particles import Particle, ParticleField


def make_single(rest=(10.0, 20.0)):
    return ParticleField(np.array([rest]), ["A"])


def step_sequentially(field, pointer, ripples, wells):
    """Reference update: visit particles one at a time in creation order."""
    for i in range(field.particle_count):
        idx = np.array([i])
        field.integrate(field.compose_forces(pointer, ripples, wells, idx), idx)
        field.enforce_mirror(i)


def test_fixed_point_at_rest():
    field = make_single()
    field.update(None, [], [])

    assert np.array_equal(field.position, field.rest)
    assert np.array_equal(field.velocity, np.zeros((1, 2)))


def test_converges_to_rest():
    field = make_single()
    field.position[0] += [30.0, -40.0]
    field.velocity[0] = [5.0, 5.0]

    for _ in range(600):
        field.update(None, [], [])

    assert np.allclose(field.position, field.rest, atol=1e-6)
    assert np.allclose(field.velocity, 0.0, atol=1e-6)


def test_spring_applies_without_pointer():
    field = make_single()
    field.position[0] = [14.0, 17.0]

    force = field.compose_forces(None, [], [])

    assert np.allclose(force, [[-4.0 * 0.05, 3.0 * 0.05]])


def test_pointer_repulsion():
    field = make_single(rest=(0.0, 0.0))

    force = field.compose_forces((30.0, 40.0), [], [])

    # Distance 50: -(30, 40) * (150 - 50) / 150 * 0.02
    scale = (100.0 / 150.0) * 0.02
    assert np.allclose(force, [[-30.0 * scale, -40.0 * scale]])


def test_pointer_out_of_range():
    field = make_single(rest=(0.0, 0.0))
    assert np.all(field.compose_forces((150.0, 0.0), [], []) == 0.0)
    assert np.all(field.compose_forces((300.0, 10.0), [], []) == 0.0)


def test_force_superposition():
    rest = np.array([[-180.0, 5.0], [190.0, -3.0], [0.0, 0.0]])
    field = ParticleField(rest, ["A", "B", "C"])

    left_well = GravityWell(-200.0, 0.0)
    right_well = GravityWell(200.0, 0.0)
    ripple = Ripple(0.0, 0.0)
    ripple.radius = 20.0
    field.position[2] = [4.0, 3.0]
    rest_offset = field.compose_forces(None, [], [])

    combined = field.compose_forces(None, [ripple], [left_well, right_well])
    separate = (
        field.compose_forces(None, [ripple], [])
        + field.compose_forces(None, [], [left_well])
        + field.compose_forces(None, [], [right_well])
        - 2.0 * rest_offset
    )

    assert np.allclose(combined, separate)


def test_integrate_then_damp():
    field = make_single()
    field.integrate(np.array([[1.0, 2.0]]))

    assert np.allclose(field.position, [[11.0, 22.0]])
    assert np.allclose(field.velocity, [[0.9, 1.8]])


def test_enforce_mirror():
    rest = np.array([[40.0, 0.0], [60.0, 0.0]])
    field = ParticleField(rest, ["L", "R"], mirror_index=np.array([1, -1]), center_x=50.0)
    field.position[0] = [35.0, 7.0]
    field.velocity[0] = [1.5, -2.0]

    field.enforce_mirror(0)

    assert np.allclose(field.position[1], [65.0, 7.0])
    assert np.allclose(field.velocity[1], [-1.5, -2.0])


def test_enforce_mirror_right_side_is_slave():
    rest = np.array([[40.0, 0.0], [60.0, 0.0]])
    field = ParticleField(rest, ["L", "R"], mirror_index=np.array([1, 0]), center_x=50.0)
    field.position[1] = [80.0, 9.0]

    field.enforce_mirror(1)

    assert np.array_equal(field.position[0], [40.0, 0.0])


def test_enforce_mirror_missing_partner():
    rest = np.array([[40.0, 0.0], [61.0, 0.0]])
    field = ParticleField(rest, ["L", "R"], center_x=50.0)
    field.position[0] = [35.0, 7.0]

    field.enforce_mirror(0)

    assert np.array_equal(field.position[1], [61.0, 0.0])


def test_update_matches_sequential_visit_order():
    # Pair (1 -> 0) has the slave first, pair (2 -> 3) has the slave last
    rest = np.array([[60.0, 0.0], [40.0, 0.0], [30.0, 5.0], [70.0, 5.0], [52.0, -4.0]])
    pairs = np.array([-1, 0, 3, -1, -1])
    glyphs = ["A", "B", "C", "D", "E"]

    vectorized = ParticleField(rest, glyphs, mirror_index=pairs, center_x=50.0)
    reference = ParticleField(rest, glyphs, mirror_index=pairs, center_x=50.0)

    rng = np.random.default_rng(7)
    start = rest + rng.normal(scale=5.0, size=rest.shape)
    for field in (vectorized, reference):
        field.position[:] = start

    ripple = Ripple(45.0, 2.0)
    ripple.radius = 30.0
    well = GravityWell(58.0, 1.0, radius=40.0)

    for step in range(20):
        pointer = (48.0 + step, 3.0) if step % 3 else None
        vectorized.update(pointer, [ripple], [well])
        step_sequentially(reference, pointer, [ripple], [well])

    assert np.allclose(vectorized.position, reference.position)
    assert np.allclose(vectorized.velocity, reference.velocity)


def test_slave_visited_first_stays_mirrored():
    rest = np.array([[60.0, 0.0], [40.0, 0.0]])
    field = ParticleField(rest, ["R", "L"], mirror_index=np.array([-1, 0]), center_x=50.0)
    well = GravityWell(30.0, 10.0, radius=80.0)

    for step in range(50):
        field.update((20.0 + step, -5.0), [], [well])

        assert np.isclose(field.position[0, 0], 100.0 - field.position[1, 0])
        assert np.isclose(field.position[0, 1], field.position[1, 1])
        assert np.isclose(field.velocity[0, 0], -field.velocity[1, 0])
        assert np.isclose(field.velocity[0, 1], field.velocity[1, 1])


def test_partner_after_left_glyph_trails_by_one_integration():
    # Layout order: left glyph first, so its partner is mirrored and then
    # integrated once more in the same update
    rest = np.array([[40.0, 0.0], [60.0, 0.0]])
    field = ParticleField(rest, ["L", "R"], mirror_index=np.array([1, -1]), center_x=50.0)
    field.position[0] = [32.0, 6.0]

    field.update(None, [], [])

    expected = ParticleField(rest, ["L", "R"], mirror_index=np.array([1, -1]), center_x=50.0)
    expected.position[0] = field.position[0]
    expected.velocity[0] = field.velocity[0]
    expected.enforce_mirror(0)
    partner = np.array([1])
    expected.integrate(expected.compose_forces(None, [], [], partner), partner)

    assert np.allclose(field.position[1], expected.position[1])
    assert np.allclose(field.velocity[1], expected.velocity[1])
    assert not np.isclose(field.position[1, 0], 100.0 - field.position[0, 0])


def test_duplicate_partner_rejected():
    rest = np.array([[30.0, 0.0], [40.0, 0.0], [60.0, 0.0]])
    try:
        ParticleField(rest, ["A", "B", "C"], mirror_index=np.array([2, 2, -1]), center_x=50.0)
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError for a shared partner")


def test_particle_snapshot():
    field = make_single()
    field.velocity[0] = [1.0, -1.0]

    particles = list(field)

    assert len(field) == 1
    assert particles[0] == Particle(glyph="A", rest=(10.0, 20.0),
                                    position=(10.0, 20.0), velocity=(1.0, -1.0))


def test_rest_is_read_only():
    field = make_single()
    try:
        field.rest[0, 0] = 0.0
    except ValueError:
        pass
    else:
        raise AssertionError("rest positions must not be writable")


def test_glyph_count_mismatch():
    try:
        ParticleField(np.zeros((2, 2)), ["A"])
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")


if __name__ == "__main__":
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"{name}: ✓ PASSED")

import numpy as np
import pytest

from constants import MAX_INITIAL_SPEED, PARTICLE_RADIUS_MAX, PARTICLE_RADIUS_MIN
from particle import ParticleSystem


def test_generates_capacity_particles_inside_bounds():
    particles = ParticleSystem(50, 800, 600, seed=1)

    assert len(particles) == 50
    assert particles.positions.shape == (50, 2)
    assert np.all(particles.positions[:, 0] >= 0) and np.all(particles.positions[:, 0] <= 800)
    assert np.all(particles.positions[:, 1] >= 0) and np.all(particles.positions[:, 1] <= 600)


def test_velocities_and_radii_ranges():
    particles = ParticleSystem(500, 800, 600, seed=2)

    assert np.all(np.abs(particles.velocities) <= MAX_INITIAL_SPEED)
    assert np.all(particles.radii >= PARTICLE_RADIUS_MIN)
    assert np.all(particles.radii < PARTICLE_RADIUS_MAX)


def test_regenerate_replaces_the_whole_set_for_new_bounds():
    particles = ParticleSystem(50, 800, 600, seed=3)
    before = particles.positions.copy()

    particles.regenerate(200, 100)

    assert len(particles) == 50
    assert (particles.width, particles.height) == (200.0, 100.0)
    assert np.all(particles.positions[:, 0] <= 200)
    assert np.all(particles.positions[:, 1] <= 100)
    assert not np.array_equal(before, particles.positions)


def test_same_seed_gives_same_layout():
    a = ParticleSystem(20, 640, 480, seed=42)
    b = ParticleSystem(20, 640, 480, seed=42)

    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.velocities, b.velocities)
    np.testing.assert_array_equal(a.radii, b.radii)


def test_zero_sized_surface_puts_everything_at_origin():
    particles = ParticleSystem(10, 0, 0, seed=0)

    assert len(particles) == 10
    assert np.all(particles.positions == 0)


def test_negative_capacity_is_rejected():
    with pytest.raises(ValueError):
        ParticleSystem(-1, 100, 100)


def test_set_state_coerces_to_float_arrays():
    particles = ParticleSystem(0, 300, 300)
    particles.set_state([(0, 0), (50, 0), (200, 200)])

    assert particles.positions.dtype == np.float64
    assert len(particles) == 3
    assert particles.capacity == 3
    assert np.all(particles.velocities == 0)
    assert np.all(particles.radii == PARTICLE_RADIUS_MIN)

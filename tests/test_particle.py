import numpy as np
import pytest

from geometry import PlacementError, is_inside_heart
from particle import ParticleSystem


def test_population_matches_requested_count(make_params):
    particles = ParticleSystem(make_params(particle_count=1000), 800, 600, 200)

    assert len(particles) == 1000
    assert particles.positions.shape == (1000, 2)
    assert particles.base_positions.shape == (1000, 2)
    assert particles.sizes.shape == particles.densities.shape == particles.phases.shape == (1000,)


def test_particles_sit_inside_the_unflipped_heart(make_params):
    particles = ParticleSystem(make_params(particle_count=1000), 800, 600, 200)

    sampled_x = particles.base_positions[:, 0]
    sampled_y = 600 - particles.base_positions[:, 1]
    assert np.all(is_inside_heart(sampled_x, sampled_y, 200, 800, 600))


def test_attribute_ranges(make_params):
    particles = ParticleSystem(make_params(particle_count=500), 800, 600, 200)

    assert np.all((particles.sizes >= 1) & (particles.sizes < 3))
    assert np.all((particles.densities >= 5) & (particles.densities < 15))
    assert np.all((particles.phases >= 0) & (particles.phases < 2 * np.pi))


def test_particles_start_at_rest(make_params):
    particles = ParticleSystem(make_params(particle_count=100), 800, 600, 200)

    assert np.array_equal(particles.positions, particles.base_positions)
    assert not np.shares_memory(particles.positions, particles.base_positions)
    assert particles.mean_displacement() == 0.0


def test_base_positions_are_read_only(make_params):
    particles = ParticleSystem(make_params(particle_count=10), 800, 600, 200)

    with pytest.raises(ValueError):
        particles.base_positions[0, 0] = 0.0


def test_same_seed_gives_same_heart(make_params):
    a = ParticleSystem(make_params(particle_count=200, seed=99), 800, 600, 200)
    b = ParticleSystem(make_params(particle_count=200, seed=99), 800, 600, 200)

    assert np.array_equal(a.base_positions, b.base_positions)
    assert np.array_equal(a.densities, b.densities)


def test_shared_generator_is_used_when_given(make_params):
    rng = np.random.default_rng(5)
    first = ParticleSystem(make_params(particle_count=50), 800, 600, 200, rng)
    second = ParticleSystem(make_params(particle_count=50), 800, 600, 200, rng)

    assert first.rng is rng
    assert not np.array_equal(first.base_positions, second.base_positions)


def test_unfillable_heart_raises(make_params):
    params = make_params(particle_count=100, max_placement_attempts=5000)
    with pytest.raises(PlacementError):
        ParticleSystem(params, 4000, 4000, 0.01)

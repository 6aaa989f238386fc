import numpy as np
import pygame
import pytest

from particle_system import ParticleSystem

BOUNDS = (720, 720)


def make_system(rng: np.random.Generator, special_probability: float = 0.3) -> ParticleSystem:
    return ParticleSystem({"special_probability": special_probability}, rng, BOUNDS)


def set_single_particle(system: ParticleSystem, *, angle=0.0, radius=100.0, life=255.0,
                        speed=1.0, osc_amount=2.0, special=False, size=4.0) -> None:
    system.clear()
    system.spawn(1)
    system.angles[:] = angle
    system.radii[:] = radius
    system.lives[:] = life
    system.speeds[:] = speed
    system.osc_amounts[:] = osc_amount
    system.special[:] = special
    system.sizes[:] = size


def test_spawn_initializes_particles_within_ranges(rng: np.random.Generator) -> None:
    system = make_system(rng)

    system.spawn(500)

    assert system.num_particles == 500
    for array in (system.radii, system.sizes, system.lives, system.speeds, system.osc_amounts, system.special):
        assert array.shape == (500,)
    assert system.positions.shape == (500, 2)
    assert np.all(system.lives == 255.0)
    assert np.all((system.angles >= 0) & (system.angles < 2 * np.pi))
    assert np.all((system.radii >= 720 * 0.05) & (system.radii <= 720 * 0.4))
    assert np.all((system.speeds >= 0.5) & (system.speeds <= 2.0))
    assert np.all((system.osc_amounts >= 2.0) & (system.osc_amounts <= 8.0))

    special_sizes = system.sizes[system.special]
    normal_sizes = system.sizes[~system.special]
    assert np.all((special_sizes >= 4.0) & (special_sizes <= 12.0))
    assert np.all((normal_sizes >= 2.0) & (normal_sizes <= 6.0))

    # Positions sit on each particle's orbit around the canvas center.
    offsets = system.positions - np.array(BOUNDS) / 2
    np.testing.assert_allclose(np.hypot(offsets[:, 0], offsets[:, 1]), system.radii)


def test_special_probability_controls_special_fraction(rng: np.random.Generator) -> None:
    never = make_system(rng, special_probability=0.0)
    never.spawn(100)
    always = make_system(rng, special_probability=1.0)
    always.spawn(100)

    assert not never.special.any()
    assert always.special.all()


def test_spawn_ignores_non_positive_counts(rng: np.random.Generator) -> None:
    system = make_system(rng)

    system.spawn(0)
    system.spawn(-5)

    assert system.num_particles == 0


def test_update_orbits_oscillates_and_decays(rng: np.random.Generator) -> None:
    system = make_system(rng)
    set_single_particle(system, angle=0.0, radius=100.0, speed=1.0, osc_amount=2.0)

    system.update(base_speed=2.0, time=0.0)

    expected_angle = 0.005 * 2.0 * 1.0
    expected_radius = 100.0 + np.sin(expected_angle) * 2.0
    assert system.angles[0] == pytest.approx(expected_angle)
    assert system.radii[0] == pytest.approx(expected_radius)
    assert system.positions[0, 0] == pytest.approx(360 + np.cos(expected_angle) * expected_radius)
    assert system.positions[0, 1] == pytest.approx(360 + np.sin(expected_angle) * expected_radius)
    assert system.lives[0] == pytest.approx(254.0)


def test_special_particles_decay_at_half_rate(rng: np.random.Generator) -> None:
    system = make_system(rng)
    set_single_particle(system, special=True)

    for _ in range(10):
        system.update(base_speed=1.0, time=0.5)

    assert system.lives[0] == pytest.approx(250.0)


def test_remove_dead_keeps_zero_life(rng: np.random.Generator) -> None:
    system = make_system(rng)
    system.spawn(3)
    system.lives[:] = [-0.5, 0.0, 10.0]
    system.sizes[:] = [1.0, 2.0, 3.0]

    removed = system.remove_dead()

    assert removed == 1
    assert system.num_particles == 2
    np.testing.assert_allclose(system.lives, [0.0, 10.0])
    np.testing.assert_allclose(system.sizes, [2.0, 3.0])
    assert system.positions.shape == (2, 2)
    assert system.special.shape == (2,)


def test_normal_particle_expires_after_256_frames(rng: np.random.Generator) -> None:
    system = make_system(rng)
    set_single_particle(system)

    for _ in range(255):
        system.update(base_speed=1.0, time=0.0)
    assert system.remove_dead() == 0

    system.update(base_speed=1.0, time=0.0)
    assert system.remove_dead() == 1
    assert system.num_particles == 0


def test_step_recycles_to_target(rng: np.random.Generator) -> None:
    system = make_system(rng)

    system.step(target=120, base_speed=1.5, time=0.0)
    assert system.num_particles == 120

    system.lives[:10] = -1.0
    system.step(target=120, base_speed=1.5, time=0.1)

    assert system.num_particles == 120
    assert np.all(system.lives >= 0)


def test_step_does_not_cull_surplus(rng: np.random.Generator) -> None:
    system = make_system(rng)
    system.spawn(80)

    system.step(target=50, base_speed=1.0, time=0.0)

    assert system.num_particles == 80


def test_replenish_with_negative_target_is_noop(rng: np.random.Generator) -> None:
    system = make_system(rng)

    system.replenish(-10)

    assert system.num_particles == 0


def test_clear_empties_population(rng: np.random.Generator) -> None:
    system = make_system(rng)
    system.spawn(40)

    system.clear()

    assert system.num_particles == 0
    assert system.positions.shape == (0, 2)


def test_draw_blends_particles_onto_surface(rng: np.random.Generator, pygame_env) -> None:
    system = make_system(rng, special_probability=1.0)
    set_single_particle(system, special=True, size=12.0, radius=0.0)
    system.update(base_speed=1.0, time=0.0)
    surface = pygame.Surface(BOUNDS)
    surface.fill((0, 0, 0))

    system.draw(surface, hue=0.0, time=0.0)

    assert tuple(surface.get_at((360, 360)))[:3] != (0, 0, 0)
    assert tuple(surface.get_at((10, 10)))[:3] == (0, 0, 0)


def test_draw_skips_invisible_particles(rng: np.random.Generator, pygame_env) -> None:
    system = make_system(rng, special_probability=0.0)
    set_single_particle(system, life=0.0, radius=0.0, size=6.0)
    system.update(base_speed=1.0, time=0.0)
    system.lives[:] = 0.0
    surface = pygame.Surface(BOUNDS)
    surface.fill((0, 0, 0))

    system.draw(surface, hue=0.0, time=0.0)

    assert tuple(surface.get_at((360, 360)))[:3] == (0, 0, 0)


def place_at_center(system: ParticleSystem) -> None:
    system.positions[:] = np.array(BOUNDS) / 2


def test_draw_keeps_particles_opaque_until_life_drops_below_100(rng: np.random.Generator, pygame_env) -> None:
    system = make_system(rng, special_probability=0.0)
    set_single_particle(system, life=150.0, size=6.0)
    place_at_center(system)
    surface = pygame.Surface(BOUNDS)
    surface.fill((0, 0, 0))

    system.draw(surface, hue=0.0, time=0.0)

    # HSB(0, 50, 100) at full alpha.
    assert tuple(surface.get_at((360, 360)))[:3] == (255, 128, 128)


def test_draw_fades_particles_below_life_100(rng: np.random.Generator, pygame_env) -> None:
    system = make_system(rng, special_probability=0.0)
    set_single_particle(system, life=50.0, size=6.0)
    place_at_center(system)
    surface = pygame.Surface(BOUNDS)
    surface.fill((0, 0, 0))

    system.draw(surface, hue=0.0, time=0.0)

    red = surface.get_at((360, 360))[0]
    assert 100 < red < 160

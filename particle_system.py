# particle_system.py

import numpy as np
import pygame
import logging
import numba
import constants
from mapping import hsb_to_rgba

logger = logging.getLogger("sensory_portrait")

# --- JIT-Compiled Update Kernel ---
# Kept outside the ParticleSystem class and operating only on NumPy arrays and
# simple scalar values, as required by Numba's nopython mode.

@numba.jit(nopython=True, fastmath=True)
def _update_particles_jit(angles, radii, positions, lives, speeds, osc_amounts, special,
                          base_speed, time, center_x, center_y,
                          angular_rate, decay_normal, decay_special):
    """
    Advances every particle by one frame: orbit, radial oscillation, and
    life decay. The oscillation uses the angle after this frame's rotation.
    """
    for i in range(angles.shape[0]):
        angles[i] += angular_rate * base_speed * speeds[i]
        radii[i] += np.sin(time + angles[i]) * osc_amounts[i]
        positions[i, 0] = center_x + np.cos(angles[i]) * radii[i]
        positions[i, 1] = center_y + np.sin(angles[i]) * radii[i]
        if special[i]:
            lives[i] -= decay_special
        else:
            lives[i] -= decay_normal


class ParticleSystem:
    """
    Manages the ambient particle population of a portrait using NumPy arrays
    (Structure of Arrays). Particles orbit the canvas center, fade out, and
    are recycled to keep the population at a target size.

    Data Contract:
    - Inputs:
        - config (dict): The 'portrait' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
        - bounds (tuple): The (width, height) of the canvas.
    - Outputs: None. This class modifies its internal state.
    - Side Effects: Manages the lifecycle of all particle data.
    - Invariants: All internal arrays have the same length (num_particles).
      After remove_dead() no particle has life < 0.
    """
    def __init__(self, config: dict, rng: np.random.Generator, bounds: tuple):
        self.config = config
        self.rng = rng
        self.bounds = np.array(bounds, dtype=float)
        self.center = self.bounds / 2.0
        self.special_probability = config.get('special_probability', 0.3)
        self.clear()

        logger.info(
            f"ParticleSystem created for a {int(self.bounds[0])}x{int(self.bounds[1])} canvas "
            f"(special probability {self.special_probability})."
        )

    @property
    def num_particles(self) -> int:
        return self.angles.shape[0]

    def clear(self):
        """Removes every particle."""
        self.angles = np.zeros(0, dtype=float)
        self.radii = np.zeros(0, dtype=float)
        self.positions = np.zeros((0, 2), dtype=float)
        self.sizes = np.zeros(0, dtype=float)
        self.lives = np.zeros(0, dtype=float)
        self.speeds = np.zeros(0, dtype=float)
        self.osc_amounts = np.zeros(0, dtype=float)
        self.special = np.zeros(0, dtype=np.bool_)

    def spawn(self, count: int):
        """
        Appends `count` freshly initialized particles. Each one is special
        with probability `special_probability`.
        """
        if count <= 0:
            return
        width = self.bounds[0]
        min_frac, max_frac = constants.PARTICLE_RADIUS_FRACTION

        special = self.rng.random(count) < self.special_probability
        angles = self.rng.uniform(0.0, 2 * np.pi, count)
        radii = self.rng.uniform(width * min_frac, width * max_frac, count)
        sizes = np.where(
            special,
            self.rng.uniform(*constants.PARTICLE_SIZE_SPECIAL, count),
            self.rng.uniform(*constants.PARTICLE_SIZE_NORMAL, count),
        )
        positions = self.center + np.column_stack((np.cos(angles), np.sin(angles))) * radii[:, np.newaxis]

        self.angles = np.concatenate((self.angles, angles))
        self.radii = np.concatenate((self.radii, radii))
        self.positions = np.concatenate((self.positions, positions))
        self.sizes = np.concatenate((self.sizes, sizes))
        self.lives = np.concatenate((self.lives, np.full(count, constants.PARTICLE_MAX_LIFE)))
        self.speeds = np.concatenate((self.speeds, self.rng.uniform(*constants.PARTICLE_SPEED_FACTOR, count)))
        self.osc_amounts = np.concatenate((self.osc_amounts, self.rng.uniform(*constants.PARTICLE_OSC_AMOUNT, count)))
        self.special = np.concatenate((self.special, special))

    def update(self, base_speed: float, time: float):
        """
        Advances all particles by one frame.

        - Inputs:
            - base_speed (float): Room-dependent speed multiplier.
            - time (float): Elapsed animation time in seconds.
        """
        if self.num_particles == 0:
            return
        _update_particles_jit(
            self.angles, self.radii, self.positions, self.lives,
            self.speeds, self.osc_amounts, self.special,
            float(base_speed), float(time), self.center[0], self.center[1],
            constants.PARTICLE_ANGULAR_RATE,
            constants.PARTICLE_DECAY_NORMAL, constants.PARTICLE_DECAY_SPECIAL
        )

    def remove_dead(self) -> int:
        """
        Removes every particle whose life has dropped below zero.
        Returns the number of particles removed.
        """
        survival_mask = self.lives >= 0
        removed = self.num_particles - int(survival_mask.sum())
        if removed == 0:
            return 0

        self.angles = self.angles[survival_mask]
        self.radii = self.radii[survival_mask]
        self.positions = self.positions[survival_mask]
        self.sizes = self.sizes[survival_mask]
        self.lives = self.lives[survival_mask]
        self.speeds = self.speeds[survival_mask]
        self.osc_amounts = self.osc_amounts[survival_mask]
        self.special = self.special[survival_mask]
        return removed

    def replenish(self, target: int):
        """Spawns particles until the population reaches `target`."""
        self.spawn(target - self.num_particles)

    def step(self, target: int, base_speed: float, time: float):
        """
        Runs the per-frame cycle: update, recycle expired particles, and top
        the population back up to `target`.
        """
        self.update(base_speed, time)
        removed = self.remove_dead()
        self.replenish(target)
        if removed:
            logger.debug(f"{removed} particle(s) expired. Population: {self.num_particles}.")

    def draw(self, screen: pygame.Surface, hue: float, time: float):
        """
        Draws all particles, alpha-blended onto the screen.
        Special particles get a pulsing outer disc and a complementary-hue core.
        Life is used as an alpha percentage, so a particle stays opaque until
        its life drops below 100 and a special core until it drops below 200.
        """
        alphas = np.clip(self.lives, 0, 100)
        core_alphas = np.clip(self.lives * 0.5, 0, 100)
        pulse = np.sin(time * 2) * 2

        for i in range(self.num_particles):
            x, y = self.positions[i]
            if self.special[i]:
                _blit_disc(screen, hsb_to_rgba(hue, 70, 100, alphas[i]), x, y, self.sizes[i] + pulse)
                _blit_disc(screen, hsb_to_rgba(hue + 180, 70, 100, core_alphas[i]), x, y,
                           self.sizes[i] * 0.5 + pulse)
            else:
                _blit_disc(screen, hsb_to_rgba(hue, 50, 100, alphas[i]), x, y, self.sizes[i])


def _blit_disc(screen: pygame.Surface, rgba: tuple, x: float, y: float, diameter: float):
    """
    Blends a filled disc onto the screen. pygame.draw writes alpha straight
    into the target, so the disc is drawn on its own surface and blitted.
    """
    radius = diameter / 2.0
    if radius < 0.5 or rgba[3] == 0:
        return
    extent = int(np.ceil(diameter)) + 2
    disc = pygame.Surface((extent, extent), pygame.SRCALPHA)
    pygame.draw.circle(disc, rgba, (extent / 2.0, extent / 2.0), radius)
    screen.blit(disc, (int(x - extent / 2.0), int(y - extent / 2.0)))

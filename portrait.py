# portrait.py

import logging

import numpy as np
import pygame

import constants
from mapping import PortraitParameters, compute_parameters, hsb_to_rgba, map_range
from particle_system import ParticleSystem
from room_data import RoomReading

logger = logging.getLogger("sensory_portrait")


class PortraitRenderer:
    """
    Draws one frame of a room's sensory portrait: layered glows, humidity
    rings, ambient particles, light beams and a readings overlay.

    Data Contract:
    - Inputs:
        - config (dict): The 'portrait' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
        - bounds (tuple): The (width, height) of the canvas.
    - Outputs: None. render() draws onto the surface it is given.
    - Side Effects: Steps the owned ParticleSystem once per rendered frame.
    """
    def __init__(self, config: dict, rng: np.random.Generator, bounds: tuple = (constants.WIDTH, constants.HEIGHT)):
        self.config = config
        self.rng = rng
        self.width, self.height = int(bounds[0]), int(bounds[1])
        self.center = (self.width / 2.0, self.height / 2.0)
        self.particles = ParticleSystem(config, rng, (self.width, self.height))
        self._font = None

        # Reusable overlays for the stroked layers.
        self.ring_surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        self.beam_surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)

        # --- Glow grid ---
        # Distance from the canvas center (in full-resolution pixels) of every
        # cell of the downscaled glow surface, indexed (x, y) for surfarray.
        scale = constants.GLOW_DOWNSCALE
        self.glow_size_px = (max(1, self.width // scale), max(1, self.height // scale))
        xs = (np.arange(self.glow_size_px[0]) + 0.5) * self.width / self.glow_size_px[0]
        ys = (np.arange(self.glow_size_px[1]) + 0.5) * self.height / self.glow_size_px[1]
        grid_x, grid_y = np.meshgrid(xs, ys, indexing='ij')
        distances = np.hypot(grid_x - self.center[0], grid_y - self.center[1])
        self.glow_distance_index = distances.astype(np.int32)
        self.glow_profile_length = int(self.glow_distance_index.max()) + 1

        logger.info(
            f"PortraitRenderer initialized: canvas {self.width}x{self.height}, "
            f"glow grid {self.glow_size_px[0]}x{self.glow_size_px[1]}."
        )

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, round(constants.OVERLAY_TEXT_SIZE / constants.DEFAULT_FONT_SCALE))
        return self._font

    def reset(self):
        """Drops the particle population, e.g. when the active room changes."""
        self.particles.clear()

    def render(self, screen: pygame.Surface, reading: RoomReading, time: float) -> PortraitParameters:
        """
        Draws the full portrait for `reading` at animation time `time` and
        returns the parameters that drove it.
        """
        params = compute_parameters(reading, self.width)

        screen.fill(constants.BACKGROUND)
        self._draw_glows(screen, params, time)
        self.draw_rings(screen, params, time)

        self.particles.step(params.particle_count, params.particle_speed, time)
        self.particles.draw(screen, params.hue, time)

        self.draw_beams(screen, params, time)
        self._draw_overlay(screen, reading)
        return params

    def render_message(self, screen: pygame.Surface, message: str):
        """Draws a centred message on an empty background."""
        screen.fill(constants.BACKGROUND)
        text = self.font.render(message, True, constants.WHITE)
        screen.blit(text, text.get_rect(center=self.center))

    def glow_profile(self, params: PortraitParameters, time: float) -> np.ndarray:
        """
        Composites the concentric glow discs of every layer into an RGB colour
        per integer distance from the center. Discs are blended back to front,
        largest first, over the background.
        """
        radii = np.arange(self.glow_profile_length, dtype=float)
        profile = np.tile(np.array(constants.BACKGROUND, dtype=float), (self.glow_profile_length, 1))
        pulse = np.sin(time * params.pulse_speed) * constants.GLOW_PULSE_AMPLITUDE
        glow_size = params.glow_size

        for layer in range(constants.GLOW_LAYERS):
            offset = layer * constants.GLOW_LAYER_HUE_OFFSET
            r_grad = glow_size
            while r_grad > 0:
                alpha = map_range(r_grad, glow_size, 0, 80, 0)
                brightness = map_range(r_grad, glow_size, 0, 90, 0)
                hue = params.hue + offset + np.sin(time + r_grad * 0.02) * constants.GLOW_HUE_WOBBLE
                red, green, blue, a = hsb_to_rgba(hue, 80, brightness, alpha)

                disc_radius = max(0.0, r_grad + pulse * (layer + 1))
                inside = radii < disc_radius
                weight = a / 255.0
                profile[inside] = profile[inside] * (1.0 - weight) + np.array((red, green, blue)) * weight

                r_grad -= constants.GLOW_STEP
        return profile

    def _draw_glows(self, screen: pygame.Surface, params: PortraitParameters, time: float):
        profile = self.glow_profile(params, time)
        pixels = profile[self.glow_distance_index]
        small = pygame.surfarray.make_surface(np.clip(pixels, 0, 255).astype(np.uint8))
        screen.blit(pygame.transform.smoothscale(small, (self.width, self.height)), (0, 0))

    def draw_rings(self, screen: pygame.Surface, params: PortraitParameters, time: float):
        """
        Draws the humidity rings. Each layer goes through its own overlay so
        that overlapping translucent strokes of different layers blend.
        """
        rings = params.ring_count
        span = self.width * constants.RING_SPAN_FRACTION

        for layer in range(constants.GLOW_LAYERS):
            self.ring_surface.fill((0, 0, 0, 0))
            color = hsb_to_rgba(params.hue + layer * constants.GLOW_LAYER_HUE_OFFSET, 40, 90, 30)
            for i in range(1, rings + 1):
                wobble = np.sin(time * (1.5 + layer * 0.5) + i * 0.5) * constants.RING_WOBBLE
                radius = i * span / rings + wobble
                weight = self.rng.uniform(*constants.RING_WEIGHT_RANGE)
                if radius < 1:
                    continue
                pygame.draw.circle(self.ring_surface, color, self.center, radius, max(1, int(round(weight))))
            screen.blit(self.ring_surface, (0, 0))

    def draw_beams(self, screen: pygame.Surface, params: PortraitParameters, time: float):
        self.beam_surface.fill((0, 0, 0, 0))
        if params.beam_count > 0:
            color = hsb_to_rgba(params.hue, 70, 90, 30)
            length = self.width * constants.BEAM_LENGTH_FRACTION
            line_width = max(1, int(round(params.beam_weight)))
            cx, cy = self.center

            for i in range(params.beam_count):
                angle = (2 * np.pi / params.beam_count) * i + time * constants.BEAM_ROTATION_SPEED
                dx, dy = np.cos(angle), np.sin(angle)
                start = (cx + dx * length * constants.BEAM_INNER_FRACTION, cy + dy * length * constants.BEAM_INNER_FRACTION)
                end = (cx + dx * length, cy + dy * length)
                pygame.draw.line(self.beam_surface, color, start, end, line_width)

        screen.blit(self.beam_surface, (0, 0))

    def _draw_overlay(self, screen: pygame.Surface, reading: RoomReading):
        text = self.font.render(format_readings(reading), True, constants.WHITE)
        text.set_alpha(constants.OVERLAY_ALPHA)
        rect = text.get_rect(center=(self.width / 2.0, self.height - constants.OVERLAY_BOTTOM_MARGIN))
        screen.blit(text, rect)


def format_readings(reading: RoomReading) -> str:
    return (
        f"T: {reading.temperature:.1f}°C  |  Lux: {reading.light:.0f}  |  "
        f"dB: {reading.sound:.0f}  |  Hum: {reading.humidity:.0f}%"
    )

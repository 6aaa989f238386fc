# mapping.py

"""
Maps a room's four readings onto the visual parameters of its portrait.

All mappings are linear and unclamped: readings outside a data domain
extrapolate past the visual range, so an unusually loud room simply gets
more particles. Counts are floored and never negative.
"""

import colorsys
import math
from dataclasses import dataclass

import numpy as np

import constants
from room_data import RoomReading


def map_range(value, in_min, in_max, out_min, out_max):
    """
    Linearly re-maps value from [in_min, in_max] onto [out_min, out_max].
    Works element-wise on NumPy arrays.
    """
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def _count(value: float) -> int:
    return max(0, int(math.floor(value)))


@dataclass(frozen=True)
class PortraitParameters:
    hue: float             # Degrees
    glow_size: float       # Pixels
    pulse_speed: float     # Radians per second
    ring_count: int
    particle_count: int
    particle_speed: float
    beam_count: int
    beam_weight: float     # Pixels


def compute_parameters(reading: RoomReading, width: int = constants.WIDTH) -> PortraitParameters:
    """
    Data Contract:
    - Inputs:
        - reading (RoomReading): The active room.
        - width (int): Canvas width, which scales the glow size.
    - Outputs: PortraitParameters for that room.
    """
    t_min, t_max = constants.TEMPERATURE_DOMAIN
    l_min, l_max = constants.LIGHT_DOMAIN
    s_min, s_max = constants.SOUND_DOMAIN
    h_min, h_max = constants.HUMIDITY_DOMAIN

    return PortraitParameters(
        hue=map_range(reading.temperature, t_min, t_max, *constants.HUE_RANGE),
        glow_size=map_range(
            reading.light, l_min, l_max,
            constants.GLOW_SIZE_MIN, width * constants.GLOW_SIZE_MAX_FRACTION
        ),
        pulse_speed=map_range(reading.sound, s_min, s_max, *constants.PULSE_SPEED_RANGE),
        ring_count=_count(map_range(reading.humidity, h_min, h_max, *constants.RING_COUNT_RANGE)),
        particle_count=_count(map_range(reading.sound, s_min, s_max, *constants.PARTICLE_COUNT_RANGE)),
        particle_speed=map_range(reading.sound, s_min, s_max, *constants.PARTICLE_SPEED_RANGE),
        beam_count=_count(map_range(reading.light, l_min, l_max, *constants.BEAM_COUNT_RANGE)),
        beam_weight=map_range(reading.light, l_min, l_max, *constants.BEAM_WEIGHT_RANGE),
    )


def hsb_to_rgba(hue: float, saturation: float, brightness: float, alpha: float = 100.0):
    """
    Converts an HSB colour to an 8-bit RGBA tuple.
    Hue is in degrees and wraps; saturation, brightness and alpha are
    percentages clamped to 0..100.
    """
    s, v, a = np.clip([saturation, brightness, alpha], 0.0, 100.0) / 100.0
    r, g, b = colorsys.hsv_to_rgb((hue % 360.0) / 360.0, s, v)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))

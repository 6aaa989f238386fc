# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between runs.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Screen dimensions
WIDTH = 720  # Pixels
HEIGHT = 720  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BACKGROUND = (18, 18, 18)
WHITE = (255, 255, 255)

# Window Title
TITLE = "Sensory Portrait"

# CSV column names for each reading.
COLUMN_TEMPERATURE = "Temperature (C)"
COLUMN_LIGHT = "Light Level (Lux)"
COLUMN_SOUND = "Sound Level (dB)"
COLUMN_HUMIDITY = "Humidity (%)"

# Data domains. Each is the (min, max) input span used by the visual mappings.
TEMPERATURE_DOMAIN = (15.0, 35.0)  # Celsius
LIGHT_DOMAIN = (100.0, 800.0)      # Lux
SOUND_DOMAIN = (10.0, 60.0)        # Decibels
HUMIDITY_DOMAIN = (20.0, 100.0)    # Percent

# Visual ranges. Ranges given as a fraction are multiplied by the canvas width.
HUE_RANGE = (200.0, 0.0)           # Degrees. Cold rooms are blue, hot rooms red.
GLOW_SIZE_MIN = 50.0               # Pixels
GLOW_SIZE_MAX_FRACTION = 0.8
PULSE_SPEED_RANGE = (0.5, 3.0)     # Radians per second
RING_COUNT_RANGE = (3, 15)
PARTICLE_COUNT_RANGE = (50, 200)
PARTICLE_SPEED_RANGE = (0.3, 3.0)
BEAM_COUNT_RANGE = (3, 8)
BEAM_WEIGHT_RANGE = (1.0, 4.0)     # Pixels

# Glow layers
GLOW_LAYERS = 3
GLOW_LAYER_HUE_OFFSET = 120.0      # Degrees between successive layers
GLOW_STEP = 15                     # Pixels between concentric glow discs
GLOW_PULSE_AMPLITUDE = 30.0        # Pixels
GLOW_HUE_WOBBLE = 15.0             # Degrees
GLOW_DOWNSCALE = 4                 # The glow is composited at 1/GLOW_DOWNSCALE resolution.

# Humidity rings
RING_SPAN_FRACTION = 0.4
RING_WOBBLE = 8.0                  # Pixels
RING_WEIGHT_RANGE = (0.5, 3.0)     # Pixels

# Particles
PARTICLE_MAX_LIFE = 255.0
PARTICLE_RADIUS_FRACTION = (0.05, 0.4)
PARTICLE_SIZE_NORMAL = (2.0, 6.0)
PARTICLE_SIZE_SPECIAL = (4.0, 12.0)
PARTICLE_SPEED_FACTOR = (0.5, 2.0)
PARTICLE_OSC_AMOUNT = (2.0, 8.0)
PARTICLE_ANGULAR_RATE = 0.005
PARTICLE_DECAY_NORMAL = 1.0
PARTICLE_DECAY_SPECIAL = 0.5

# Light beams
BEAM_LENGTH_FRACTION = 0.4
BEAM_INNER_FRACTION = 0.2
BEAM_ROTATION_SPEED = 0.5          # Radians per second

# Text overlay
OVERLAY_TEXT_SIZE = 14             # Pixels
DEFAULT_FONT_SCALE = 0.6875        # pygame renders its default font at this fraction of the requested size.
OVERLAY_ALPHA = 240
OVERLAY_BOTTOM_MARGIN = 28  # Pixels from the bottom edge

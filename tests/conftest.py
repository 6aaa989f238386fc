import os

# Headless pygame for every test; must be set before pygame opens a display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from room_data import RoomReading


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def reading() -> RoomReading:
    return RoomReading(temperature=25.0, light=450.0, sound=35.0, humidity=60.0)


@pytest.fixture
def pygame_env():
    pygame.init()
    yield
    pygame.quit()

# main.py

import pygame
import constants
import json
import logging
import logger_setup
import numpy as np
from animation_clock import AnimationClock
from portrait import PortraitRenderer
from room_data import RoomCycle, load_rooms

# Get the application's dedicated logger
logger = logging.getLogger("sensory_portrait")


def handle_navigation(event, rooms: RoomCycle, clock: AnimationClock, renderer: PortraitRenderer):
    """
    Steps to the next or previous room on an arrow key press. Any room change
    restarts the animation clock and drops the particle population.
    Returns True if the active room changed.
    """
    if event.type != pygame.KEYDOWN or rooms is None:
        return False
    if event.key == pygame.K_RIGHT:
        reading = rooms.next()
    elif event.key == pygame.K_LEFT:
        reading = rooms.previous()
    else:
        return False

    clock.reset()
    renderer.reset()
    logger.info(f"Room {rooms.index + 1}/{len(rooms)} selected: {reading}")
    return True


def run_portrait_loop(screen, frame_clock, renderer, rooms, log_every_frames):
    """
    The main render loop. Runs until the window is closed or Escape is pressed.
    """
    # --- Loop Setup ---
    running = True
    tick = 0
    animation = AnimationClock()

    while running:
        # Event handling
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            else:
                handle_navigation(event, rooms, animation, renderer)

        # --- Drawing ---
        if rooms is None:
            renderer.render_message(screen, "No room data loaded")
        else:
            params = renderer.render(screen, rooms.current, animation.time)

            # --- Logging (throttled) ---
            if tick % log_every_frames == 0:
                logger.debug(
                    f"Tick={tick}, "
                    f"Time={animation.time:.2f}s, "
                    f"Particles={renderer.particles.num_particles}/{params.particle_count}, "
                    f"Hue={params.hue:.1f}, "
                    f"Glow={params.glow_size:.1f}, "
                    f"Rings={params.ring_count}, "
                    f"Beams={params.beam_count}"
                )

        pygame.display.flip()
        dt_ms = frame_clock.tick(constants.FPS)
        animation.advance(dt_ms)
        tick += 1


def main():
    """
    Main function to initialize and run the sensory portrait.
    """
    # --- Setup ---
    logger_setup.setup_logging()

    with open('config.json', 'r') as f:
        config = json.load(f)
    portrait_config = config['portrait']

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    readings = load_rooms(config['data_path'])
    rooms = RoomCycle(readings) if readings else None
    if rooms is None:
        logger.warning("No rooms available. Showing an empty portrait.")
    else:
        logger.info(f"Room 1/{len(rooms)} selected: {rooms.current}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
    pygame.display.set_caption(constants.TITLE)
    frame_clock = pygame.time.Clock()

    renderer = PortraitRenderer(portrait_config, rng, (constants.WIDTH, constants.HEIGHT))

    run_portrait_loop(screen, frame_clock, renderer, rooms, max(1, portrait_config.get('log_every_frames', 300)))

    logger.info("Application shutting down.")
    pygame.quit()

if __name__ == "__main__":
    main()

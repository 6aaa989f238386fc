# animation_clock.py


class AnimationClock:
    """
    Elapsed animation time in seconds. Monotonically increasing between
    resets; the portrait resets it whenever the active room changes.
    """
    def __init__(self):
        self.time = 0.0

    def advance(self, dt_ms: float) -> float:
        """Adds a frame delta given in milliseconds. Negative deltas are ignored."""
        if dt_ms > 0:
            self.time += dt_ms / 1000.0
        return self.time

    def reset(self):
        self.time = 0.0

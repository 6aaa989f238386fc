import pytest

from animation_clock import AnimationClock


def test_advance_accumulates_seconds() -> None:
    clock = AnimationClock()

    clock.advance(16)
    clock.advance(17)

    assert clock.time == pytest.approx(0.033)


def test_advance_ignores_negative_deltas() -> None:
    clock = AnimationClock()
    clock.advance(500)

    assert clock.advance(-100) == pytest.approx(0.5)


def test_reset_returns_to_zero() -> None:
    clock = AnimationClock()
    clock.advance(1234)

    clock.reset()

    assert clock.time == 0.0

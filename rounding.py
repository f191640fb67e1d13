import math


def round_half_away_from_zero(value: float) -> int:
    """Rounds to the nearest integer, with halves rounded away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_to_step(value: float, step: int) -> int:
    """Rounds a value to the nearest multiple of step."""
    return round_half_away_from_zero(value / step) * step

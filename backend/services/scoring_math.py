"""Numeric helpers shared by the scoring services."""

import math


def round_half_up(value: float, ndigits: int = 0):
    """Round halves up: 74.5 -> 75, 12.5 -> 13, -2.5 -> -2.

    The built-in round sends halves to the nearest even number.
    """
    if ndigits == 0:
        return math.floor(value + 0.5)
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor

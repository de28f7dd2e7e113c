"""
Trail Decay Model - how bright a cell is, given when a head last passed it.

A cell lights up the instant a drop's head reaches its row and then fades
to background over the tail lifespan. The head cell itself always renders
at full intensity in the head color.
"""

import math
from enum import Enum
from typing import Iterable, Optional, Tuple

from .constants import Timing


class FadeCurve(Enum):
    """Shape of the fade from full intensity to background."""
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


def blend(background: Tuple[int, int, int], foreground: Tuple[int, int, int],
          amount: float) -> Tuple[int, int, int]:
    """Mix foreground over background; amount 0 is background, 1 is foreground."""
    amount = min(1.0, max(0.0, amount))
    return tuple(
        int(round(b + (f - b) * amount))
        for b, f in zip(background, foreground)
    )


class TrailDecayModel:
    """Computes per-cell intensity and color from drop timing."""

    def __init__(self, curve: FadeCurve = FadeCurve.LINEAR,
                 steepness: float = Timing.EXPONENTIAL_STEEPNESS):
        self.curve = curve
        self.steepness = steepness

    def fade(self, age: float, lifespan: float, curve: Optional[FadeCurve] = None) -> float:
        """
        Intensity of a cell illuminated ``age`` seconds ago.

        1.0 at age 0, strictly decreasing, exactly 0.0 once age reaches the
        lifespan. A zero lifespan means nothing persists behind the head.
        """
        if age <= 0:
            return 1.0
        if lifespan <= 0 or age >= lifespan:
            return 0.0

        fraction = age / lifespan
        if (curve or self.curve) == FadeCurve.EXPONENTIAL:
            k = self.steepness
            floor = math.exp(-k)
            return (math.exp(-k * fraction) - floor) / (1.0 - floor)
        return 1.0 - fraction

    def intensity(self, drop, row: int, elapsed: float, lifespan: float,
                  curve: Optional[FadeCurve] = None) -> float:
        """Intensity of ``row`` due to a single drop."""
        if row < 0 or row > drop.head_row:
            return 0.0
        if row == drop.head_row:
            return 1.0
        return self.fade(elapsed - drop.time_at_row(row), lifespan, curve)

    def column_intensity(self, drops: Iterable, row: int, elapsed: float,
                         lifespan: float, curve: Optional[FadeCurve] = None) -> Tuple[float, bool]:
        """
        Brightest contribution of any drop in a column.

        Returns:
            (intensity, is_head)
        """
        best = 0.0
        head = False
        for drop in drops:
            value = self.intensity(drop, row, elapsed, lifespan, curve)
            if value > best:
                best = value
                head = row == drop.head_row
        return best, head

    def cell_color(self, intensity: float, head: bool, config) -> Tuple[int, int, int]:
        """Head cells use the head color; trail cells blend tail color into background."""
        if head:
            return config.head_color
        return blend(config.background, config.tail_color, intensity)

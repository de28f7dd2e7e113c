"""
Rain configuration.

Everything the rain engine needs to know about the user's choices is
carried in one frozen RainConfig, passed explicitly into every frame.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .colors import NAMED_COLORS
from .constants import Defaults, SpeedTuning, Timing
from .decay import FadeCurve

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


class RainSpeed(Enum):
    """Speed tiers for the rain."""
    SLOW = "slow"
    FAST = "fast"

    @property
    def rows_per_second(self) -> float:
        """Base fall speed before per-drop variance."""
        return {
            RainSpeed.SLOW: SpeedTuning.SLOW_ROWS_PER_SEC,
            RainSpeed.FAST: SpeedTuning.FAST_ROWS_PER_SEC,
        }[self]

    @property
    def spawn_probability(self) -> float:
        """Chance per column per frame that an idle column starts a drop."""
        return {
            RainSpeed.SLOW: SpeedTuning.SLOW_SPAWN_PROBABILITY,
            RainSpeed.FAST: SpeedTuning.FAST_SPAWN_PROBABILITY,
        }[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> 'RainSpeed':
        """Resolve a speed name, falling back to FAST for anything unknown."""
        if isinstance(value, RainSpeed):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            logger.warning(f"Unknown speed '{value}', using '{Defaults.SPEED}'")
            return cls(Defaults.SPEED)


def parse_tail_length(value: Any, default: float = Defaults.TAIL_LENGTH) -> float:
    """
    Parse a tail lifespan in seconds.

    Unparsable, negative or non-finite values fall back to the default.
    """
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid tail length '{value}', using {default}s")
        return default
    if not math.isfinite(seconds) or seconds < 0:
        logger.warning(f"Tail length out of range '{value}', using {default}s")
        return default
    return seconds


@dataclass(frozen=True)
class RainConfig:
    """Configuration for one rain session."""
    tail_color: RGB = NAMED_COLORS[Defaults.TAIL_COLOR]
    head_color: RGB = NAMED_COLORS[Defaults.HEAD_COLOR]
    background: RGB = Defaults.BACKGROUND
    tail_lifespan: float = Defaults.TAIL_LENGTH  # seconds
    speed: RainSpeed = RainSpeed.FAST
    noise_interval: float = Timing.NOISE_INTERVAL
    fade_curve: FadeCurve = FadeCurve.LINEAR

    def __post_init__(self):
        # Frozen: normalise through object.__setattr__
        object.__setattr__(self, 'tail_lifespan', max(0.0, float(self.tail_lifespan)))
        object.__setattr__(self, 'noise_interval', max(0.0, float(self.noise_interval)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tail_color': self.tail_color,
            'head_color': self.head_color,
            'background': self.background,
            'tail_lifespan': self.tail_lifespan,
            'speed': self.speed.value,
            'noise_interval': self.noise_interval,
            'fade_curve': self.fade_curve.value,
        }

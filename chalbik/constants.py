"""
Centralized tuning values for the rain engine and the terminal host.

Grouped into small namespaces so call sites read as
``SpeedTuning.FAST_ROWS_PER_SEC`` rather than bare module constants.
"""


class Charset:
    """Klingon pIqaD block in the private use area."""
    PIQAD_START = 0xF8D0
    PIQAD_END = 0xF8FF
    # Unassigned slots, as offsets from PIQAD_START (inclusive)
    PIQAD_EXCLUDED = ((0x1A, 0x1F), (0x2A, 0x2D))
    PIQAD_SIZE = 38

    UNICODE_MAX = 0x10FFFF


class SpeedTuning:
    """Fall speed and spawn density per speed tier."""
    SLOW_ROWS_PER_SEC = 10.0
    FAST_ROWS_PER_SEC = 40.0
    SPEED_VARIANCE = 0.5       # +/- fraction applied per drop
    MIN_ROWS_PER_SEC = 1.0

    # Per column, per frame
    SLOW_SPAWN_PROBABILITY = 0.02
    FAST_SPAWN_PROBABILITY = 0.05


class Timing:
    """Frame cadence and glyph flicker."""
    FRAME_INTERVAL_MS = 50     # getch() timeout between frames
    NOISE_INTERVAL = 5.0       # Seconds a glyph is kept before reselection
    NOISE_JITTER = 0.5         # Per-cell +/- fraction of NOISE_INTERVAL
    EXPONENTIAL_STEEPNESS = 4.0

    # Head rows saturate here instead of growing without bound
    MAX_HEAD_ROW = 2 ** 31 - 1


class Defaults:
    """Values used when the command line leaves something out."""
    TAIL_COLOR = "red"
    HEAD_COLOR = "yellow"
    SPEED = "fast"
    TAIL_LENGTH = 10.0         # Seconds
    BACKGROUND = (0, 0, 0)

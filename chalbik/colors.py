"""
Color names and curses color pair management.

The rain engine works in RGB. This module turns the color names accepted
on the command line into RGB, and RGB into curses color pairs for whatever
palette the terminal offers.
"""

import logging
from typing import Dict, Optional, Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# Terminal named colors, standard ANSI approximations
NAMED_COLORS: Dict[str, RGB] = {
    "black": (0, 0, 0),
    "red": (128, 0, 0),
    "green": (0, 128, 0),
    "yellow": (128, 128, 0),
    "blue": (0, 0, 128),
    "magenta": (128, 0, 128),
    "cyan": (0, 128, 128),
    "gray": (192, 192, 192),
    "light_gray": (192, 192, 192),
    "dark_gray": (128, 128, 128),
    "light_red": (255, 0, 0),
    "light_green": (0, 255, 0),
    "light_yellow": (255, 255, 0),
    "light_blue": (0, 0, 255),
    "light_magenta": (255, 0, 255),
    "light_cyan": (0, 255, 255),
    "white": (255, 255, 255),
}

# xterm-256 color cube channel levels
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def parse_hex(value: str) -> Optional[RGB]:
    """Parse '#rrggbb' (or 'rrggbb'); None if it is not a hex color."""
    text = value.strip().lstrip('#')
    if len(text) != 6:
        return None
    try:
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    except ValueError:
        return None


def resolve_color(name: Optional[str], default: str) -> RGB:
    """
    Resolve a color name or hex code to RGB.

    Unknown names fall back to ``default`` (which must be a known name).
    """
    key = (name or "").strip().lower().replace('-', '_')
    if key in NAMED_COLORS:
        return NAMED_COLORS[key]
    rgb = parse_hex(key) if key else None
    if rgb is not None:
        return rgb
    logger.warning(f"Unknown color '{name}', using '{default}'")
    return NAMED_COLORS[default]


def _nearest_cube_index(value: int) -> int:
    return min(range(len(_CUBE_LEVELS)), key=lambda i: abs(_CUBE_LEVELS[i] - value))


def rgb_to_xterm256(rgb: RGB) -> int:
    """Nearest xterm-256 palette index (color cube or grayscale ramp)."""
    r, g, b = rgb
    ri, gi, bi = (_nearest_cube_index(c) for c in rgb)
    cube = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])
    cube_index = 16 + 36 * ri + 6 * gi + bi

    gray_step = min(23, max(0, int(round(((r + g + b) / 3 - 8) / 10))))
    gray_level = 8 + 10 * gray_step
    gray_index = 232 + gray_step

    def dist(other: RGB) -> int:
        return sum((a - o) ** 2 for a, o in zip(rgb, other))

    if dist((gray_level,) * 3) < dist(cube):
        return gray_index
    return cube_index


def rgb_to_basic(rgb: RGB) -> int:
    """Closest of the eight basic terminal colors (0-7, ANSI order)."""
    peak = max(rgb)
    if peak == 0:
        return 0
    r, g, b = (1 if c >= peak * 0.5 else 0 for c in rgb)
    return r | (g << 1) | (b << 2)


class ColorPairs:
    """Lazily allocated curses color pairs keyed by palette index."""

    def __init__(self):
        self._pairs: Dict[int, int] = {}
        self._next_pair = 1
        self._max_pairs = 0
        self.extended = False
        self._warned = False
        self.default_colors = False

    def init_colors(self):
        """Initialize curses color support; call once inside curses.wrapper."""
        if not CURSES_AVAILABLE or curses is None:
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            self.default_colors = True
        except curses.error:
            logger.info("Default colors unsupported, using black background")
            self.default_colors = False
        self.extended = curses.COLORS >= 256
        self._max_pairs = curses.COLOR_PAIRS
        logger.info(f"Terminal colors: {curses.COLORS}, pairs: {curses.COLOR_PAIRS}")

    def palette_index(self, rgb: RGB) -> int:
        if self.extended:
            return rgb_to_xterm256(rgb)
        return rgb_to_basic(rgb)

    def pair_number(self, rgb: RGB) -> int:
        """Color pair for ``rgb``, allocating on first use; 0 when pairs run out."""
        index = self.palette_index(rgb)
        pair = self._pairs.get(index)
        if pair is not None:
            return pair
        if self._next_pair >= self._max_pairs:
            if not self._warned:
                logger.warning("Out of curses color pairs, falling back to default colors")
                self._warned = True
            return 0
        pair = self._next_pair
        background = -1 if self.default_colors else curses.COLOR_BLACK
        curses.init_pair(pair, index, background)
        self._pairs[index] = pair
        self._next_pair += 1
        return pair

    def attr(self, rgb: RGB) -> int:
        return curses.color_pair(self.pair_number(rgb))

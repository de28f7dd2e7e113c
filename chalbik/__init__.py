"""
Chalbik - Klingon Rain TUI

Digital rain of Klingon pIqaD glyphs for the terminal.

Basic Usage:
    from chalbik import RainConfig, run_rain
    run_rain(RainConfig())

Driving the engine yourself:
    from chalbik import FrameCompositor, RainConfig, klingon_catalog

    compositor = FrameCompositor(klingon_catalog())
    frame = compositor.compose(elapsed, width, height, RainConfig())
    for column, row, cell in frame.lit_cells():
        ...
"""

__version__ = "1.0.0"

# Engine
from .glyphs import GlyphCatalog, klingon_catalog
from .drops import Drop, ColumnState, ColumnDropTracker, DropSpawner
from .decay import FadeCurve, TrailDecayModel, blend
from .compositor import Cell, Frame, FrameCompositor

# Configuration
from .config import RainConfig, RainSpeed, parse_tail_length
from .colors import NAMED_COLORS, resolve_color
from .errors import ChalbikError, ConfigurationError, GlyphCatalogError

# Terminal host
from .screen import RainScreen, run_rain

__all__ = [
    # Version
    "__version__",
    # Engine
    "GlyphCatalog",
    "klingon_catalog",
    "Drop",
    "ColumnState",
    "ColumnDropTracker",
    "DropSpawner",
    "FadeCurve",
    "TrailDecayModel",
    "blend",
    "Cell",
    "Frame",
    "FrameCompositor",
    # Configuration
    "RainConfig",
    "RainSpeed",
    "parse_tail_length",
    "NAMED_COLORS",
    "resolve_color",
    "ChalbikError",
    "ConfigurationError",
    "GlyphCatalogError",
    # Host
    "RainScreen",
    "run_rain",
]

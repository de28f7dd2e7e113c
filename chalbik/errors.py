"""
Chalbik error types.

The rain engine has no recoverable errors during a frame: every input is
validated or defaulted before it reaches the compositor. What remains are
configuration failures raised once, at startup.
"""


class ChalbikError(Exception):
    """Base class for all Chalbik errors"""
    pass


class ConfigurationError(ChalbikError):
    """Raised when the rain cannot be configured from the given settings"""
    pass


class GlyphCatalogError(ConfigurationError):
    """Raised when a glyph catalog would be empty or has invalid bounds"""
    pass

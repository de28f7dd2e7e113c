"""
Glyph Catalog - the fixed set of characters a rain cell may display.

A catalog is built once from a contiguous code-point range with a few
unassigned sub-ranges cut out, then shared read-only by every column.
"""

import logging
import random
from typing import Iterable, Iterator, Sequence, Tuple

from .constants import Charset
from .errors import GlyphCatalogError

logger = logging.getLogger(__name__)


class GlyphCatalog:
    """Immutable, ordered, deduplicated sequence of rain glyphs."""

    def __init__(self, start: int, end: int, excluded: Sequence[Tuple[int, int]] = ()):
        """
        Build a catalog from the inclusive code-point range [start, end].

        Args:
            start: First code point of the range
            end: Last code point of the range (inclusive)
            excluded: Inclusive (lo, hi) offset ranges, relative to start,
                      whose code points are skipped

        Raises:
            GlyphCatalogError: If the bounds are invalid or nothing is left
                               after filtering
        """
        if start < 0 or end > Charset.UNICODE_MAX or end < start:
            raise GlyphCatalogError(
                f"Invalid code point range U+{start:04X}..U+{end:04X}"
            )

        chars = []
        for code in range(start, end + 1):
            offset = code - start
            if any(lo <= offset <= hi for lo, hi in excluded):
                continue
            chars.append(chr(code))

        self._glyphs = self._dedupe(chars)
        if not self._glyphs:
            raise GlyphCatalogError(
                f"No glyphs left in U+{start:04X}..U+{end:04X} after exclusions"
            )
        logger.debug(f"Glyph catalog built: {len(self._glyphs)} glyphs "
                     f"from U+{start:04X}..U+{end:04X}")

    @classmethod
    def from_chars(cls, chars: Iterable[str]) -> 'GlyphCatalog':
        """Build a catalog from an explicit set of characters."""
        glyphs = cls._dedupe(chars)
        if not glyphs:
            raise GlyphCatalogError("Glyph catalog cannot be empty")
        catalog = cls.__new__(cls)
        catalog._glyphs = glyphs
        return catalog

    @staticmethod
    def _dedupe(chars: Iterable[str]) -> Tuple[str, ...]:
        # dict keeps first-seen order
        return tuple(dict.fromkeys(chars))

    @property
    def glyphs(self) -> Tuple[str, ...]:
        return self._glyphs

    def pick(self, rng: random.Random) -> str:
        """Uniform random glyph."""
        return self._glyphs[rng.randrange(len(self._glyphs))]

    def __len__(self) -> int:
        return len(self._glyphs)

    def __contains__(self, glyph: object) -> bool:
        return glyph in self._glyphs

    def __iter__(self) -> Iterator[str]:
        return iter(self._glyphs)

    def __repr__(self) -> str:
        return f"GlyphCatalog({len(self._glyphs)} glyphs)"


def klingon_catalog() -> GlyphCatalog:
    """The pIqaD catalog: U+F8D0..U+F8FF minus the two unassigned runs (38 glyphs)."""
    return GlyphCatalog(Charset.PIQAD_START, Charset.PIQAD_END, Charset.PIQAD_EXCLUDED)

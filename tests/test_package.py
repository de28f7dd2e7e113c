"""
Tests for the chalbik package surface.
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class TestImports:
    """Test that all modules can be imported."""

    def test_import_package(self):
        """Package should be importable."""
        import chalbik
        assert chalbik.__version__ == "1.0.0"

    def test_import_engine(self):
        """Engine classes should be importable."""
        from chalbik import (
            GlyphCatalog,
            ColumnDropTracker,
            DropSpawner,
            TrailDecayModel,
            FrameCompositor,
        )
        assert GlyphCatalog is not None
        assert ColumnDropTracker is not None
        assert DropSpawner is not None
        assert TrailDecayModel is not None
        assert FrameCompositor is not None

    def test_import_host(self):
        """Terminal host should be importable without a terminal."""
        from chalbik import RainScreen, run_rain
        assert RainScreen is not None
        assert run_rain is not None

    def test_all_exports_exist(self):
        import chalbik
        for name in chalbik.__all__:
            assert hasattr(chalbik, name), name


class TestEndToEnd:
    def test_quick_rain(self):
        """A few seconds of default rain stays within the grid and catalog."""
        import random
        from chalbik import DropSpawner, FrameCompositor, RainConfig, klingon_catalog

        rng = random.Random(2024)
        catalog = klingon_catalog()
        compositor = FrameCompositor(catalog, spawner=DropSpawner(rng), rng=rng)
        config = RainConfig()
        lit = 0
        for step in range(100):
            frame = compositor.compose(step * 0.05, 40, 20, config)
            assert len(frame.rows) == 20
            for _, _, cell in frame.lit_cells():
                assert cell.glyph in catalog
                assert 0.0 < cell.intensity <= 1.0
                lit += 1
        assert lit > 0

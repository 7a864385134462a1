#!/usr/bin/env python3
"""Tests for the regex-based board statistics."""

import sys
import unittest
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from kiparse.pcb import mm2_to_sq_in, mm_to_mils, quick_stats
from samples import LEGACY_PCB, SAMPLE_PCB


class TestQuickStats(unittest.TestCase):

    def test_sample_counts(self):
        stats = quick_stats(SAMPLE_PCB)
        self.assertEqual(stats.footprints, 2)
        self.assertEqual(stats.tracks, 2)
        self.assertEqual(stats.vias, 1)
        self.assertEqual(stats.file_size, len(SAMPLE_PCB.encode('utf-8')))

    def test_outline(self):
        stats = quick_stats(SAMPLE_PCB)
        self.assertEqual((stats.outline.width, stats.outline.height), (100.0, 50.0))
        self.assertEqual(stats.area_mm2, 5000.0)

    def test_legacy_module_counted(self):
        stats = quick_stats(LEGACY_PCB)
        self.assertEqual(stats.footprints, 1)
        self.assertIsNone(stats.outline)
        self.assertEqual(stats.area_mm2, 0.0)

    def test_bare_edge_cuts_layer(self):
        text = '(gr_line (start 0 0) (end 20 10) (layer Edge.Cuts) (width 0.1))'
        self.assertEqual(quick_stats(text).outline.width, 20.0)

    def test_other_layers_ignored(self):
        text = '(gr_line (start 0 0) (end 20 10) (stroke (width 0.1)) (layer "F.SilkS"))'
        self.assertIsNone(quick_stats(text).outline)

    def test_unit_conversions(self):
        self.assertAlmostEqual(mm_to_mils(25.4), 1000.0)
        self.assertAlmostEqual(mm2_to_sq_in(645.16), 1.0)


if __name__ == '__main__':
    unittest.main()

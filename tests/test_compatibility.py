# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for compatibility module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from compatibility import RejectRule, can_place, check_adjacency
from config import GeneratorSettings
from layout import Layout
from models import Orientation, Placement, normalize_word


H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


class TestCharacterRules(unittest.TestCase):
    """Tests for symbol consistency and connectivity."""

    def setUp(self):
        self.settings = GeneratorSettings()
        self.layout = Layout()
        self.layout.add(Placement(normalize_word("abc"), 0, 0, H))

    def test_first_word_always_fits(self):
        check = can_place(Layout(), Placement(normalize_word("abc"), 7, -3, V), self.settings)

        self.assertTrue(check)
        self.assertEqual(check.reason, "accepted")

    def test_crossing_accepted(self):
        check = can_place(self.layout, Placement(normalize_word("bxy"), 0, 1, V), self.settings)

        self.assertTrue(check.accepted)

    def test_character_conflict(self):
        check = can_place(self.layout, Placement(normalize_word("xq"), 0, 1, V), self.settings)

        self.assertFalse(check)
        self.assertEqual(check.rule, RejectRule.CHARACTER_CONFLICT)
        self.assertEqual(check.cell, (0, 1))
        self.assertIn("character_conflict", check.reason)

    def test_collinear_overlap(self):
        check = can_place(self.layout, Placement(normalize_word("bcd"), 0, 1, H), self.settings)

        self.assertEqual(check.rule, RejectRule.COLLINEAR_OVERLAP)

    def test_duplicate_word(self):
        check = can_place(self.layout, Placement(normalize_word("abc"), 0, 0, V), self.settings)

        self.assertEqual(check.rule, RejectRule.DUPLICATE_WORD)

    def test_orientation_locked(self):
        locked = normalize_word("bxy", orientation=H)

        check = can_place(self.layout, Placement(locked, 0, 1, V), self.settings)

        self.assertEqual(check.rule, RejectRule.ORIENTATION_LOCKED)

    def test_none_symbol_cells(self):
        """Test cells holding None are checked and counted as crossings."""
        layout = Layout()
        layout.add(Placement(normalize_word((None, 'a'), "w1"), 0, 0, H))

        clash = can_place(layout, Placement(normalize_word(('z', 'k'), "w2"), 0, 0, V),
                          self.settings)
        crossing = can_place(layout, Placement(normalize_word((None, 'q'), "w3"), 0, 0, V),
                             self.settings)

        self.assertEqual(clash.rule, RejectRule.CHARACTER_CONFLICT)
        self.assertEqual(clash.cell, (0, 0))
        self.assertTrue(crossing)

    def test_disconnected(self):
        far = Placement(normalize_word("de"), 5, 5, V)

        check = can_place(self.layout, far, self.settings)
        self.assertEqual(check.rule, RejectRule.DISCONNECTED)

        allowed = GeneratorSettings(allow_disconnected_groups=True)
        self.assertTrue(can_place(self.layout, far, allowed))


class TestAdjacencyRules(unittest.TestCase):
    """Tests for how non-intersecting words may touch."""

    def setUp(self):
        self.layout = Layout()
        self.abc = Placement(normalize_word("abc"), 0, 0, H)
        self.layout.add(self.abc)
        self.de = normalize_word("de")

    def _check(self, placement, **overrides):
        settings = GeneratorSettings(allow_disconnected_groups=True, **overrides)
        return can_place(self.layout, placement, settings)

    def test_flush(self):
        below = Placement(self.de, 1, 0, H)

        check = self._check(below)
        self.assertEqual(check.rule, RejectRule.FLUSH_ADJACENCY)
        self.assertEqual(check.other, self.abc)
        self.assertTrue(self._check(below, forbid_flush_adjacency=False))

    def test_end_to_end(self):
        after = Placement(self.de, 0, 3, H)

        self.assertEqual(self._check(after).rule, RejectRule.END_TO_END)
        self.assertTrue(self._check(after, forbid_end_to_end=False))

    def test_end_to_side(self):
        hanging = Placement(self.de, 1, 1, V)

        self.assertEqual(self._check(hanging).rule, RejectRule.END_TO_SIDE)
        self.assertTrue(self._check(hanging, forbid_end_to_side=False))

    def test_corner_touch(self):
        diagonal = Placement(self.de, 1, 3, H)

        self.assertTrue(self._check(diagonal))
        self.assertEqual(
            self._check(diagonal, forbid_corner_touch=True).rule,
            RejectRule.CORNER_TOUCH
        )

    def test_flush_against_crossing_word(self):
        """Test parallel crossing words on neighbouring columns."""
        self.layout.add(Placement(normalize_word("bxy"), 0, 1, V))
        beside = Placement(normalize_word("cq"), 0, 2, V)

        check = can_place(self.layout, beside, GeneratorSettings())

        self.assertEqual(check.rule, RejectRule.FLUSH_ADJACENCY)
        self.assertTrue(
            can_place(self.layout, beside, GeneratorSettings(forbid_flush_adjacency=False))
        )

    def test_check_adjacency_pairwise(self):
        settings = GeneratorSettings()

        self.assertIsNone(check_adjacency(self.abc, Placement(self.de, 2, 0, H), settings))
        self.assertEqual(
            check_adjacency(self.abc, Placement(self.de, 0, 3, H), settings),
            RejectRule.END_TO_END
        )


class TestBoundsRules(unittest.TestCase):
    """Tests for bounding box caps."""

    def setUp(self):
        self.layout = Layout()
        self.layout.add(Placement(normalize_word("abc"), 0, 0, H))
        self.bxy = Placement(normalize_word("bxy"), 0, 1, V)

    def test_max_width(self):
        check = can_place(Layout(), Placement(normalize_word("abc"), 0, 0, H),
                          GeneratorSettings(max_width=2))

        self.assertEqual(check.rule, RejectRule.MAX_WIDTH)

    def test_max_height(self):
        check = can_place(self.layout, self.bxy, GeneratorSettings(max_height=2))

        self.assertEqual(check.rule, RejectRule.MAX_HEIGHT)

    def test_max_area(self):
        self.assertEqual(
            can_place(self.layout, self.bxy, GeneratorSettings(max_area=8)).rule,
            RejectRule.MAX_AREA
        )
        self.assertTrue(can_place(self.layout, self.bxy, GeneratorSettings(max_area=9)))

    def test_check_does_not_modify_layout(self):
        can_place(self.layout, self.bxy, GeneratorSettings())

        self.assertEqual(len(self.layout), 1)
        self.assertIsNone(self.layout.symbol_at((1, 1)))


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
"""
Test suite for view.py -- canvas-to-scene placement and sprite pooling.
Sprites are plain stand-ins, so no window is opened.
"""

import unittest

import sim
import view
from settings import *


class FakeSprite:
    """Anything with position and enabled will do for sync_pool."""

    def __init__(self):
        self.position = None
        self.enabled = None


# =============================================================================
# 1. COORDINATES
# =============================================================================

class TestToWorld(unittest.TestCase):

    def test_top_left_corner(self):
        self.assertEqual(view.to_world(0, 0), (-CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2, 0))

    def test_canvas_center_is_origin(self):
        self.assertEqual(view.to_world(CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2), (0, 0, 0))

    def test_y_grows_down_on_canvas_up_in_scene(self):
        _, high, _ = view.to_world(0, 100)
        _, low, _ = view.to_world(0, 200)
        self.assertGreater(high, low)

    def test_depth_passes_through(self):
        self.assertEqual(view.to_world(10, 10, 1.5)[2], 1.5)


# =============================================================================
# 2. SCENERY
# =============================================================================

class TestScenery(unittest.TestCase):

    def test_tree_rows_stay_on_canvas(self):
        for t in (0, 0.37, 5, 123.4):
            rows = view.tree_rows(t)
            self.assertEqual(len(rows), TREES_PER_SIDE)
            self.assertTrue(all(0 <= y < CANVAS_HEIGHT for y in rows))

    def test_trees_scroll_down(self):
        before = view.tree_rows(0)
        after = view.tree_rows(0.1)
        for a, b in zip(before, after):
            self.assertAlmostEqual(b, (a + 0.1 * TREE_SCROLL) % CANVAS_HEIGHT)

    def test_dashes_cover_the_canvas(self):
        for t in (0, 0.01, 0.2, 7.77):
            rows = view.dash_rows(t)
            self.assertEqual(len(rows), view.DASH_COUNT)
            self.assertLessEqual(rows[0], 0)
            self.assertGreaterEqual(rows[-1], CANVAS_HEIGHT)
            for a, b in zip(rows, rows[1:]):
                self.assertAlmostEqual(b - a, view.DASH_PERIOD)

    def test_dashes_scroll_down(self):
        self.assertAlmostEqual(view.dash_rows(0.1)[0] - view.dash_rows(0)[0],
                               0.1 * DASH_SCROLL)

    def test_dividers_on_lane_boundaries(self):
        road = sim.Road()
        self.assertEqual(view.divider_xs(road), [200, 280])
        self.assertEqual(len(view.divider_xs(road)), NUM_LANES - 1)


# =============================================================================
# 3. SPRITE POOLS
# =============================================================================

class TestSyncPool(unittest.TestCase):

    def test_pool_grows_to_fit(self):
        pool = []
        ents = [sim.Tire(100, 50), sim.Tire(200, 10)]
        view.sync_pool(pool, ents, FakeSprite)
        self.assertEqual(len(pool), 2)
        self.assertEqual(pool[0].position, view.to_world(100, 50, 0))
        self.assertEqual(pool[1].position, view.to_world(200, 10, 0))
        self.assertTrue(all(s.enabled for s in pool))

    def test_spare_sprites_hidden_and_reused(self):
        pool = []
        view.sync_pool(pool, [sim.Tire(0, 0), sim.Tire(0, 0), sim.Tire(0, 0)], FakeSprite)
        first = pool[0]
        view.sync_pool(pool, [sim.Tire(10, 20)], FakeSprite)
        self.assertEqual(len(pool), 3)
        self.assertIs(pool[0], first)
        self.assertTrue(pool[0].enabled)
        self.assertEqual([s.enabled for s in pool[1:]], [False, False])

    def test_empty_list_hides_everything(self):
        pool = [FakeSprite(), FakeSprite()]
        view.sync_pool(pool, [], FakeSprite)
        self.assertEqual([s.enabled for s in pool], [False, False])

    def test_pedestrian_drawn_at_progress(self):
        person = sim.Pedestrian(60, 200, 50)
        person.step(0.5, 0)
        pool = []
        view.sync_pool(pool, [person], FakeSprite, z=-.2)
        self.assertEqual(pool[0].position, view.to_world(85, 200, -.2))


if __name__ == "__main__":
    unittest.main()

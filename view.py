"""Canvas-to-scene placement for the ursina frontend.

No engine import: positions are plain (x, y, z) tuples and sprites are any
object with `position` and `enabled`, so the layout can be checked headless.
"""
from settings import *


DASH_PERIOD = DASH_LENGTH + DASH_GAP
DASH_COUNT  = CANVAS_HEIGHT // DASH_PERIOD + 3


def to_world(x, y, z=0):
    """Canvas pixel (top-left origin, y down) to the centered, y-up scene."""
    return (x - CANVAS_WIDTH / 2, CANVAS_HEIGHT / 2 - y, z)


# ---------- Scenery ----------
def tree_rows(t):
    shift = (t * TREE_SCROLL) % TREE_SPACING
    return [(i * TREE_SPACING + shift) % CANVAS_HEIGHT for i in range(TREES_PER_SIDE)]

def dash_rows(t):
    # one spare row above the canvas so dashes scroll in instead of popping
    start = -DASH_PERIOD + (t * DASH_SCROLL) % DASH_PERIOD
    return [start + i * DASH_PERIOD for i in range(DASH_COUNT)]

def divider_xs(road):
    return [road.x + road.lane_width * lane for lane in range(1, NUM_LANES)]


# ---------- Pools ----------
def sync_pool(pool, entities, factory, z=0):
    """Grow pool to fit entities, move one sprite per entity, hide the rest."""
    while len(pool) < len(entities):
        pool.append(factory())
    for sprite, ent in zip(pool, entities):
        r = ent.rect()
        sprite.position = to_world(r.x, r.y, z)
        sprite.enabled = True
    for sprite in pool[len(entities):]:
        sprite.enabled = False

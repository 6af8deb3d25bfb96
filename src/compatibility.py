# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Placement compatibility checks.

Decides whether a candidate placement may join a layout. Rules run in a
fixed order and stop at the first failure:

1. Character consistency (matching symbols, no collinear overlap,
   no repeated word, orientation lock)
2. Connectivity (must share a cell unless disconnected groups are allowed)
3. Adjacency (how non-intersecting words may touch)
4. Bounding box caps
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import GeneratorSettings
from layout import Layout
from models import Cell, Placement


class RejectRule(Enum):
    CHARACTER_CONFLICT = "character_conflict"
    COLLINEAR_OVERLAP = "collinear_overlap"
    DUPLICATE_WORD = "duplicate_word"
    ORIENTATION_LOCKED = "orientation_locked"
    DISCONNECTED = "disconnected"
    FLUSH_ADJACENCY = "flush_adjacency"
    END_TO_END = "end_to_end"
    END_TO_SIDE = "end_to_side"
    CORNER_TOUCH = "corner_touch"
    MAX_WIDTH = "max_width"
    MAX_HEIGHT = "max_height"
    MAX_AREA = "max_area"


@dataclass(frozen=True)
class PlacementCheck:
    """Outcome of a compatibility check. Advisory only."""
    accepted: bool
    rule: Optional[RejectRule] = None
    cell: Optional[Cell] = None
    other: Optional[Placement] = None

    def __bool__(self):
        return self.accepted

    @property
    def reason(self) -> str:
        if self.accepted:
            return "accepted"
        parts = [self.rule.value]
        if self.cell is not None:
            parts.append(f"at {self.cell}")
        if self.other is not None:
            parts.append(f"against {self.other.word.text!r}")
        return " ".join(parts)


ACCEPT = PlacementCheck(accepted=True)


def _reject(rule: RejectRule, cell: Optional[Cell] = None,
            other: Optional[Placement] = None) -> PlacementCheck:
    return PlacementCheck(accepted=False, rule=rule, cell=cell, other=other)


def check_adjacency(
    placed: Placement,
    candidate: Placement,
    settings: GeneratorSettings
) -> Optional[RejectRule]:
    """
    Check how two placements touch when they do not share a cell.

    Returns:
        The violated rule, or None if the pair is compatible
    """
    if settings.forbid_corner_touch and candidate.touches_corner(placed):
        return RejectRule.CORNER_TOUCH
    if settings.forbid_flush_adjacency and candidate.touches_flush(placed):
        return RejectRule.FLUSH_ADJACENCY
    if settings.forbid_end_to_end and candidate.touches_end_to_end(placed):
        return RejectRule.END_TO_END
    if settings.forbid_end_to_side and candidate.touches_end_to_side(placed):
        return RejectRule.END_TO_SIDE
    return None


def can_place(
    layout: Layout,
    candidate: Placement,
    settings: GeneratorSettings
) -> PlacementCheck:
    """
    Decide whether a candidate placement can be added to a layout.

    Args:
        layout: Current layout (not modified)
        candidate: Placement under consideration
        settings: Generator settings

    Returns:
        PlacementCheck describing acceptance or the first failed rule
    """
    word = candidate.word

    # 1. Character consistency
    if layout.has_word(word.identifier):
        return _reject(RejectRule.DUPLICATE_WORD)
    if not word.allows(candidate.orientation):
        return _reject(RejectRule.ORIENTATION_LOCKED)

    shared = 0
    for cell, symbol in candidate.symbol_cells():
        if not layout.is_occupied(cell):
            continue
        if layout.symbol_at(cell) != symbol:
            return _reject(RejectRule.CHARACTER_CONFLICT, cell=cell)
        if layout.covers(cell, candidate.orientation):
            return _reject(RejectRule.COLLINEAR_OVERLAP, cell=cell)
        shared += 1

    # 2. Connectivity
    if shared == 0 and not layout.is_empty() and not settings.allow_disconnected_groups:
        return _reject(RejectRule.DISCONNECTED)

    # 3. Adjacency
    for placed in layout.placements:
        if placed.overlaps(candidate):
            continue
        rule = check_adjacency(placed, candidate, settings)
        if rule is not None:
            return _reject(rule, other=placed)

    # 4. Bounding box
    box = layout.expanded_box(candidate)
    if settings.max_width is not None and box.width > settings.max_width:
        return _reject(RejectRule.MAX_WIDTH)
    if settings.max_height is not None and box.height > settings.max_height:
        return _reject(RejectRule.MAX_HEIGHT)
    if settings.max_area is not None and box.area > settings.max_area:
        return _reject(RejectRule.MAX_AREA)

    return ACCEPT

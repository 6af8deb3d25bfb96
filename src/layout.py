# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Live, mutable layout used during the placement search.

The layout keeps the ordered placements together with a cell -> symbol
map, the placements covering each cell and the bounding box. Every add
can be undone exactly with remove, which is what backtracking relies on.
"""

from typing import Dict, FrozenSet, Hashable, List, Optional, Set, Tuple

from models import BoundingBox, Cell, Crossword, Orientation, Placement, Symbol


class LayoutConflictError(Exception):
    """Raised when a placement would overwrite or duplicate layout content."""
    pass


class Layout:
    """In-progress arrangement of placements on the plane."""

    def __init__(self):
        self.placements: List[Placement] = []
        self.bounding_box: Optional[BoundingBox] = None
        self._cells: Dict[Cell, Symbol] = {}
        self._owners: Dict[Cell, List[Placement]] = {}
        self._placed_ids: Set[Hashable] = set()

    def __len__(self) -> int:
        return len(self.placements)

    def is_empty(self) -> bool:
        return not self.placements

    @property
    def cells(self) -> Dict[Cell, Symbol]:
        """Occupied cells. Callers must not mutate the returned mapping."""
        return self._cells

    @property
    def placed_identifiers(self) -> Set[Hashable]:
        return set(self._placed_ids)

    def is_occupied(self, cell: Cell) -> bool:
        return cell in self._cells

    def symbol_at(self, cell: Cell) -> Optional[Symbol]:
        """Symbol at the cell, or None if empty. None symbols need is_occupied."""
        return self._cells.get(cell)

    def placements_at(self, cell: Cell) -> List[Placement]:
        return list(self._owners.get(cell, ()))

    def covers(self, cell: Cell, orientation: Orientation) -> bool:
        """True if a placement with this orientation already runs through the cell."""
        return any(p.orientation is orientation for p in self._owners.get(cell, ()))

    def has_word(self, identifier: Hashable) -> bool:
        return identifier in self._placed_ids

    def expanded_box(self, placement: Placement) -> BoundingBox:
        """Bounding box the layout would have with the placement added."""
        if self.bounding_box is None:
            return BoundingBox.of_cells(placement.cells)
        return self.bounding_box.expanded_to(placement.cells)

    def add(self, placement: Placement):
        """
        Add a placement.

        Raises:
            LayoutConflictError: If the word is already placed, a cell holds
                                 a different symbol, or a cell is already
                                 covered in the same orientation
        """
        if placement.word.identifier in self._placed_ids:
            raise LayoutConflictError(
                f"Word {placement.word.text!r} is already in the layout"
            )

        for cell, symbol in placement.symbol_cells():
            if cell not in self._cells:
                continue
            existing = self._cells[cell]
            if existing != symbol:
                raise LayoutConflictError(
                    f"Cell {cell} holds {existing!r}, cannot place {symbol!r}"
                )
            if self.covers(cell, placement.orientation):
                raise LayoutConflictError(
                    f"Cell {cell} is already covered {placement.orientation.value}ly"
                )

        for cell, symbol in placement.symbol_cells():
            self._cells[cell] = symbol
            self._owners.setdefault(cell, []).append(placement)

        self.placements.append(placement)
        self._placed_ids.add(placement.word.identifier)
        self.bounding_box = self.expanded_box(placement)

    def remove(self, placement: Placement):
        """
        Remove a placement previously added, restoring the exact prior state.

        Raises:
            ValueError: If the placement is not in the layout
        """
        self.placements.remove(placement)
        self._placed_ids.discard(placement.word.identifier)

        for cell in placement.cells:
            owners = self._owners[cell]
            owners.remove(placement)
            if not owners:
                del self._owners[cell]
                del self._cells[cell]

        self.bounding_box = BoundingBox.of_cells(self._cells)

    def state_key(self) -> FrozenSet[Tuple[Hashable, int, int, Orientation]]:
        """Placement set translated so the bounding box starts at (0, 0)."""
        if self.bounding_box is None:
            return frozenset()
        min_row = self.bounding_box.min_row
        min_col = self.bounding_box.min_col
        return frozenset(
            (p.word.identifier, p.row - min_row, p.col - min_col, p.orientation)
            for p in self.placements
        )

    def snapshot(self) -> Crossword:
        """Immutable copy of the current layout."""
        return Crossword.from_placements(self.placements)

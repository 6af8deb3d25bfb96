# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Data models for the crossword layout generator.

Words are normalized into immutable symbol tuples, placed on an unbounded
integer plane as Placements, and finally frozen into Crossword snapshots
that the consumer can inspect without touching live search state.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

from crossword_view import generate_char_table, render_text

Symbol = Hashable
Cell = Tuple[int, int]


class InvalidWordError(ValueError):
    """Raised when a raw word is empty or malformed."""
    pass


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def opposite(self) -> 'Orientation':
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL

    @property
    def step(self) -> Tuple[int, int]:
        """Unit (row, col) vector along this orientation."""
        if self is Orientation.HORIZONTAL:
            return (0, 1)
        return (1, 0)

    @property
    def sort_rank(self) -> int:
        """Horizontal sorts before vertical."""
        return 0 if self is Orientation.HORIZONTAL else 1


@dataclass(frozen=True, eq=False)
class Word:
    """
    A normalized word: a non-empty symbol tuple plus an opaque identifier.

    Two words with the same identifier are the same word, whatever their
    symbols. A word may be locked to a single orientation.
    """
    symbols: Tuple[Symbol, ...]
    identifier: Hashable
    orientation: Optional[Orientation] = None

    def __hash__(self):
        return hash(self.identifier)

    def __eq__(self, other):
        if not isinstance(other, Word):
            return False
        return self.identifier == other.identifier

    def __len__(self) -> int:
        return len(self.symbols)

    @property
    def text(self) -> str:
        """Printable form of the symbols."""
        return "".join(str(symbol) for symbol in self.symbols)

    def allows(self, orientation: Orientation) -> bool:
        return self.orientation is None or self.orientation is orientation

    def indices_of(self, symbol: Symbol) -> List[int]:
        """All positions holding the given symbol."""
        return [i for i, s in enumerate(self.symbols) if s == symbol]


def normalize_word(
    raw: Any,
    identifier: Optional[Hashable] = None,
    orientation: Optional[Orientation] = None
) -> Word:
    """
    Build a Word from raw input.

    Strings are split into characters with spaces removed; case is kept.
    Any other sequence is taken as a sequence of symbols.

    Args:
        raw: Raw word (string or sequence of hashable symbols)
        identifier: Optional caller-supplied identifier. Derived from the
                    cleaned input when omitted, so identical text maps to
                    the same word.
        orientation: Optional orientation the word is locked to

    Returns:
        Normalized Word

    Raises:
        InvalidWordError: If the input is None, empty or not hashable
    """
    if raw is None:
        raise InvalidWordError("Word cannot be None")

    if isinstance(raw, str):
        cleaned = raw.strip().replace(" ", "")
        symbols: Tuple[Symbol, ...] = tuple(cleaned)
        derived_id: Hashable = cleaned
    else:
        try:
            symbols = tuple(raw)
        except TypeError:
            raise InvalidWordError(f"Word must be a sequence, got {type(raw).__name__}")
        derived_id = symbols

    if not symbols:
        raise InvalidWordError(f"Word cannot be empty: {raw!r}")

    try:
        for symbol in symbols:
            hash(symbol)
    except TypeError:
        raise InvalidWordError(f"Word symbols must be hashable: {raw!r}")

    if identifier is None:
        identifier = derived_id
    else:
        try:
            hash(identifier)
        except TypeError:
            raise InvalidWordError(f"Word identifier must be hashable: {identifier!r}")

    if orientation is not None and not isinstance(orientation, Orientation):
        orientation = Orientation(orientation)

    return Word(symbols=symbols, identifier=identifier, orientation=orientation)


def normalize_words(raws: Iterable[Any]) -> List[Word]:
    """
    Normalize a collection of raw words.

    Words already normalized pass through. Only the first occurrence of
    each identifier is kept.
    """
    words: List[Word] = []
    seen = set()
    for raw in raws:
        word = raw if isinstance(raw, Word) else normalize_word(raw)
        if word.identifier in seen:
            continue
        seen.add(word.identifier)
        words.append(word)
    return words


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive bounds of a set of occupied cells."""
    min_row: int
    min_col: int
    max_row: int
    max_col: int

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1

    @property
    def height(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    @classmethod
    def of_cells(cls, cells: Iterable[Cell]) -> Optional['BoundingBox']:
        """Bounding box of the given cells, None if there are none."""
        box = None
        for cell in cells:
            box = cls(cell[0], cell[1], cell[0], cell[1]) if box is None else box.expanded_to([cell])
        return box

    def expanded_to(self, cells: Iterable[Cell]) -> 'BoundingBox':
        min_row, min_col, max_row, max_col = self.min_row, self.min_col, self.max_row, self.max_col
        for row, col in cells:
            min_row = min(min_row, row)
            min_col = min(min_col, col)
            max_row = max(max_row, row)
            max_col = max(max_col, col)
        return BoundingBox(min_row, min_col, max_row, max_col)


@dataclass(frozen=True)
class Placement:
    """A word placed at an origin cell with an orientation."""
    word: Word
    row: int
    col: int
    orientation: Orientation

    @property
    def cells(self) -> List[Cell]:
        """All cell positions this placement occupies."""
        d_row, d_col = self.orientation.step
        return [(self.row + i * d_row, self.col + i * d_col) for i in range(len(self.word))]

    def symbol_cells(self) -> List[Tuple[Cell, Symbol]]:
        return list(zip(self.cells, self.word.symbols))

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        return (self.row, self.col, self.orientation.sort_rank)

    def translated(self, d_row: int, d_col: int) -> 'Placement':
        return Placement(self.word, self.row + d_row, self.col + d_col, self.orientation)

    # Edges of the half-open box covering this placement.

    def _edges(self) -> Tuple[int, int, int, int]:
        length = len(self.word)
        if self.orientation is Orientation.HORIZONTAL:
            return (self.row, self.col, self.row + 1, self.col + length)
        return (self.row, self.col, self.row + length, self.col + 1)

    def _parallel_coordinate(self) -> int:
        return self.row if self.orientation is Orientation.HORIZONTAL else self.col

    def overlaps(self, other: 'Placement') -> bool:
        top, left, bottom, right = self._edges()
        o_top, o_left, o_bottom, o_right = other._edges()
        return left < o_right and o_left < right and top < o_bottom and o_top < bottom

    def _sides_touch(self, other: 'Placement') -> bool:
        top, left, bottom, right = self._edges()
        o_top, o_left, o_bottom, o_right = other._edges()
        rows_meet = bottom == o_top or o_bottom == top
        cols_meet = right == o_left or o_right == left
        cols_overlap = left < o_right and o_left < right
        rows_overlap = top < o_bottom and o_top < bottom
        return (cols_overlap and rows_meet) or (rows_overlap and cols_meet)

    def touches_corner(self, other: 'Placement') -> bool:
        """True if the two placements meet only diagonally at a corner."""
        top, left, bottom, right = self._edges()
        o_top, o_left, o_bottom, o_right = other._edges()
        return (left == o_right or right == o_left) and (top == o_bottom or bottom == o_top)

    def touches_flush(self, other: 'Placement') -> bool:
        """Parallel words running side by side on neighbouring lines."""
        return (self.orientation is other.orientation
                and self._sides_touch(other)
                and self._parallel_coordinate() != other._parallel_coordinate())

    def touches_end_to_end(self, other: 'Placement') -> bool:
        """Collinear words whose ends meet."""
        return (self.orientation is other.orientation
                and self._sides_touch(other)
                and self._parallel_coordinate() == other._parallel_coordinate())

    def touches_end_to_side(self, other: 'Placement') -> bool:
        """Perpendicular words where one end rests against the other's side."""
        return self.orientation is not other.orientation and self._sides_touch(other)


@dataclass(frozen=True)
class Crossword:
    """
    An accepted layout, translated so its bounding box starts at (0, 0).

    Crosswords are immutable snapshots; they never share structures with
    the search that produced them. `cells` is a read-only view.
    """
    placements: Tuple[Placement, ...]
    width: int
    height: int
    cells: Mapping[Cell, Symbol] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    @classmethod
    def from_placements(cls, placements: Sequence[Placement]) -> 'Crossword':
        """Snapshot placements, normalized so the minimum corner is (0, 0)."""
        if not placements:
            return cls(placements=(), width=0, height=0)

        box = BoundingBox.of_cells(cell for p in placements for cell in p.cells)
        shifted = tuple(p.translated(-box.min_row, -box.min_col) for p in placements)
        cells: Dict[Cell, Symbol] = {}
        for placement in shifted:
            for cell, symbol in placement.symbol_cells():
                cells[cell] = symbol
        return cls(placements=shifted, width=box.width, height=box.height,
                   cells=MappingProxyType(cells))

    @property
    def word_count(self) -> int:
        return len(self.placements)

    @property
    def identifiers(self) -> List[Hashable]:
        """Identifiers of the placed words, in placement order."""
        return [p.word.identifier for p in self.placements]

    @property
    def canonical_key(self) -> FrozenSet[Tuple[Cell, Symbol]]:
        """Translation-independent content key used for de-duplication."""
        return frozenset(self.cells.items())

    def find_placement(self, identifier: Hashable) -> Optional[Placement]:
        for placement in self.placements:
            if placement.word.identifier == identifier:
                return placement
        return None

    def contains(self, other: 'Crossword') -> bool:
        """
        Check whether another crossword appears inside this one.

        Every word of `other` must be present here with the same
        orientation and the same offset relative to its position in
        `other`.
        """
        if other.word_count > self.word_count:
            return False
        offset = None
        for other_placement in other.placements:
            mine = self.find_placement(other_placement.word.identifier)
            if mine is None or mine.orientation is not other_placement.orientation:
                return False
            delta = (mine.row - other_placement.row, mine.col - other_placement.col)
            if offset is None:
                offset = delta
            elif offset != delta:
                return False
        return True

    def is_connected(self) -> bool:
        """Check if all placements form one component through shared cells."""
        if not self.placements:
            return True

        owners: Dict[Cell, List[int]] = {}
        for index, placement in enumerate(self.placements):
            for cell in placement.cells:
                owners.setdefault(cell, []).append(index)

        visited = {0}
        queue = deque([0])
        while queue:
            index = queue.popleft()
            for cell in self.placements[index].cells:
                for neighbour in owners[cell]:
                    if neighbour not in visited:
                        visited.add(neighbour)
                        queue.append(neighbour)

        return len(visited) == len(self.placements)

    def generate_char_table(self, empty: Any = None) -> List[List[Any]]:
        return generate_char_table(self, empty=empty)

    def to_string(self, empty: str = ".", separator: str = " ") -> str:
        return render_text(self, empty=empty, separator=separator)

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation for export."""
        return {
            'width': self.width,
            'height': self.height,
            'words': [
                {
                    'identifier': p.word.identifier if isinstance(p.word.identifier, (str, int)) else str(p.word.identifier),
                    'text': p.word.text,
                    'row': p.row,
                    'col': p.col,
                    'orientation': p.orientation.value,
                }
                for p in self.placements
            ],
            'grid': self.to_string(empty=".", separator="").split("\n"),
        }

# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Backtracking placement search.

Enumerates distinct crossword layouts of a word list. The search runs on
an explicit stack of SearchFrames instead of recursion so it can stop
after any accepted layout and pick up exactly where it left off.

Each frame holds the candidate placements computed for its depth and the
index of the next one to try. Trying a candidate applies it to the live
layout; moving on (or popping the frame) removes it again.
"""

import logging
import random
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Set

from compatibility import can_place
from config import GeneratorSettings
from layout import Layout
from models import Crossword, Orientation, Placement, Word, normalize_word


class SearchAbortedError(Exception):
    """Raised at construction when the settings cannot be satisfied."""

    def __init__(self, reasons: List[str]):
        self.reasons = list(reasons)
        super().__init__(
            "Search aborted: " + "; ".join(self.reasons)
        )


@dataclass
class SearchFrame:
    """One level of backtracking state."""
    candidates: List[Placement]
    index: int = 0
    applied: Optional[Placement] = None

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self.candidates)


@dataclass
class SearchStats:
    placements_tried: int = 0
    backtracks: int = 0
    states_pruned: int = 0
    duplicates_skipped: int = 0
    crosswords_found: int = 0
    explored_resets: int = 0
    rejections: Dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'placements_tried': self.placements_tried,
            'backtracks': self.backtracks,
            'states_pruned': self.states_pruned,
            'duplicates_skipped': self.duplicates_skipped,
            'crosswords_found': self.crosswords_found,
            'explored_resets': self.explored_resets,
            'rejections': dict(self.rejections),
        }


class PlacementSearch:
    """
    Demand-driven backtracking search over word placements.

    Usage:
        search = PlacementSearch(words, GeneratorSettings())
        crossword = search.next_crossword()   # None once exhausted

    The first word placed is always at (0, 0), horizontal unless the word
    is locked vertical or too wide for the width cap. Later words must cross the structure (unless
    disconnected groups are allowed). Partial states reached through a
    different word order are explored only once, and layouts that are
    translations of an earlier result are never returned twice.
    """

    def __init__(
        self,
        words: Sequence[Any],
        settings: Optional[GeneratorSettings] = None
    ):
        """
        Initialize the search.

        Args:
            words: Normalized Words (raw words are normalized on the way in)
            settings: Generator settings (defaults if None)

        Raises:
            SearchAbortedError: If the settings are statically unsatisfiable
            InvalidWordError: If a raw word cannot be normalized
        """
        self.logger = logging.getLogger(__name__)
        self.settings = settings if settings is not None else GeneratorSettings()

        self.words: List[Word] = self._order_words(self._dedupe(words))
        self._check_satisfiable()

        self.layout = Layout()
        self.frames: List[SearchFrame] = []
        self._started = False
        self._exhausted = False
        self._explored: Set[FrozenSet] = set()
        self._yielded: Set[FrozenSet] = set()
        self._stats = SearchStats()

        self.logger.info(
            f"Placement search ready: {len(self.words)} words, "
            f"order={self.settings.word_order}, "
            f"require_all_words={self.settings.require_all_words}"
        )

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def stats(self) -> Dict[str, Any]:
        return self._stats.to_dict()

    def _dedupe(self, words: Sequence[Any]) -> List[Word]:
        """Normalize words and drop repeated identifiers (first wins)."""
        unique: List[Word] = []
        seen = set()
        for raw in words:
            word = raw if isinstance(raw, Word) else normalize_word(raw)
            if word.identifier in seen:
                self.logger.warning(f"Dropping duplicate word: {word.text!r}")
                continue
            seen.add(word.identifier)
            unique.append(word)
        return unique

    def _order_words(self, words: List[Word]) -> List[Word]:
        """Apply the configured, deterministic word order."""
        order = self.settings.word_order
        if order == "longest_first":
            return sorted(words, key=lambda w: -len(w))
        if order == "shuffled":
            shuffled = list(words)
            random.Random(self.settings.shuffle_seed).shuffle(shuffled)
            return shuffled
        return list(words)

    def _fits(self, word: Word) -> bool:
        """Whether a word fits the size caps in some allowed orientation."""
        settings = self.settings
        if settings.max_area is not None and len(word) > settings.max_area:
            return False
        horizontal = (word.allows(Orientation.HORIZONTAL) and
                      (settings.max_width is None or len(word) <= settings.max_width))
        vertical = (word.allows(Orientation.VERTICAL) and
                    (settings.max_height is None or len(word) <= settings.max_height))
        return horizontal or vertical

    def _check_satisfiable(self):
        """Reject settings that can never produce a layout."""
        reasons = self.settings.validate()
        word_count = len(self.words)

        if not reasons:
            if self.settings.min_words_used > word_count:
                reasons.append(
                    f"min_words_used ({self.settings.min_words_used}) exceeds "
                    f"the number of words ({word_count})"
                )
            if self.settings.require_all_words:
                if word_count == 0:
                    reasons.append("require_all_words is set but no words were supplied")
                too_long = [w.text for w in self.words if not self._fits(w)]
                if too_long:
                    reasons.append(
                        f"Words do not fit the size limits: {', '.join(too_long)}"
                    )

        if reasons:
            for reason in reasons:
                self.logger.error(f"Search aborted: {reason}")
            raise SearchAbortedError(reasons)

    def _filter(self, candidates: List[Placement]) -> List[Placement]:
        """Keep candidates the compatibility checker accepts."""
        accepted = []
        for candidate in candidates:
            check = can_place(self.layout, candidate, self.settings)
            if check.accepted:
                accepted.append(candidate)
            else:
                self._stats.rejections[check.rule.value] += 1
        return accepted

    def _seed_candidates(self) -> List[Placement]:
        """Each word at the origin, in word order.

        Horizontal is preferred; a word only falls back to vertical when it
        is locked vertical or too wide for the width cap.
        """
        seeds = []
        for word in self.words:
            for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                if not word.allows(orientation):
                    continue
                accepted = self._filter([Placement(word, 0, 0, orientation)])
                if accepted:
                    seeds.extend(accepted)
                    break
        return seeds

    def _crossing_placements(self, word: Word) -> List[Placement]:
        """Every placement of the word sharing a matching symbol with the layout."""
        found = set()
        for cell, symbol in self.layout.cells.items():
            for index in word.indices_of(symbol):
                for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                    if not word.allows(orientation) or self.layout.covers(cell, orientation):
                        continue
                    d_row, d_col = orientation.step
                    found.add(Placement(
                        word,
                        cell[0] - index * d_row,
                        cell[1] - index * d_col,
                        orientation,
                    ))
        return sorted(found, key=lambda p: p.sort_key)

    def _detached_placements(self, word: Word) -> List[Placement]:
        """Placements one blank line away from the layout's bounding box."""
        box = self.layout.bounding_box
        detached = []
        if word.allows(Orientation.HORIZONTAL):
            detached.append(Placement(word, box.max_row + 2, box.min_col, Orientation.HORIZONTAL))
        if word.allows(Orientation.VERTICAL):
            detached.append(Placement(word, box.min_row, box.max_col + 2, Orientation.VERTICAL))
        return detached

    def _child_candidates(self) -> List[Placement]:
        """Candidates for the next depth, over every word not yet placed."""
        candidates = []
        for word in self.words:
            if self.layout.has_word(word.identifier):
                continue
            options = self._crossing_placements(word)
            if self.settings.allow_disconnected_groups:
                options.extend(self._detached_placements(word))
            candidates.extend(self._filter(options))
        return candidates

    def _remember(self, key: FrozenSet):
        """Record an explored state, starting over once the limit is reached.

        Results found again after a reset are dropped by _accept.
        """
        limit = self.settings.explored_state_limit
        if limit is not None and len(self._explored) >= limit:
            self.logger.debug(f"Explored-state limit {limit} reached, clearing")
            self._explored.clear()
            self._stats.explored_resets += 1
        self._explored.add(key)

    def _accept(self) -> Optional[Crossword]:
        """Snapshot the layout unless an equivalent one was already returned."""
        crossword = self.layout.snapshot()
        key = crossword.canonical_key
        if key in self._yielded:
            self._stats.duplicates_skipped += 1
            return None
        self._yielded.add(key)
        self._stats.crosswords_found += 1
        self.logger.debug(
            f"Accepted crossword #{self._stats.crosswords_found}: "
            f"{crossword.word_count} words, {crossword.width}x{crossword.height}"
        )
        return crossword

    def _descend(self) -> Optional[Crossword]:
        """Handle a freshly applied candidate: accept it or open a child frame."""
        if len(self.layout) == len(self.words):
            return self._accept()

        children = self._child_candidates()
        if children:
            self.frames.append(SearchFrame(children))
            return None

        if (not self.settings.require_all_words and
                len(self.layout) >= self.settings.min_words_used):
            return self._accept()

        return None

    def next_crossword(self) -> Optional[Crossword]:
        """
        Run the search until the next accepted crossword.

        Returns:
            The next distinct crossword, or None once the search space is
            exhausted. Calling again after exhaustion keeps returning None.
        """
        if self._exhausted:
            return None

        if not self._started:
            self._started = True
            self.frames.append(SearchFrame(self._seed_candidates()))

        while self.frames:
            frame = self.frames[-1]

            # Undo whatever this frame applied last time round
            if frame.applied is not None:
                self.layout.remove(frame.applied)
                frame.applied = None

            if frame.exhausted:
                self.frames.pop()
                self._stats.backtracks += 1
                continue

            candidate = frame.candidates[frame.index]
            frame.index += 1
            self.layout.add(candidate)
            frame.applied = candidate
            self._stats.placements_tried += 1

            key = self.layout.state_key()
            if key in self._explored:
                self._stats.states_pruned += 1
                continue
            self._remember(key)

            crossword = self._descend()
            if crossword is not None:
                return crossword

        self._exhausted = True
        self.logger.info(
            f"Placement search exhausted: {self._stats.crosswords_found} crosswords, "
            f"{self._stats.placements_tried} placements tried, "
            f"{self._stats.backtracks} backtracks"
        )
        return None

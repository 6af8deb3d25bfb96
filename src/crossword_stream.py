# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Demand-driven access to the placement search.

A CrosswordStream owns one PlacementSearch and only advances it when the
consumer asks for more crosswords. Between requests the search does no
work; its frame stack simply waits for the next call.

Usage:
    stream = CrosswordStream(["hello", "world", "foo", "raw"])

    first, exhausted = stream.request(1)
    rest, exhausted = stream.request(ALL)
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Union

from config import GeneratorSettings
from models import Crossword, Word
from placement_search import PlacementSearch


class RequestAll(Enum):
    ALL = "all"


ALL = RequestAll.ALL

RequestCount = Union[int, RequestAll]


class RequestResult(NamedTuple):
    """Crosswords delivered by one request and whether the search is done."""
    crosswords: List[Crossword]
    exhausted: bool


class CrosswordStream:
    """
    Suspend/resume controller around a PlacementSearch.

    Each request resumes the search where the previous one stopped. Asking
    for n then m crosswords yields the same sequence as asking for n + m.
    Dropping the stream at any point simply discards the search state.
    """

    def __init__(
        self,
        words: Sequence[Any],
        settings: Optional[GeneratorSettings] = None
    ):
        """
        Start a generation session.

        Args:
            words: Words to arrange (Words or raw words)
            settings: Generator settings, fixed for the session

        Raises:
            SearchAbortedError: If the settings are statically unsatisfiable
            InvalidWordError: If a raw word cannot be normalized
        """
        self.logger = logging.getLogger(__name__)
        self._search = PlacementSearch(words, settings)
        self._delivered = 0
        self._requests = 0

    @property
    def words(self) -> List[Word]:
        return list(self._search.words)

    @property
    def settings(self) -> GeneratorSettings:
        return self._search.settings

    @property
    def exhausted(self) -> bool:
        return self._search.exhausted

    @property
    def delivered(self) -> int:
        """Total crosswords handed out by this stream."""
        return self._delivered

    @property
    def stats(self) -> Dict[str, Any]:
        stats = self._search.stats
        stats['requests'] = self._requests
        stats['delivered'] = self._delivered
        return stats

    @staticmethod
    def _limit(count: RequestCount) -> Optional[int]:
        """Translate a request count into a batch limit (None for all)."""
        if count is ALL:
            return None
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"count must be a positive integer or ALL, got {count!r}")
        if count < 1:
            raise ValueError(f"count must be a positive integer, got {count}")
        return count

    def request(self, count: RequestCount = 1) -> RequestResult:
        """
        Pull the next batch of crosswords.

        Args:
            count: Number of crosswords wanted, or ALL to run to exhaustion

        Returns:
            RequestResult with up to `count` new crosswords and the
            exhaustion flag. After exhaustion the batch is always empty.

        Raises:
            TypeError: If count is neither an int nor ALL
            ValueError: If count is not positive
        """
        limit = self._limit(count)
        self._requests += 1

        batch: List[Crossword] = []
        while limit is None or len(batch) < limit:
            crossword = self._search.next_crossword()
            if crossword is None:
                break
            batch.append(crossword)

        self._delivered += len(batch)
        self.logger.debug(
            f"Request {self._requests} ({'all' if limit is None else limit}): "
            f"delivered {len(batch)}, exhausted={self._search.exhausted}"
        )
        return RequestResult(crosswords=batch, exhausted=self._search.exhausted)

    def __iter__(self) -> Iterator[Crossword]:
        """Yield crosswords lazily, one request at a time."""
        while True:
            result = self.request(1)
            if not result.crosswords:
                return
            yield result.crosswords[0]

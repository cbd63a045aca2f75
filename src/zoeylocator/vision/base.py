"""Matcher interface definition."""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ..model import MatchMethod, MatchResult


class BaseMatcher(ABC):
    """Interface for a single matching strategy.

    Implementations never return a result whose confidence is below
    ``threshold``; numeric trouble inside a strategy is reported as ``None``.
    Only :class:`~zoeylocator.vision_exceptions.SizeMismatchError` escapes.
    """

    method: MatchMethod

    def __init__(self, threshold: float = 0.8) -> None:
        self.threshold = threshold

    @abstractmethod
    def find_best(
        self, query: np.ndarray[Any, Any], source: np.ndarray[Any, Any]
    ) -> MatchResult | None:
        """Find the best occurrence of ``query`` in ``source``.

        Args:
            query: Query image (BGR array)
            source: Source image (BGR array)

        Returns:
            MatchResult in source pixel coordinates, or None

        Raises:
            SizeMismatchError: If the query is larger than the source
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(threshold={self.threshold})"

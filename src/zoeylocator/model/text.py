"""OCR output and fuzzy text search results."""

from dataclasses import dataclass
from enum import Enum

from .geometry import Point, Quad


class MatchTier(str, Enum):
    """Which fuzzy-matching rule accepted a text."""

    EXACT = "exact"
    CONTAINS = "contains"
    SIMILAR = "similar"


@dataclass(frozen=True)
class OCRResult:
    """One recognized text box as reported by an OCR engine."""

    text: str
    confidence: float
    quad: Quad

    @property
    def position(self) -> Point:
        return self.quad.center()


@dataclass(frozen=True)
class TextMatch:
    """A recognized text accepted by the fuzzy matcher.

    Attributes:
        text: Text as recognized by the engine
        confidence: Engine confidence for the text box
        position: Centre of the text box
        quad: Corners of the text box
        similarity: Normalized similarity to the search target
        tier: Rule that accepted the text
    """

    text: str
    confidence: float
    position: Point
    quad: Quad
    similarity: float = 1.0
    tier: MatchTier = MatchTier.EXACT

    @classmethod
    def from_ocr(cls, result: OCRResult, similarity: float, tier: MatchTier) -> "TextMatch":
        return cls(
            text=result.text,
            confidence=result.confidence,
            position=result.position,
            quad=result.quad,
            similarity=similarity,
            tier=tier,
        )

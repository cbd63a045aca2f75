"""OCR consumption and fuzzy text matching."""

from .recognizer import TextRecognizer
from .text_matcher import (
    DEFAULT_SIMILARITY_THRESHOLD,
    find_all_texts,
    find_best_text,
    levenshtein_distance,
    similarity,
)

__all__ = [
    "TextRecognizer",
    "find_best_text",
    "find_all_texts",
    "levenshtein_distance",
    "similarity",
    "DEFAULT_SIMILARITY_THRESHOLD",
]

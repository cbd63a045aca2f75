"""Tiered fuzzy matching over OCR output.

Rules are tried in priority order, first hit wins:

1. exact: case-insensitive equality
2. contains: case-insensitive containment either way, only when the
   shorter string has at least 2 characters
3. similar: best normalized Levenshtein similarity across the whole result
   set, if it clears the threshold
"""

from collections.abc import Iterable

from rapidfuzz.distance import Levenshtein

from ..model import MatchTier, OCRResult, TextMatch

DEFAULT_SIMILARITY_THRESHOLD = 0.8
MIN_CONTAINMENT_LENGTH = 2


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance over Unicode code points."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Normalized similarity ``1 - distance / max_len``.

    1.0 for identical strings (including two empty ones), 0.0 when exactly
    one is empty.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))


def match_tier(text: str, target: str, threshold: float) -> tuple[MatchTier, float] | None:
    """Classify one candidate against the target (both already lowercased)."""
    if not text or not target:
        return None
    if text == target:
        return MatchTier.EXACT, 1.0
    shorter = min(len(text), len(target))
    if shorter >= MIN_CONTAINMENT_LENGTH and (target in text or text in target):
        return MatchTier.CONTAINS, similarity(text, target)
    score = similarity(text, target)
    if score >= threshold:
        return MatchTier.SIMILAR, score
    return None


def find_best_text(
    results: Iterable[OCRResult],
    target: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> TextMatch | None:
    """Pick the OCR result matching ``target`` under the tiered rules.

    Exact and containment hits return immediately in result order; the
    similarity tier scans every result and keeps the highest score.
    Empty OCR texts are skipped and an empty target never matches.
    """
    needle = target.lower()
    if not needle:
        return None

    best: OCRResult | None = None
    best_score = -1.0

    for result in results:
        text = result.text.lower()
        if not text:
            continue

        if text == needle:
            return TextMatch.from_ocr(result, 1.0, MatchTier.EXACT)

        shorter = min(len(text), len(needle))
        if shorter >= MIN_CONTAINMENT_LENGTH and (needle in text or text in needle):
            return TextMatch.from_ocr(result, similarity(text, needle), MatchTier.CONTAINS)

        score = similarity(text, needle)
        if score >= threshold and score > best_score:
            best, best_score = result, score

    if best is None:
        return None
    return TextMatch.from_ocr(best, best_score, MatchTier.SIMILAR)


def find_all_texts(
    results: Iterable[OCRResult],
    target: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[TextMatch]:
    """Every result accepted by any tier, best tier first, then by similarity."""
    needle = target.lower()
    order = {MatchTier.EXACT: 0, MatchTier.CONTAINS: 1, MatchTier.SIMILAR: 2}

    matches = []
    for result in results:
        classified = match_tier(result.text.lower(), needle, threshold)
        if classified is not None:
            tier, score = classified
            matches.append(TextMatch.from_ocr(result, score, tier))

    matches.sort(key=lambda m: (order[m.tier], -m.similarity))
    return matches

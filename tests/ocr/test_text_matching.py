"""Tests for tiered fuzzy text matching."""

import pytest
from conftest import ocr_box

from zoeylocator.model import MatchTier, Point
from zoeylocator.ocr import find_all_texts, find_best_text, levenshtein_distance, similarity
from zoeylocator.ocr.text_matcher import match_tier


class TestSimilarity:
    def test_identical_strings(self) -> None:
        assert similarity("Submit", "Submit") == 1.0
        assert similarity("", "") == 1.0

    def test_one_empty_string(self) -> None:
        assert similarity("abc", "") == 0.0
        assert similarity("", "abc") == 0.0

    def test_unrelated_short_strings_fall_below_default(self) -> None:
        assert similarity("cat", "dog") < 0.8
        assert similarity("ok", "no") < 0.8

    def test_normalized_by_longer_string(self) -> None:
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_counts_code_points_not_bytes(self) -> None:
        assert levenshtein_distance("café", "cafe") == 1
        assert levenshtein_distance("日本語", "日本") == 1
        assert similarity("日本語", "日本") == pytest.approx(1 - 1 / 3)


class TestFindBestText:
    def test_exact_match_ignores_case(self) -> None:
        results = [ocr_box("Cancel", 0, 0, 40, 10), ocr_box("SUBMIT", 100, 0, 40, 10)]
        match = find_best_text(results, "submit")
        assert match is not None
        assert match.tier is MatchTier.EXACT
        assert match.text == "SUBMIT"
        assert match.position == Point(120, 5)
        assert match.similarity == 1.0

    def test_containment_either_direction(self) -> None:
        longer = find_best_text([ocr_box("Submit form", 0, 0, 80, 10)], "submit")
        shorter = find_best_text([ocr_box("Save", 0, 0, 30, 10)], "Save changes")

        assert longer is not None and longer.tier is MatchTier.CONTAINS
        assert shorter is not None and shorter.tier is MatchTier.CONTAINS

    def test_single_character_containment_ignored(self) -> None:
        assert find_best_text([ocr_box("x", 0, 0, 5, 5)], "Exit") is None
        assert find_best_text([ocr_box("Exit", 0, 0, 20, 5)], "x") is None

    def test_two_character_containment_accepted(self) -> None:
        match = find_best_text([ocr_box("OK button", 0, 0, 50, 10)], "ok")
        assert match is not None
        assert match.tier is MatchTier.CONTAINS

    def test_first_hit_in_result_order_wins(self) -> None:
        results = [ocr_box("Settings menu", 0, 0, 80, 10), ocr_box("settings", 0, 20, 50, 10)]
        match = find_best_text(results, "Settings")
        assert match is not None
        assert match.tier is MatchTier.CONTAINS
        assert match.text == "Settings menu"

    def test_similarity_scans_whole_result_set(self) -> None:
        results = [
            ocr_box("Prefxrxnces", 0, 0, 60, 10),
            ocr_box("Preferencex", 0, 20, 60, 10),
            ocr_box("Prxferxncxs", 0, 40, 60, 10),
        ]
        match = find_best_text(results, "Preferences")
        assert match is not None
        assert match.tier is MatchTier.SIMILAR
        assert match.text == "Preferencex"
        assert match.similarity == pytest.approx(1 - 1 / 11)
        assert match.position == Point(30, 25)

    def test_below_threshold_is_no_match(self) -> None:
        assert find_best_text([ocr_box("Help", 0, 0, 20, 10)], "Quit") is None

    def test_threshold_is_configurable(self) -> None:
        results = [ocr_box("Opem", 0, 0, 20, 10)]
        assert find_best_text(results, "Open") is None
        assert find_best_text(results, "Open", threshold=0.7) is not None

    def test_empty_texts_and_target(self) -> None:
        assert find_best_text([ocr_box("", 0, 0, 1, 1)], "anything") is None
        assert find_best_text([ocr_box("Label", 0, 0, 1, 1)], "") is None
        assert find_best_text([], "Label") is None


class TestFindAllTexts:
    def test_orders_by_tier_then_similarity(self) -> None:
        results = [
            ocr_box("Fiel", 0, 0, 10, 10),
            ocr_box("File menu", 0, 20, 10, 10),
            ocr_box("file", 0, 40, 10, 10),
            ocr_box("Unrelated", 0, 60, 10, 10),
        ]

        matches = find_all_texts(results, "File", threshold=0.5)

        assert [m.text for m in matches] == ["file", "File menu", "Fiel"]
        assert [m.tier for m in matches] == [MatchTier.EXACT, MatchTier.CONTAINS, MatchTier.SIMILAR]

    def test_match_tier_classification(self) -> None:
        assert match_tier("abc", "abc", 0.8) == (MatchTier.EXACT, 1.0)
        assert match_tier("", "abc", 0.8) is None
        assert match_tier("xyz", "abc", 0.8) is None

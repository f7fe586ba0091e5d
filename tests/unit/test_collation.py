"""Unit tests for French collation helpers."""

import pytest

from internat.utils.collation import french_sort_key, sort_french, strip_accents


@pytest.mark.unit
class TestCollation:
    """Tests for strip_accents() and sort_french()."""

    def test_strip_accents(self):
        assert strip_accents("Besançon") == "Besancon"
        assert strip_accents("Saint-Étienne") == "Saint-Etienne"

    def test_accented_letter_sorts_with_base_letter(self):
        assert sort_french(["Évreux", "Fréjus", "Dijon"]) == ["Dijon", "Évreux", "Fréjus"]

    def test_case_is_ignored(self):
        assert sort_french(["brest", "Angers", "Caen"]) == ["Angers", "brest", "Caen"]

    def test_hyphen_is_ignored_at_primary_level(self):
        assert french_sort_key("Saint-Étienne")[0] == "saintetienne"

    def test_ties_are_deterministic(self):
        assert sort_french(["Besançon", "Besancon"]) == sort_french(["Besancon", "Besançon"])

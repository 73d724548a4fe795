"""Tests for the rule-based gender heuristic."""
import pytest

from gender_analyzer.heuristic import heuristic_gender, predict_gender_simple


class TestHeuristicGender:
    """Tests for heuristic_gender function."""

    def test_known_male_name(self):
        assert heuristic_gender("John") == ("male", 85)

    def test_known_female_name(self):
        assert heuristic_gender("Mary") == ("female", 85)

    def test_unknown_name(self):
        assert heuristic_gender("Xyzzy") == ("unknown", 50)

    def test_female_suffix_rule(self):
        assert heuristic_gender("Anastasia") == ("female", 60)

    @pytest.mark.parametrize("name", ["Gabriella", "Josephine", "Danielle", "Juliette"])
    def test_female_endings(self, name):
        assert heuristic_gender(name) == ("female", 60)

    @pytest.mark.parametrize("name", ["Walter", "Gordon", "Marcus", "Evander", "Ivanovich"])
    def test_male_endings(self, name):
        assert heuristic_gender(name) == ("male", 60)

    def test_case_insensitive(self):
        assert heuristic_gender("jOHN") == ("male", 85)
        assert heuristic_gender("MARIA") == ("female", 85)

    def test_table_takes_precedence_over_endings(self):
        # "alexander" ends in -ander but is listed as male at 85
        assert heuristic_gender("Alexander") == ("male", 85)
        # "patricia" ends in -ia but is listed as female at 85
        assert heuristic_gender("Patricia") == ("female", 85)

    def test_accents_ignored(self):
        assert heuristic_gender("Máría") == ("female", 85)

    def test_empty(self):
        assert heuristic_gender("") == ("unknown", 50)
        assert heuristic_gender(None) == ("unknown", 50)

    def test_deterministic(self):
        assert heuristic_gender("Kim") == heuristic_gender("Kim")


class TestPredictGenderSimple:
    """Tests for predict_gender_simple on full names."""

    def test_strips_titles(self):
        assert predict_gender_simple("Prof. Maria Rodriguez") == ("female", 85)

    def test_full_name(self):
        assert predict_gender_simple("Mr. John Smith Jr.") == ("male", 85)

    def test_unlisted_name(self):
        assert predict_gender_simple("Michael Chen") == ("male", 85)
        assert predict_gender_simple("Xyzzy Plugh") == ("unknown", 50)

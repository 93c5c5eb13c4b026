"""
Tests pour le score de similarite entre titres.

Tests couvrant:
- Egalite exacte et insensible a la casse (score 100, seul cas a 100)
- Independance de l'ordre des mots
- Regle d'inclusion pour les titres partiels
- Titres CJK compares caractere par caractere
- Entrees vides (score 0)
- Maximum sur plusieurs titres cibles
"""

import pytest

from mediashelf.services.similarity import CONTAINMENT_SCORE, MAX_FUZZY_SCORE, score, score_pair


class TestScorePair:
    """Tests de la comparaison d'un candidat a un titre."""

    def test_exact_match(self):
        assert score_pair("Inception", "Inception") == 100

    def test_case_and_surrounding_spaces_ignored(self):
        assert score_pair("  inception ", "INCEPTION") == 100

    def test_word_order_independent(self):
        """token_sort_ratio gere les mots dans le desordre, sans atteindre 100."""
        assert score_pair("Bad Breaking", "Breaking Bad") == MAX_FUZZY_SCORE

    @pytest.mark.parametrize(
        "candidate, target",
        [
            ("The Matrix", "The Matrix Reloaded"),
            ("Alien", "Alien 3"),
            ("Toy Story", "Toy Story 2"),
        ],
    )
    def test_word_subset_below_100(self, candidate, target):
        """Un sous-ensemble de mots reste proche mais jamais identique."""
        result = score_pair(candidate, target)

        assert CONTAINMENT_SCORE <= result < 100

    def test_punctuation_ignored(self):
        assert score_pair("Spider Man", "Spider-Man") == 100

    def test_containment(self):
        """Un titre inclus dans le candidat obtient au moins le score d'inclusion."""
        assert score_pair("Blade Runner", "Blade Runner 2049") >= CONTAINMENT_SCORE

    def test_short_containment_ignored(self):
        """Un seul caractere est trop court pour la regle d'inclusion."""
        assert score_pair("a", "Avatar") < CONTAINMENT_SCORE

    def test_cjk_character_level(self):
        """Les titres CJK sans espaces sont compares caractere par caractere."""
        assert score_pair("流浪地球", "流浪地球") == 100
        assert score_pair("流浪地球2", "流浪地球") >= CONTAINMENT_SCORE
        assert score_pair("流浪地球", "三体") < 50

    def test_minor_typo_scores_high(self):
        assert score_pair("Incepton", "Inception") >= 80

    def test_unrelated_titles_score_low(self):
        assert score_pair("unrelated clip", "流浪地球") == 0
        assert score_pair("unrelated clip", "The Wandering Earth") < 80

    @pytest.mark.parametrize("a, b", [("", "Inception"), ("Inception", ""), ("", ""), ("!!!", "Inception")])
    def test_empty_input_scores_zero(self, a, b):
        assert score_pair(a, b) == 0

    def test_symmetric(self):
        pairs = [("Incepton", "Inception"), ("Matrix Reloaded", "The Matrix"), ("流浪地球2", "流浪地球")]
        for a, b in pairs:
            assert score_pair(a, b) == score_pair(b, a)

    def test_bounded(self):
        for a, b in [("x", "y"), ("Inception", "Interstellar"), ("abc", "abcabc")]:
            assert 0 <= score_pair(a, b) <= 100


class TestScore:
    """Tests du meilleur score sur les titres cibles."""

    def test_max_over_targets(self):
        assert score("The Wandering Earth", ["流浪地球", "The Wandering Earth"]) == 100

    def test_no_targets(self):
        assert score("Inception", []) == 0

    def test_self_score_is_100(self):
        for title in ["Inception", "流浪地球", "Amélie", "Ocean's Eleven"]:
            assert score(title, [title]) == 100

    def test_whitespace_title_scores_100_against_itself(self):
        assert score(" ", [" "]) == 100
        assert score(" ", ["  "]) == 0

    def test_blank_targets_ignored(self):
        assert score("Inception", ["", "  ", "Inception"]) == 100

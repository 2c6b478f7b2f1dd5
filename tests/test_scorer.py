"""Tests for the English plausibility scorer."""

import math

import pytest

from cipherbreaker.services.pipeline.scorer import LanguageScorer, ScoringProfile


class TestLanguageScorer:
    @pytest.fixture
    def scorer(self, dictionary):
        return LanguageScorer(dictionary)

    @pytest.mark.parametrize("profile", list(ScoringProfile))
    @pytest.mark.parametrize("text", ["", "   ", "1234 !?"])
    def test_letter_free_text_scores_negative_infinity(self, scorer, profile, text):
        assert scorer.score(text, profile) == -math.inf

    def test_classical_caesar_profile(self, scorer):
        assert scorer.score("HELLO WORLD", ScoringProfile.CAESAR) == pytest.approx(-1.0764)

    def test_classical_rail_fence_profile(self, scorer):
        assert scorer.score("THE SECRET MEETING", ScoringProfile.RAIL_FENCE) == pytest.approx(7.4932)

    def test_vigenere_profile(self, scorer):
        assert scorer.score("THE SECRET MEETING", ScoringProfile.VIGENERE) == pytest.approx(298.08)

    def test_case_insensitive(self, scorer):
        for profile in ScoringProfile:
            assert scorer.score("the secret meeting", profile) == pytest.approx(
                scorer.score("THE SECRET MEETING", profile)
            )

    def test_english_beats_shifted_english(self, scorer, people_text):
        shifted = "".join(
            chr((ord(c) - 65 + 7) % 26 + 65) if c.isalpha() else c for c in people_text
        )
        for profile in ScoringProfile:
            assert scorer.score(people_text, profile) > scorer.score(shifted, profile)

    def test_rail_fence_whitespace_bonus(self, scorer):
        spaced = scorer.score("THE CAT", ScoringProfile.RAIL_FENCE)
        joined = scorer.score("THECAT", ScoringProfile.RAIL_FENCE)
        assert spaced != joined

    def test_bigram_fraction(self, scorer):
        assert scorer.bigram_fraction("THE") == 1.0
        assert scorer.bigram_fraction("QZX") == 0.0
        assert scorer.bigram_fraction("A") == 0.0

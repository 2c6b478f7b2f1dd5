"""Tests for dictionary word validation."""

import pytest

from cipherbreaker.services.pipeline.validator import Validation, WordValidator


class TestWordValidator:
    @pytest.fixture
    def validator(self, dictionary):
        return WordValidator(dictionary)

    def test_all_words_valid(self, validator):
        result = validator.validate("The secret, meeting!")
        assert result.valid_word_fraction == 1.0
        assert result.is_valid
        assert result.invalid_words == ()

    def test_invalid_words_kept_in_order(self, validator):
        result = validator.validate("THE XYZZY PLAN QWERT")
        assert result.valid_word_fraction == 0.5
        assert not result.is_valid
        assert result.invalid_words == ("XYZZY", "QWERT")

    def test_punctuation_token_counts_towards_total(self, validator):
        result = validator.validate("THE - SECRET")
        assert result.valid_word_fraction == pytest.approx(2 / 3)
        assert result.invalid_words == ()

    def test_common_words_always_valid(self, validator):
        # "HE" and "SHE" are only in the curated common-word list
        assert validator.validate("HE SHE").valid_word_fraction == 1.0

    def test_empty_text(self, validator):
        assert validator.validate("").valid_word_fraction == 0.0
        assert validator.validate("   ").valid_word_fraction == 0.0

    def test_threshold(self):
        assert Validation(0.9).is_valid
        assert not Validation(0.89).is_valid
        assert Validation(0.9).percentage == pytest.approx(90.0)

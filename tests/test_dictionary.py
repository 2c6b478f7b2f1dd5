"""Tests for the dictionary provider."""

import pytest

from cipherbreaker.services.dictionary import COMMON_WORDS, Dictionary, get_dictionary
from cipherbreaker.services.dictionary.provider import BUNDLED_WORD_LIST


class TestDictionary:
    def test_from_words_cleans_input(self):
        dictionary = Dictionary.from_words(["  lemon\n", "Key", "", "don't", "café", "x"])
        assert dictionary.words == frozenset({"LEMON", "KEY", "X"})

    def test_contains_is_case_insensitive(self, dictionary):
        assert "secret" in dictionary
        assert "SECRET" in dictionary
        assert "XYZZY" not in dictionary
        assert 42 not in dictionary

    def test_single_letters_only_valid_through_common_words(self):
        dictionary = Dictionary.from_words(["x", "lemon"])
        assert "X" not in dictionary
        assert "A" in dictionary

    def test_key_words_sorted_by_length_then_alphabet(self):
        dictionary = Dictionary.from_words(["zebra", "ox", "cat", "ant", "watermelons", "apple"])
        assert dictionary.key_words == ("ANT", "CAT", "APPLE", "ZEBRA")

    def test_refinement_words_near(self):
        dictionary = Dictionary.from_words(["lemon", "secret", "documents", "cat"])
        near = set(dictionary.refinement_words_near(6))
        assert {"LEMON", "SECRET"} <= near
        assert "DOCUMENTS" not in near
        assert "CAT" not in near

    def test_is_immutable(self, dictionary):
        with pytest.raises(AttributeError):
            dictionary.words = frozenset()

    def test_refinement_index_is_read_only(self, dictionary):
        with pytest.raises(TypeError):
            dictionary.refinement_by_length[5] = ()

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("apple\nbanana\n\ncherry\n", encoding="utf-8")

        dictionary = Dictionary.load(path)
        assert len(dictionary) == 3
        assert "BANANA" in dictionary

    def test_common_words_included(self, dictionary):
        assert dictionary.common_words == COMMON_WORDS
        assert dictionary.is_common("the")


class TestBundledDictionary:
    def test_bundled_list_exists(self):
        assert BUNDLED_WORD_LIST.is_file()

    def test_get_dictionary_is_cached(self):
        first = get_dictionary()
        assert first is get_dictionary()
        assert len(first) > 1000
        assert "LEMON" in first.key_words

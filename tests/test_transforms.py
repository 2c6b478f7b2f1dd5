"""Tests for the keyed cipher transforms."""

import pytest

from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.transforms import (
    caesar_decode,
    caesar_encode,
    get_transform,
    normalize_vigenere_key,
    rail_fence_decode,
    rail_fence_encode,
    vigenere_decode,
    vigenere_encode,
)


class TestCaesarTransform:
    def test_encrypt_shift_3(self):
        assert caesar_encode("HELLO WORLD", 3) == "KHOOR ZRUOG"

    def test_case_and_punctuation_preserved(self):
        assert caesar_encode("Hello, World!", 3) == "Khoor, Zruog!"

    def test_roundtrip_all_shifts(self, people_text):
        for shift in range(26):
            assert caesar_decode(caesar_encode(people_text, shift), shift) == people_text

    def test_wraps_around(self):
        assert caesar_encode("XYZ", 3) == "ABC"
        assert caesar_decode("ABC", 3) == "XYZ"


class TestVigenereTransform:
    def test_classic_vector(self):
        assert vigenere_encode("ATTACK AT DAWN", "LEMON") == "LXFOPV EF RNHR"
        assert vigenere_decode("LXFOPV EF RNHR", "lemon") == "ATTACK AT DAWN"

    def test_key_advances_only_on_letters(self):
        # Spaces and punctuation must not consume key letters
        assert vigenere_encode("A-A A", "AB") == "A-B A"

    def test_case_preserved(self):
        assert vigenere_decode(vigenere_encode("Attack at Dawn", "KEY"), "KEY") == "Attack at Dawn"

    @pytest.mark.parametrize("key", ["", "AB1", "K Y"])
    def test_invalid_key_rejected(self, key):
        with pytest.raises(ValueError):
            normalize_vigenere_key(key)


class TestRailFenceTransform:
    def test_reference_vector(self):
        assert rail_fence_encode("WEAREDISCOVEREDFLEEATONCE", 3) == "WECRLTEERDSOEEFEAOCAIVDEN"

    def test_reference_vector_decode(self):
        assert rail_fence_decode("WECRLTEERDSOEEFEAOCAIVDEN", 3) == "WEAREDISCOVEREDFLEEATONCE"

    def test_roundtrip_rails_2_to_10(self, people_text):
        for rails in range(2, 11):
            ciphertext = rail_fence_encode(people_text, rails)
            assert rail_fence_decode(ciphertext, rails) == people_text

    def test_more_rails_than_characters(self):
        assert rail_fence_decode(rail_fence_encode("HI", 5), 5) == "HI"

    def test_single_rail_rejected(self):
        with pytest.raises(ValueError):
            rail_fence_encode("HELLO", 1)


class TestTransformLookup:
    def test_every_cipher_has_a_transform(self):
        for cipher_type in CipherType:
            assert get_transform(cipher_type).cipher_type == cipher_type

    def test_keys_parsed_from_strings(self):
        assert get_transform(CipherType.CAESAR).encrypt("ABC", "29") == "DEF"
        assert get_transform(CipherType.RAIL_FENCE).decrypt("WECRLTEERDSOEEFEAOCAIVDEN", "3") == (
            "WEAREDISCOVEREDFLEEATONCE"
        )

    def test_non_numeric_shift_rejected(self):
        with pytest.raises(ValueError):
            get_transform(CipherType.CAESAR).encrypt("ABC", "three")

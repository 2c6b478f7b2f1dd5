"""
Keyed cipher transforms.

Pure encode/decode functions for Caesar, Vigenère and Rail Fence. The breakers
use them for trial decryption; callers use them once a key is known.

All arithmetic is done on uppercase alphabet positions (0-25). Non-letters pass
through unchanged and the case of every letter is preserved.
"""

import string
from dataclasses import dataclass
from typing import Callable

from cipherbreaker.models.schemas import CipherType

ALPHABET = string.ascii_uppercase
LETTERS = frozenset(ALPHABET)


def _shift_letter(char: str, shift: int) -> str:
    """Shift one ASCII letter, keeping its case. Anything else is returned as is."""
    upper = char.upper()
    if upper not in LETTERS:
        return char

    shifted = ALPHABET[(ALPHABET.index(upper) + shift) % 26]
    return shifted if char.isupper() else shifted.lower()


# ============================================================================
# Caesar
# ============================================================================


def caesar_encode(text: str, shift: int) -> str:
    return "".join(_shift_letter(char, shift) for char in text)


def caesar_decode(text: str, shift: int) -> str:
    return caesar_encode(text, -shift)


# ============================================================================
# Vigenère
# ============================================================================


def normalize_vigenere_key(key: str) -> str:
    """Uppercase a keyword and reject anything that is not letters only."""
    key_str = str(key).strip().upper()
    if not key_str or any(c not in LETTERS for c in key_str):
        raise ValueError("Invalid key: Vigenère keys must be alphabetic")
    return key_str


def _vigenere(text: str, key: str, direction: int) -> str:
    shifts = [ALPHABET.index(c) for c in normalize_vigenere_key(key)]
    result = []
    key_idx = 0

    for char in text:
        if char.upper() in LETTERS:
            result.append(_shift_letter(char, direction * shifts[key_idx % len(shifts)]))
            # The key only advances on letters
            key_idx += 1
        else:
            result.append(char)

    return "".join(result)


def vigenere_encode(text: str, key: str) -> str:
    return _vigenere(text, key, 1)


def vigenere_decode(text: str, key: str) -> str:
    return _vigenere(text, key, -1)


# ============================================================================
# Rail Fence
# ============================================================================


def _zigzag_rows(length: int, rails: int) -> list[int]:
    """Row visited by each position while walking the zigzag."""
    rows = []
    rail = 0
    direction = 1

    for _ in range(length):
        rows.append(rail)

        # Change direction at top or bottom
        if rail == 0:
            direction = 1
        elif rail == rails - 1:
            direction = -1

        rail += direction

    return rows


def _check_rails(rails: int) -> None:
    if rails < 2:
        raise ValueError("Invalid key: rails must be >= 2")


def rail_fence_encode(text: str, rails: int) -> str:
    _check_rails(rails)

    fence: list[list[str]] = [[] for _ in range(rails)]
    for char, row in zip(text, _zigzag_rows(len(text), rails)):
        fence[row].append(char)

    # Read off each rail
    return "".join("".join(row) for row in fence)


def rail_fence_decode(text: str, rails: int) -> str:
    """
    Reverse the zigzag.

    Mark the cell each position occupies, fill the marked cells row by row
    with successive ciphertext characters, then walk the zigzag again to read
    the plaintext in its original order.
    """
    _check_rails(rails)

    n = len(text)
    rows = _zigzag_rows(n, rails)

    fence: list[list[str | None]] = [[None] * n for _ in range(rails)]
    idx = 0
    for row in range(rails):
        for col in range(n):
            if rows[col] == row:
                fence[row][col] = text[idx]
                idx += 1

    return "".join(fence[row][col] for col, row in enumerate(rows))


# ============================================================================
# Key parsing and lookup
# ============================================================================


def parse_shift(key: str | int) -> int:
    """Parse key to integer shift value."""
    return int(key) % 26


def parse_rails(key: str | int) -> int:
    """Parse key to number of rails."""
    rails = int(key)
    _check_rails(rails)
    return rails


@dataclass(frozen=True)
class CipherTransform:
    """Encode/decode pair for one cipher plus its key parser."""

    cipher_type: CipherType
    encode: Callable
    decode: Callable
    parse_key: Callable

    def encrypt(self, text: str, key: str | int) -> str:
        return self.encode(text, self.parse_key(key))

    def decrypt(self, text: str, key: str | int) -> str:
        return self.decode(text, self.parse_key(key))


TRANSFORMS: dict[CipherType, CipherTransform] = {
    CipherType.CAESAR: CipherTransform(
        CipherType.CAESAR, caesar_encode, caesar_decode, parse_shift
    ),
    CipherType.VIGENERE: CipherTransform(
        CipherType.VIGENERE, vigenere_encode, vigenere_decode, normalize_vigenere_key
    ),
    CipherType.RAIL_FENCE: CipherTransform(
        CipherType.RAIL_FENCE, rail_fence_encode, rail_fence_decode, parse_rails
    ),
}


def get_transform(cipher_type: CipherType) -> CipherTransform:
    return TRANSFORMS[cipher_type]

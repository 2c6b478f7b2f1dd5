"""Polyalphabetic cipher breakers."""

from cipherbreaker.services.engines.polyalphabetic.vigenere import VigenereBreaker

__all__ = [
    "VigenereBreaker",
]

"""Monoalphabetic cipher breakers."""

from cipherbreaker.services.engines.monoalphabetic.caesar import CaesarBreaker

__all__ = [
    "CaesarBreaker",
]

"""Dictionary provider shared by every breaker."""

from cipherbreaker.services.dictionary.provider import (
    COMMON_WORDS,
    Dictionary,
    get_dictionary,
)

__all__ = [
    "COMMON_WORDS",
    "Dictionary",
    "get_dictionary",
]

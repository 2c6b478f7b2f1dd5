import re
from dataclasses import dataclass
from typing import ClassVar

from cipherbreaker.services.dictionary import Dictionary

_NON_LETTERS = re.compile(r"[^A-Za-z]")


@dataclass(frozen=True)
class Validation:
    """Share of whitespace tokens recognised as dictionary words."""

    VALID_THRESHOLD: ClassVar[float] = 0.90

    valid_word_fraction: float
    invalid_words: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.valid_word_fraction >= self.VALID_THRESHOLD

    @property
    def percentage(self) -> float:
        return self.valid_word_fraction * 100


class WordValidator:
    """
    Checks decrypted text against the dictionary.

    Tokens are split on whitespace, stripped of non-letters and uppercased.
    Tokens that are pure punctuation are neither valid nor invalid but still
    count towards the total.
    """

    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary

    def validate(self, text: str) -> Validation:
        tokens = text.split()
        if not tokens:
            return Validation(0.0)

        valid = 0
        invalid = []
        for token in tokens:
            cleaned = _NON_LETTERS.sub("", token).upper()
            if not cleaned:
                continue

            if cleaned in self.dictionary.validation_words:
                valid += 1
            else:
                invalid.append(token)

        return Validation(valid / len(tokens), tuple(invalid))

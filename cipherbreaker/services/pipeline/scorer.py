"""
English plausibility scorer.

Two weighting profiles are used and they are not interchangeable:

Classical profile (Caesar / Rail Fence):
    final = 0.4*freq + 1.2*word + 0.6*consecutive + method
    freq        = -sum(|observed% - expected%|) over the 26 letters
    word        = +20 per common word, +10 per other token (len > 3) with a
                  common English suffix
    consecutive = +5 per common word
    method      = Caesar only: +30 if THE/AND/ING/ION occurs, +20 if the mean
                  token length is within [3, 7]
    then x1.3 for Caesar, x1.1 for Rail Fence when the text keeps whitespace

Vigenère profile:
    final = 0.3*freq + 0.7*word
    freq = sum(100 - |expected% - actual%|) over letters present
    word = +5*len(token) per token found in the curated common-word list
"""

import re
import string
from collections import Counter
from enum import Enum
from typing import ClassVar

from cipherbreaker.services.analysis.statistics import ENGLISH_FREQ
from cipherbreaker.services.dictionary import Dictionary

NEGATIVE_INFINITY = float("-inf")

_WORD_TOKEN = re.compile(r"[A-Z0-9_]+")


class ScoringProfile(str, Enum):
    """Which weight set to apply, tagged with the cipher being scored."""

    CAESAR = "caesar"
    RAIL_FENCE = "rail_fence"
    VIGENERE = "vigenere"


class LanguageScorer:
    """
    Scores candidate plaintext for English plausibility.

    Higher is better. Empty or letter-free text scores negative infinity.
    """

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    # Common words recognised by the classical profile
    CLASSICAL_COMMON_WORDS: ClassVar[frozenset[str]] = frozenset({
        # Articles and basic words
        "THE", "A", "AN", "AND", "OR", "BUT",
        # Pronouns
        "I", "YOU", "HE", "SHE", "IT", "WE", "THEY",
        "ME", "HIM", "HER", "US", "THEM",
        "MY", "YOUR", "HIS", "ITS", "OUR", "THEIR",
        "MINE", "YOURS", "HERS", "OURS", "THEIRS",
        "THIS", "THAT", "THESE", "THOSE",
        "WHO", "WHOM", "WHOSE", "WHICH", "WHAT",
        # Prepositions
        "IN", "ON", "AT", "TO", "FOR", "OF", "WITH",
        "BY", "FROM", "UP", "DOWN", "INTO", "ONTO",
        "OVER", "UNDER", "ABOVE", "BELOW",
        # Verbs (common forms)
        "IS", "ARE", "WAS", "WERE", "BE", "BEEN", "BEING",
        "HAVE", "HAS", "HAD", "DO", "DOES", "DID",
        "GO", "GOES", "WENT", "GONE",
        "MAKE", "MAKES", "MADE",
        "TAKE", "TAKES", "TOOK",
        "SEE", "SEES", "SAW",
        "KNOW", "KNOWS", "KNEW",
        "GET", "GETS", "GOT",
        "WILL", "WOULD", "CAN", "COULD",
        "SHALL", "SHOULD", "MAY", "MIGHT",
        "MUST", "OUGHT",
        # Common adjectives
        "GOOD", "BAD", "BIG", "SMALL",
        "HIGH", "LOW", "OLD", "NEW",
        "FIRST", "LAST", "LONG", "SHORT",
        "OWN", "SAME", "RIGHT", "LEFT",
        "NEXT", "EARLY", "LATE", "FAR",
        # Time words
        "NOW", "THEN", "TODAY", "TOMORROW",
        "YESTERDAY", "YEAR", "MONTH", "WEEK",
        "DAY", "TIME", "HOUR", "MINUTE",
        # Numbers and quantities
        "ONE", "TWO", "THREE", "FOUR", "FIVE",
        "TEN", "MANY", "MUCH", "SOME", "ANY",
        "ALL", "BOTH", "HALF", "NONE",
        # Question words
        "WHY", "WHERE", "WHEN", "HOW",
        # Common nouns
        "MAN", "WOMAN", "CHILD", "PERSON",
        "PEOPLE", "THING", "WAY", "LIFE",
        "WORLD", "SCHOOL", "WORK", "HOME",
        "ROOM", "HOUSE", "PLACE", "CASE",
        "GROUP", "COMPANY", "NUMBER", "PART",
        # Other common words
        "YES", "NO", "NOT", "VERY", "JUST",
        "LIKE", "WELL", "ONLY", "EVEN", "BACK",
        "THERE", "HERE",
        "ABOUT", "AFTER", "BEFORE", "BETWEEN",
    })

    COMMON_SUFFIXES: ClassVar[tuple[str, ...]] = ("ING", "ED", "LY", "ION", "TION", "MENT")
    CAESAR_MARKERS: ClassVar[tuple[str, ...]] = ("THE", "AND", "ING", "ION")

    # Common bigrams, used only to break ties between transpositions
    COMMON_BIGRAMS: ClassVar[frozenset[str]] = frozenset({
        "TH", "HE", "IN", "ER", "AN", "RE", "ON", "AT", "EN", "ND",
        "TI", "ES", "OR", "TE", "OF", "ED", "IS", "IT", "AL", "AR",
        "ST", "TO", "NT", "NG", "SE", "HA", "AS", "OU", "IO", "LE",
    })

    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary
        self._vigenere_words = frozenset(dictionary.common_words)

    def score(self, text: str, profile: ScoringProfile) -> float:
        if profile == ScoringProfile.VIGENERE:
            return self.vigenere_score(text)
        return self.classical_score(text, profile)

    def classical_score(self, text: str, profile: ScoringProfile) -> float:
        upper = text.upper()
        counter = Counter(c for c in upper if c in ENGLISH_FREQ)
        total = sum(counter.values())

        if total == 0:
            return NEGATIVE_INFINITY

        freq_score = 0.0
        for letter in self.ALPHABET:
            observed = counter.get(letter, 0) / total * 100
            freq_score -= abs(observed - ENGLISH_FREQ[letter])

        words = upper.split()
        word_score = 0
        consecutive_bonus = 0

        for word in words:
            if word in self.CLASSICAL_COMMON_WORDS:
                word_score += 20
                consecutive_bonus += 5
            elif len(word) > 3 and word.endswith(self.COMMON_SUFFIXES):
                word_score += 10

        method_score = 0
        if profile == ScoringProfile.CAESAR:
            if any(marker in upper for marker in self.CAESAR_MARKERS):
                method_score += 30

            # Typical English word length
            avg_word_length = sum(len(w) for w in words) / len(words)
            if 3 <= avg_word_length <= 7:
                method_score += 20

        final_score = (
            freq_score * 0.4
            + word_score * 1.2
            + consecutive_bonus * 0.6
            + method_score
        )

        if profile == ScoringProfile.CAESAR:
            final_score *= 1.3
        elif profile == ScoringProfile.RAIL_FENCE and any(c.isspace() for c in text):
            final_score *= 1.1

        return final_score

    def vigenere_score(self, text: str) -> float:
        upper = text.upper()
        counter = Counter(c for c in upper if c in ENGLISH_FREQ)
        total = sum(counter.values())

        if total == 0:
            return NEGATIVE_INFINITY

        frequency_score = 0.0
        for letter, count in counter.items():
            actual = count / total * 100
            frequency_score += 100 - abs(ENGLISH_FREQ[letter] - actual)

        # Longer common words carry more weight
        word_score = sum(
            len(token) * 5
            for token in _WORD_TOKEN.findall(upper)
            if token in self._vigenere_words
        )

        return frequency_score * 0.3 + word_score * 0.7

    def bigram_fraction(self, text: str) -> float:
        """Share of adjacent letter pairs that are common English bigrams."""
        letters = "".join(c for c in text.upper() if c in ENGLISH_FREQ)
        total = len(letters) - 1
        if total <= 0:
            return 0.0

        matches = sum(1 for i in range(total) if letters[i:i + 2] in self.COMMON_BIGRAMS)
        return matches / total

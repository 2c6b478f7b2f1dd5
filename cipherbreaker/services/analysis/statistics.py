import string
from collections import Counter
from types import MappingProxyType
from typing import ClassVar, Mapping

ALPHABET = string.ascii_uppercase

# English letter frequencies (percentage). Read-only and shared without copying.
ENGLISH_FREQ: Mapping[str, float] = MappingProxyType({
    "E": 12.7, "T": 9.1, "A": 8.2, "O": 7.5, "I": 7.0,
    "N": 6.7, "S": 6.3, "H": 6.1, "R": 6.0, "D": 4.3,
    "L": 4.0, "C": 2.8, "U": 2.8, "M": 2.4, "W": 2.4,
    "F": 2.2, "G": 2.0, "Y": 2.0, "P": 1.9, "B": 1.5,
    "V": 1.0, "K": 0.8, "J": 0.15, "X": 0.15, "Q": 0.10,
    "Z": 0.07,
})


class StatisticalAnalyzer:
    """
    Letter statistics used by the breakers.

    - Letter counts and percentages
    - Index of Coincidence (IOC)
    - Key length estimation from average IOC per residue class
    - Chi-squared against English, used to recover a Vigenère key column by column
    """

    ALPHABET: ClassVar[str] = ALPHABET
    ENGLISH_FREQ: ClassVar[Mapping[str, float]] = ENGLISH_FREQ

    # English text ~0.0667, uniformly random text ~0.0385 (1/26)
    ENGLISH_IOC: ClassVar[float] = 0.0667
    RANDOM_IOC: ClassVar[float] = 0.0385

    def letters(self, text: str) -> str:
        """Uppercase letters of `text`, everything else dropped."""
        return "".join(c for c in text.upper() if c in self.ENGLISH_FREQ)

    def letter_frequencies(self, text: str) -> dict[str, float]:
        """
        Get letter frequencies as a dictionary.

        Returns frequencies as percentages (0-100).
        """
        filtered = self.letters(text)
        n = len(filtered)

        if n == 0:
            return {letter: 0.0 for letter in self.ALPHABET}

        counter = Counter(filtered)
        return {
            letter: (counter.get(letter, 0) / n) * 100
            for letter in self.ALPHABET
        }

    def index_of_coincidence(self, text: str) -> float:
        """
        Calculate Index of Coincidence.

        IOC measures how likely two randomly chosen letters are the same.
        Returns 0.0 for fewer than two letters.
        """
        filtered = self.letters(text)
        n = len(filtered)
        if n <= 1:
            return 0.0

        counter = Counter(filtered)
        numerator = sum(f * (f - 1) for f in counter.values())
        return numerator / (n * (n - 1))

    def average_ioc(self, text: str, period: int) -> float:
        """Mean IOC of the `period` residue classes of the letters of `text`."""
        filtered = self.letters(text)
        columns = [filtered[i::period] for i in range(period)]
        return sum(self.index_of_coincidence(col) for col in columns) / period

    def key_length_scores(
        self,
        text: str,
        min_length: int = 2,
        max_length: int = 12,
    ) -> list[tuple[int, float]]:
        """
        Rank candidate key lengths by average IOC, highest first.

        With the right length every residue class was enciphered with a single
        shift, so its IOC rises towards that of English.
        """
        scores = [
            (length, self.average_ioc(text, length))
            for length in range(min_length, max_length + 1)
        ]
        # Stable sort keeps shorter lengths first on ties
        scores.sort(key=lambda x: x[1], reverse=True)
        return scores

    def estimate_key_lengths(
        self,
        text: str,
        min_length: int = 2,
        max_length: int = 12,
    ) -> list[int]:
        return [length for length, _ in self.key_length_scores(text, min_length, max_length)]

    def chi_squared(self, text: str) -> float:
        """
        Calculate chi-squared statistic against English frequencies.

        Lower values indicate closer match to English.
        """
        filtered = self.letters(text)
        n = len(filtered)
        if n == 0:
            return float("inf")

        counter = Counter(filtered)
        chi_squared = 0.0

        for letter in self.ALPHABET:
            observed = counter.get(letter, 0)
            expected = (self.ENGLISH_FREQ[letter] / 100) * n
            chi_squared += ((observed - expected) ** 2) / expected

        return chi_squared

    def column_key(self, text: str, key_length: int) -> str:
        """
        Recover a Vigenère key of `key_length` by breaking each column as a Caesar shift.

        For each position, try all 26 shifts and keep the one whose column
        decryption has the lowest chi-squared against English.
        """
        filtered = self.letters(text)
        key = []

        for i in range(key_length):
            column = filtered[i::key_length]

            best_shift = 0
            best_score = float("inf")

            for shift in range(26):
                decrypted = "".join(
                    self.ALPHABET[(self.ALPHABET.index(c) - shift) % 26]
                    for c in column
                )
                score = self.chi_squared(decrypted)

                if score < best_score:
                    best_score = score
                    best_shift = shift

            key.append(self.ALPHABET[best_shift])

        return "".join(key)

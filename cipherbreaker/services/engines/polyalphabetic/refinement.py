"""
Edit-distance guided key refinement.

A key that is nearly right decrypts most words correctly and leaves a few
words one or two letters off. Those near-misses show the key is worth
perturbing; the perturbations are then judged on score and word validity.
"""

import logging
import re
import string
from dataclasses import dataclass
from typing import ClassVar, Iterator

from cipherbreaker.core.deadline import Deadline
from cipherbreaker.services.dictionary import Dictionary
from cipherbreaker.services.engines.base import Candidate, VigenereMethod
from cipherbreaker.services.pipeline.scorer import LanguageScorer, ScoringProfile
from cipherbreaker.services.pipeline.validator import WordValidator
from cipherbreaker.services.transforms import vigenere_decode

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase

_NON_LETTERS = re.compile(r"[^A-Za-z]")

# Dictionary comparisons between deadline checks
_DEADLINE_POLL = 1000


def levenshtein(a: str, b: str) -> int:
    """Classic dynamic-programming edit distance (insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current

    return previous[-1]


@dataclass(frozen=True)
class NearMiss:
    """A decrypted word within a small edit distance of a real one."""

    word: str
    correction: str
    distance: int


def find_near_misses(
    text: str,
    dictionary: Dictionary,
    max_distance: int = 2,
    deadline: Deadline | None = None,
) -> list[NearMiss]:
    """
    Find decrypted words that are almost, but not quite, dictionary words.

    Only tokens of 4+ letters are considered, compared against refinement
    words within two letters of their length. The closest word wins; on equal
    distance the first one by length, then alphabet. Each distinct token is
    looked up once. The scan stops with what it has once `deadline` expires.
    """
    near_misses = []
    seen: dict[str, NearMiss | None] = {}

    for token in text.split():
        word = _NON_LETTERS.sub("", token).upper()
        if len(word) < 4 or word in dictionary:
            continue

        if word not in seen:
            if deadline is not None and deadline.expired():
                logger.debug("Near-miss scan stopped after %d words: deadline reached", len(seen))
                break
            seen[word] = _closest_word(word, dictionary, max_distance, deadline)

        if seen[word] is not None:
            near_misses.append(seen[word])

    return near_misses


def _closest_word(
    word: str,
    dictionary: Dictionary,
    max_distance: int,
    deadline: Deadline | None,
) -> NearMiss | None:
    best: NearMiss | None = None
    for count, candidate in enumerate(dictionary.refinement_words_near(len(word)), start=1):
        if count % _DEADLINE_POLL == 0 and deadline is not None and deadline.expired():
            break

        distance = levenshtein(word, candidate)
        if 0 < distance <= max_distance and (best is None or distance < best.distance):
            best = NearMiss(word, candidate, distance)
            if distance == 1:
                break
    return best


@dataclass(frozen=True)
class _Refinement:
    candidate: Candidate
    combined: float

    @property
    def is_valid(self) -> bool:
        return self.candidate.validation.is_valid


class KeyRefiner:
    """
    Local search around a seed key.

    Perturbations are ranked fully-valid first, then by
    `combined = raw × (1 + valid_word_fraction)`. The best one replaces the
    seed only when it is fully valid or beats the seed's combined score by
    more than 10%.
    """

    LENGTH_SPREAD: ClassVar[int] = 2
    MIN_IMPROVEMENT: ClassVar[float] = 0.10

    def __init__(self, dictionary: Dictionary, scorer: LanguageScorer, validator: WordValidator):
        self.dictionary = dictionary
        self.scorer = scorer
        self.validator = validator

    def perturbations(self, key: str) -> Iterator[str]:
        """Every distinct variant of `key` worth trying, the key itself excluded."""
        seen = {key}
        for variant in self._variants(key):
            if variant and variant not in seen:
                seen.add(variant)
                yield variant

    def _variants(self, key: str) -> Iterator[str]:
        length = len(key)

        # Substitutions on the key cycled or cut to each nearby length
        for new_length in range(max(1, length - self.LENGTH_SPREAD), length + self.LENGTH_SPREAD + 1):
            base = (key * (new_length // length + 1))[:new_length]
            for pos in range(new_length):
                for letter in ALPHABET:
                    yield base[:pos] + letter + base[pos + 1:]

        # Insertions
        for pos in range(length + 1):
            for letter in ALPHABET:
                yield key[:pos] + letter + key[pos:]

        # Deletions
        for pos in range(length):
            yield key[:pos] + key[pos + 1:]

        yield key + key[0]
        yield key + key[-1]
        yield key + key
        yield key[:-1]
        yield key[1:]

    def evaluate(self, ciphertext: str, key: str) -> Candidate:
        plaintext = vigenere_decode(ciphertext, key)
        return Candidate(
            VigenereMethod(key),
            plaintext,
            self.scorer.score(plaintext, ScoringProfile.VIGENERE),
            validation=self.validator.validate(plaintext),
        )

    def refine(self, ciphertext: str, seed: Candidate, deadline: Deadline | None = None) -> Candidate:
        """Return an improved candidate, or `seed` itself when nothing qualifies."""
        if seed.validation is None:
            seed = Candidate(
                seed.method,
                seed.plaintext,
                seed.raw_score,
                validation=self.validator.validate(seed.plaintext),
            )

        near_misses = find_near_misses(seed.plaintext, self.dictionary, deadline=deadline)
        if not near_misses:
            logger.debug("No near-miss words for key %s; keeping it", seed.key)
            return seed

        logger.info(
            "Refining key %s around %d near-miss words (e.g. %s -> %s)",
            seed.key,
            len(near_misses),
            near_misses[0].word,
            near_misses[0].correction,
        )

        best: _Refinement | None = None
        tried = 0
        for key in self.perturbations(seed.key):
            if deadline is not None and deadline.expired():
                logger.info("Refinement stopped after %d keys: deadline reached", tried)
                break

            refinement = self._rank(self.evaluate(ciphertext, key))
            tried += 1
            if best is None or self._better(refinement, best):
                best = refinement

        if best is None:
            return seed

        seed_combined = self._rank(seed).combined
        improvement = best.combined - seed_combined
        if best.is_valid or improvement > self.MIN_IMPROVEMENT * abs(seed_combined):
            logger.info(
                "Refined key %s -> %s (%.1f%% valid words)",
                seed.key,
                best.candidate.key,
                best.candidate.validation.percentage,
            )
            return best.candidate

        logger.debug("Best perturbation %s not a clear improvement; keeping %s", best.candidate.key, seed.key)
        return seed

    @staticmethod
    def _rank(candidate: Candidate) -> _Refinement:
        combined = candidate.raw_score * (1 + candidate.validation.valid_word_fraction)
        return _Refinement(candidate, combined)

    @staticmethod
    def _better(a: _Refinement, b: _Refinement) -> bool:
        # Valid beats invalid, then higher combined score, then the shorter key
        if a.is_valid != b.is_valid:
            return a.is_valid
        if a.combined != b.combined:
            return a.combined > b.combined
        return (len(a.candidate.key), a.candidate.key) < (len(b.candidate.key), b.candidate.key)

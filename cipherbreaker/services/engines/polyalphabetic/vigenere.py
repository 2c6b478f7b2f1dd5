import logging
from dataclasses import replace
from typing import ClassVar

from cipherbreaker.core.config import Settings
from cipherbreaker.core.deadline import Deadline
from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.analysis.statistics import StatisticalAnalyzer
from cipherbreaker.services.dictionary import Dictionary
from cipherbreaker.services.engines.base import Candidate, CipherBreaker, VigenereMethod
from cipherbreaker.services.engines.polyalphabetic.keysearch import (
    SystematicKeySpace,
    TrialLeaderboard,
    reduce_repeating_key,
    take_bounded,
)
from cipherbreaker.services.engines.polyalphabetic.refinement import KeyRefiner
from cipherbreaker.services.engines.registry import EngineRegistry
from cipherbreaker.services.pipeline.scorer import LanguageScorer, ScoringProfile
from cipherbreaker.services.transforms import vigenere_decode

logger = logging.getLogger(__name__)


@EngineRegistry.register
class VigenereBreaker(CipherBreaker):
    """
    Vigenère cipher breaker.

    A polyalphabetic substitution cipher that uses a keyword to determine
    the shift for each letter. Each letter of the keyword represents a
    different Caesar shift applied in sequence.

    Breaking runs in four phases, each gated on the plausibility of the last:
    1. Dictionary attack: every dictionary word of 3-10 letters as the key
    2. Key length estimation from the Index of Coincidence
    3. Systematic search over keys of the top 3 lengths, seeded by
       per-column frequency analysis and the best dictionary keys
    4. Refinement of the winning key around near-miss words

    The returned key is always reduced to its repeating period.
    """

    name = "Vigenère Cipher"
    cipher_type = CipherType.VIGENERE
    description = (
        "A polyalphabetic cipher where each letter is shifted by a different amount "
        "based on a repeating keyword. More secure than Caesar but vulnerable to "
        "Kasiski examination and frequency analysis per key position."
    )

    # Dictionary attack result good enough to go straight to refinement
    GATE_SCORE: ClassVar[float] = 700.0
    GATE_VALIDITY: ClassVar[float] = 0.70

    # Systematic search stops for a key length once a trial clears both
    GOOD_ENOUGH_SCORE: ClassVar[float] = 800.0
    GOOD_ENOUGH_VALIDITY: ClassVar[float] = 0.80

    LENGTHS_TO_SEARCH: ClassVar[int] = 3
    SEED_KEYS: ClassVar[int] = 3
    SEED_LENGTH_SPREAD: ClassVar[int] = 2
    PROGRESS_INTERVAL: ClassVar[int] = 500

    def __init__(
        self,
        dictionary: Dictionary,
        scorer: LanguageScorer | None = None,
        settings: Settings | None = None,
    ):
        super().__init__(dictionary, scorer=scorer, settings=settings)
        self.analyzer = StatisticalAnalyzer()
        self.refiner = KeyRefiner(dictionary, self.scorer, self.validator)

    def break_cipher(self, ciphertext: str, deadline: Deadline | None = None) -> Candidate:
        if not self.analyzer.letters(ciphertext):
            # Nothing to decrypt; every key gives the same text
            return self._evaluate(ciphertext, "A")

        return self._canonical(self._search(ciphertext, deadline))

    def _search(self, ciphertext: str, deadline: Deadline | None) -> Candidate:
        trials = TrialLeaderboard(self.SEED_KEYS)

        # Phase 1: dictionary attack
        self._dictionary_attack(ciphertext, trials, deadline)
        if trials.best_valid is not None:
            logger.info("Dictionary attack found valid key %s", trials.best_valid.key)
            return trials.best_valid

        best = trials.best
        if self._out_of_time(deadline, best):
            return best

        if (
            best is not None
            and best.raw_score > self.GATE_SCORE
            and best.validation.valid_word_fraction > self.GATE_VALIDITY
        ):
            logger.info("Dictionary key %s is promising; refining it", best.key)
            return self.refiner.refine(ciphertext, best, deadline)

        # Phase 2: key length estimation
        lengths = self.analyzer.estimate_key_lengths(
            ciphertext, max_length=self.settings.max_key_length
        )[: self.LENGTHS_TO_SEARCH]
        logger.info("Dictionary attack unsuccessful; likely key lengths %s", lengths)

        # Phase 3: systematic search
        seed_keys = [c.key for c in trials.top]
        self._systematic_search(ciphertext, lengths, seed_keys, trials, deadline)

        winner = trials.winner()
        if winner is None:
            # Raises when the deadline cut every phase short
            self._out_of_time(deadline, None)
            winner = self._evaluate(ciphertext, self.analyzer.column_key(ciphertext, lengths[0]))
        if winner.validation.is_valid or self._out_of_time(deadline, winner):
            return winner

        # Phase 4: refinement
        return self.refiner.refine(ciphertext, winner, deadline)

    def _canonical(self, candidate: Candidate) -> Candidate:
        """Same decryption under the shortest key that repeats to the found one."""
        key = reduce_repeating_key(candidate.key)
        if key == candidate.key:
            return candidate
        logger.debug("Reduced key %s to its period %s", candidate.key, key)
        return replace(candidate, method=VigenereMethod(key))

    def _evaluate(self, ciphertext: str, key: str) -> Candidate:
        plaintext = vigenere_decode(ciphertext, key)
        return Candidate(
            VigenereMethod(key),
            plaintext,
            self.scorer.score(plaintext, ScoringProfile.VIGENERE),
            validation=self.validator.validate(plaintext),
        )

    def _dictionary_attack(
        self,
        ciphertext: str,
        trials: TrialLeaderboard,
        deadline: Deadline | None,
    ) -> None:
        key_words = self.dictionary.key_words
        total = len(key_words)

        for count, word in enumerate(key_words, start=1):
            if deadline is not None and deadline.expired():
                logger.info("Dictionary attack stopped after %d keys: deadline reached", count - 1)
                break

            candidate = self._evaluate(ciphertext, word)
            trials.add(candidate)

            if candidate.validation.is_valid:
                logger.debug(
                    "Key %s gives %.1f%% valid words", word, candidate.validation.percentage
                )

            if count % self.PROGRESS_INTERVAL == 0:
                logger.debug(
                    "Dictionary attack progress: %.1f%% (%d keys)", count / total * 100, count
                )

    def _systematic_search(
        self,
        ciphertext: str,
        lengths: list[int],
        seed_keys: list[str],
        trials: TrialLeaderboard,
        deadline: Deadline | None,
    ) -> None:
        """
        Search each key length through a bounded slice of its key space.

        Seeds are the per-column chi-squared key for the length followed by
        the best dictionary keys of similar length. Keys already tried are
        skipped and do not count against the budget.
        """
        total = 0

        for length in lengths:
            seeds = [self.analyzer.column_key(ciphertext, length)]
            seeds += [k for k in seed_keys if abs(len(k) - length) <= self.SEED_LENGTH_SPREAD]
            logger.info("Trying systematic keys of length %d (seeds %s)", length, seeds)

            good_enough: list[Candidate] = []

            def stop() -> bool:
                return bool(good_enough) or (deadline is not None and deadline.expired())

            space = SystematicKeySpace(length, seeds)
            untried = (key for key in space if key not in trials)

            for key in take_bounded(untried, self.settings.vigenere_trial_budget, stop):
                candidate = self._evaluate(ciphertext, key)
                trials.add(candidate)

                total += 1
                if total % self.PROGRESS_INTERVAL == 0:
                    logger.debug("Tried %d systematic keys", total)

                if (
                    candidate.raw_score > self.GOOD_ENOUGH_SCORE
                    and candidate.validation.valid_word_fraction > self.GOOD_ENOUGH_VALIDITY
                ):
                    logger.info("Found promising systematic key %s", key)
                    good_enough.append(candidate)

            if deadline is not None and deadline.expired():
                logger.info("Systematic search stopped at length %d: deadline reached", length)
                break

    def explain(self, ciphertext: str, candidate: Candidate) -> str:
        key_str = candidate.key
        shifts = [ord(c) - ord("A") for c in key_str]
        shift_desc = ", ".join(f"{letter}={shift}" for letter, shift in zip(key_str, shifts))

        return (
            f"Vigenère cipher with keyword '{key_str}' (length {len(key_str)}). "
            f"Letter shifts: {shift_desc}. "
            f"Each letter of the ciphertext is shifted back by the corresponding "
            f"key letter's position in the alphabet."
        )

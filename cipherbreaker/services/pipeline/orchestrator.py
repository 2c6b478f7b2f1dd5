"""
Decryption orchestrator - the brain of the cryptanalysis pipeline.

This module implements the core decryption logic:
1. Run the breakers in cost order: Caesar, Rail Fence, Vigenère
2. Normalise each raw score onto a shared [0, 1] confidence scale
3. Skip the costlier breakers once an earlier one is convincing
4. Rank everything above the confidence floor
"""

import logging
import math
from dataclasses import dataclass, field
from typing import ClassVar, Mapping

from cipherbreaker.core.config import Settings, get_settings
from cipherbreaker.core.deadline import Deadline
from cipherbreaker.core.exceptions import (
    CiphertextTooLongError,
    CryptanalysisError,
    InvalidInputError,
    MalformedCandidateError,
    NoPlausibleDecryptionError,
)
from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.dictionary import Dictionary, get_dictionary
from cipherbreaker.services.engines.base import (
    CaesarMethod,
    Candidate,
    CipherBreaker,
    RailFenceMethod,
    VigenereMethod,
)
from cipherbreaker.services.engines.registry import EngineRegistry

logger = logging.getLogger(__name__)

# Raw scores of roughly this size map to full confidence before weighting
SCORE_SCALE = 1000.0

METHOD_WEIGHTS: dict[CipherType, float] = {
    CipherType.CAESAR: 1.2,
    CipherType.RAIL_FENCE: 0.7,
    CipherType.VIGENERE: 0.9,
}

WHITESPACE_BONUS = 1.2

_METHOD_TYPES = {
    CipherType.CAESAR: CaesarMethod,
    CipherType.RAIL_FENCE: RailFenceMethod,
    CipherType.VIGENERE: VigenereMethod,
}


def normalize_score(
    raw_score: float,
    weight: float,
    valid_word_fraction: float | None = None,
    preserves_whitespace: bool = False,
) -> float:
    """
    Map a raw breaker score onto [0, 1].

    Non-decreasing in `raw_score` with everything else fixed. NaN and
    negative scores (including -inf) normalise to 0.
    """
    if raw_score is None or math.isnan(raw_score):
        return 0.0

    score = min(max(0.0, raw_score) / SCORE_SCALE, 1.0) * weight

    if valid_word_fraction is not None:
        fraction = min(max(valid_word_fraction, 0.0), 1.0)
        score *= 0.3 + 0.7 * fraction

    if preserves_whitespace:
        score *= WHITESPACE_BONUS

    return max(0.0, min(1.0, score))


def preserves_whitespace(ciphertext: str, plaintext: str) -> bool:
    """True when whitespace sits at the same positions in both texts."""
    if len(ciphertext) != len(plaintext):
        return False
    return all(a.isspace() == b.isspace() for a, b in zip(ciphertext, plaintext))


@dataclass(frozen=True)
class RankedCandidate:
    rank: int
    candidate: Candidate


@dataclass
class OrchestrationResult:
    """Result of the decryption orchestration."""

    # All candidates above the confidence floor, best first
    candidates: list[RankedCandidate]

    methods_attempted: list[CipherType] = field(default_factory=list)

    # Cipher name -> failure reason
    methods_failed: dict[str, str] = field(default_factory=dict)

    early_exit_reason: str | None = None

    @property
    def best(self) -> RankedCandidate:
        return self.candidates[0]


class DecryptionOrchestrator:
    """
    Orchestrates the decryption process across all cipher breakers.

    Breakers run in a fixed cost order. Rail Fence is skipped once the best
    confidence reaches 0.7 and Vigenère once it reaches 0.6. A failing
    breaker is recorded and left out; only a result with nothing above the
    0.1 floor fails the whole request.
    """

    CIPHER_ORDER: ClassVar[tuple[CipherType, ...]] = (
        CipherType.CAESAR,
        CipherType.RAIL_FENCE,
        CipherType.VIGENERE,
    )

    # A cipher runs only while the best confidence so far is below its threshold
    RUN_THRESHOLDS: ClassVar[dict[CipherType, float]] = {
        CipherType.RAIL_FENCE: 0.7,
        CipherType.VIGENERE: 0.6,
    }

    MIN_CONFIDENCE: ClassVar[float] = 0.1

    def __init__(
        self,
        dictionary: Dictionary | None = None,
        settings: Settings | None = None,
        breakers: Mapping[CipherType, CipherBreaker] | None = None,
    ):
        self.settings = settings or get_settings()
        self.dictionary = dictionary if dictionary is not None else get_dictionary()
        self.registry = EngineRegistry(self.dictionary, settings=self.settings)
        self._breakers = dict(breakers) if breakers is not None else None

    def get_breaker(self, cipher_type: CipherType) -> CipherBreaker:
        if self._breakers is not None:
            return self._breakers[cipher_type]
        return self.registry.get_engine(cipher_type)

    def orchestrate(
        self,
        ciphertext: str,
        timeout_seconds: float | None = None,
    ) -> OrchestrationResult:
        """
        Run the full decryption cascade.

        Args:
            ciphertext: The ciphertext to break
            timeout_seconds: Overall time budget; defaults to the configured one

        Returns:
            OrchestrationResult with ranked candidates and run metadata

        Raises:
            InvalidInputError: Empty, blank, non-string or oversized input
            NoPlausibleDecryptionError: Nothing reached the confidence floor
        """
        self._validate_input(ciphertext)

        timeout = timeout_seconds if timeout_seconds is not None else self.settings.default_timeout_seconds
        deadline = Deadline(timeout)

        candidates: list[Candidate] = []
        attempted: list[CipherType] = []
        failed: dict[str, str] = {}
        early_exit_reason = None

        for cipher_type in self.CIPHER_ORDER:
            best_so_far = max((c.normalized_score for c in candidates), default=0.0)
            threshold = self.RUN_THRESHOLDS.get(cipher_type)
            if threshold is not None and best_so_far >= threshold:
                reason = (
                    f"Skipped {cipher_type.value}: best confidence {best_so_far:.3f} "
                    f"reached {threshold}"
                )
                logger.info(reason)
                early_exit_reason = early_exit_reason or reason
                continue

            attempted.append(cipher_type)
            candidate = self._run_breaker(cipher_type, ciphertext, deadline, failed)
            if candidate is not None:
                candidates.append(candidate)

        passing = [c for c in candidates if c.normalized_score >= self.MIN_CONFIDENCE]
        if not passing:
            logger.info("No candidate reached %.0f%% confidence", self.MIN_CONFIDENCE * 100)
            raise NoPlausibleDecryptionError(
                self.MIN_CONFIDENCE, [c.value for c in attempted], failed
            )

        passing.sort(key=self._sort_key)
        return OrchestrationResult(
            candidates=[RankedCandidate(rank, c) for rank, c in enumerate(passing, start=1)],
            methods_attempted=attempted,
            methods_failed=failed,
            early_exit_reason=early_exit_reason,
        )

    def _validate_input(self, ciphertext: object) -> None:
        if not isinstance(ciphertext, str):
            raise InvalidInputError(
                "Ciphertext must be a string",
                {"type": type(ciphertext).__name__},
            )
        if not ciphertext.strip():
            raise InvalidInputError("Ciphertext is empty")
        if len(ciphertext) > self.settings.max_ciphertext_length:
            raise CiphertextTooLongError(len(ciphertext), self.settings.max_ciphertext_length)

    def _run_breaker(
        self,
        cipher_type: CipherType,
        ciphertext: str,
        deadline: Deadline,
        failed: dict[str, str],
    ) -> Candidate | None:
        """Run one breaker and normalise its result; failures are recorded, not raised."""
        try:
            breaker = self.get_breaker(cipher_type)
            candidate = breaker.break_cipher(ciphertext, deadline)
            self._check_candidate(cipher_type, candidate)
        except CryptanalysisError as e:
            logger.warning("%s breaker failed: %s", cipher_type.value, e.message)
            failed[cipher_type.value] = e.message
            return None
        except Exception as e:
            # Breaker bug; the other methods can still answer
            logger.warning("%s breaker raised %r", cipher_type.value, e, exc_info=True)
            failed[cipher_type.value] = str(e) or type(e).__name__
            return None

        validation = candidate.validation
        normalized = normalize_score(
            candidate.raw_score,
            METHOD_WEIGHTS[cipher_type],
            validation.valid_word_fraction if validation is not None else None,
            preserves_whitespace(ciphertext, candidate.plaintext),
        )
        logger.info(
            "%s: key %s, raw score %.2f, normalised %.3f",
            cipher_type.value,
            candidate.method.display_key,
            candidate.raw_score,
            normalized,
        )
        return candidate.with_normalized_score(normalized)

    @staticmethod
    def _check_candidate(cipher_type: CipherType, candidate: object) -> None:
        if not isinstance(candidate, Candidate):
            raise MalformedCandidateError(
                cipher_type.value, f"expected a Candidate, got {type(candidate).__name__}"
            )
        if not isinstance(candidate.method, _METHOD_TYPES[cipher_type]):
            raise MalformedCandidateError(cipher_type.value, "candidate method does not match cipher")
        if not isinstance(candidate.plaintext, str):
            raise MalformedCandidateError(cipher_type.value, "candidate has no plaintext")
        if not isinstance(candidate.raw_score, (int, float)):
            raise MalformedCandidateError(cipher_type.value, "candidate has no numeric score")

    def _sort_key(self, candidate: Candidate) -> tuple[float, int, str]:
        return (
            -candidate.normalized_score,
            self.CIPHER_ORDER.index(candidate.cipher_type),
            candidate.key,
        )


def break_cipher(ciphertext: str, timeout_seconds: float | None = None) -> OrchestrationResult:
    """Break `ciphertext` with the process-wide dictionary and settings."""
    return DecryptionOrchestrator().orchestrate(ciphertext, timeout_seconds)

import logging

from cipherbreaker.core.deadline import Deadline
from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.engines.base import Candidate, CipherBreaker, RailFenceMethod
from cipherbreaker.services.engines.registry import EngineRegistry
from cipherbreaker.services.pipeline.scorer import ScoringProfile
from cipherbreaker.services.transforms import rail_fence_decode

logger = logging.getLogger(__name__)


@EngineRegistry.register
class RailFenceBreaker(CipherBreaker):
    """
    Rail Fence cipher breaker.

    The Rail Fence cipher writes the plaintext in a zigzag pattern across
    a number of "rails" (rows), then reads off each rail in order to
    produce the ciphertext.

    Example with 3 rails:
    Plaintext: WEAREDISCOVEREDFLEEATONCE

    W . . . E . . . C . . . R . . . L . . . T . . . E
    . E . R . D . S . O . E . E . F . E . A . O . C .
    . . A . . . I . . . V . . . D . . . E . . . N . .

    Read off rows: WECRLTE + ERDSOEEFEAOC + AIVDEN

    Transposition keeps every letter, so all rail counts share one frequency
    profile. Unless whitespace survives to form words, the classical score
    ties and the share of common bigrams picks the winner.
    """

    name = "Rail Fence Cipher"
    cipher_type = CipherType.RAIL_FENCE
    description = (
        "A transposition cipher that writes plaintext in a zigzag pattern "
        "across multiple 'rails' (rows), then reads each rail in sequence. "
        "The number of rails is the key."
    )

    MIN_RAILS = 2

    def break_cipher(self, ciphertext: str, deadline: Deadline | None = None) -> Candidate:
        best: Candidate | None = None
        best_rank: tuple[float, float] | None = None

        for rails in range(self.MIN_RAILS, self.settings.max_rails + 1):
            if self._out_of_time(deadline, best):
                logger.info("Rail Fence search stopped at %d rails: deadline reached", rails)
                break

            plaintext = rail_fence_decode(ciphertext, rails)
            score = self.scorer.score(plaintext, ScoringProfile.RAIL_FENCE)
            rank = (score, self.scorer.bigram_fraction(plaintext))

            # Strict comparison keeps fewer rails on full ties
            if best_rank is None or rank > best_rank:
                best = Candidate(RailFenceMethod(rails), plaintext, score)
                best_rank = rank

        return Candidate(
            best.method,
            best.plaintext,
            best.raw_score,
            validation=self.validator.validate(best.plaintext),
        )

    def explain(self, ciphertext: str, candidate: Candidate) -> str:
        rails = candidate.method.rails
        return (
            f"Rail Fence cipher with {rails} rails. "
            f"The text was written in a zigzag pattern across {rails} rows "
            f"and read off row by row."
        )

import logging

from cipherbreaker.core.deadline import Deadline
from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.engines.base import CaesarMethod, Candidate, CipherBreaker
from cipherbreaker.services.engines.registry import EngineRegistry
from cipherbreaker.services.pipeline.scorer import ScoringProfile
from cipherbreaker.services.transforms import caesar_decode

logger = logging.getLogger(__name__)


@EngineRegistry.register
class CaesarBreaker(CipherBreaker):
    """
    Caesar cipher breaker.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. With only 26 possible keys, it can be trivially broken
    by trying all shifts and scoring each result.
    """

    name = "Caesar Cipher"
    cipher_type = CipherType.CAESAR
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    def break_cipher(self, ciphertext: str, deadline: Deadline | None = None) -> Candidate:
        """Try all 26 shifts and keep the best scoring one (smallest shift on ties)."""
        best: Candidate | None = None

        for shift in range(26):
            if self._out_of_time(deadline, best):
                logger.info("Caesar search stopped at shift %d: deadline reached", shift)
                break

            plaintext = caesar_decode(ciphertext, shift)
            score = self.scorer.score(plaintext, ScoringProfile.CAESAR)

            # Strict comparison keeps the smallest shift on ties
            if best is None or score > best.raw_score:
                best = Candidate(CaesarMethod(shift), plaintext, score)

        return Candidate(
            best.method,
            best.plaintext,
            best.raw_score,
            validation=self.validator.validate(best.plaintext),
        )

    def explain(self, ciphertext: str, candidate: Candidate) -> str:
        shift = candidate.method.shift
        return (
            f"Caesar cipher with shift of {shift}. "
            f"Each letter was shifted back {shift} positions in the alphabet. "
            f"For example, the first ciphertext letter '{ciphertext[0] if ciphertext else 'N/A'}' "
            f"becomes '{candidate.plaintext[0] if candidate.plaintext else 'N/A'}'."
        )

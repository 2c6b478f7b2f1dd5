from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Union

from cipherbreaker.core.config import Settings, get_settings
from cipherbreaker.core.deadline import Deadline
from cipherbreaker.core.exceptions import EngineTimeoutError
from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.dictionary import Dictionary
from cipherbreaker.services.pipeline.scorer import LanguageScorer
from cipherbreaker.services.pipeline.validator import Validation, WordValidator


# ============================================================================
# Cipher methods
# ============================================================================


@dataclass(frozen=True)
class CaesarMethod:
    shift: int

    def __post_init__(self) -> None:
        if not 0 <= self.shift <= 25:
            raise ValueError(f"Caesar shift must be in 0..25, got {self.shift}")

    @property
    def cipher_type(self) -> CipherType:
        return CipherType.CAESAR

    @property
    def key(self) -> str:
        return str(self.shift)

    @property
    def display_key(self) -> str:
        return f"Shift {self.shift}"


@dataclass(frozen=True)
class RailFenceMethod:
    rails: int

    def __post_init__(self) -> None:
        if self.rails < 2:
            raise ValueError(f"Rail Fence needs at least 2 rails, got {self.rails}")

    @property
    def cipher_type(self) -> CipherType:
        return CipherType.RAIL_FENCE

    @property
    def key(self) -> str:
        return str(self.rails)

    @property
    def display_key(self) -> str:
        return f"{self.rails} rails"


@dataclass(frozen=True)
class VigenereMethod:
    keyword: str

    def __post_init__(self) -> None:
        keyword = self.keyword.upper()
        if not keyword or not (keyword.isascii() and keyword.isalpha()):
            raise ValueError(f"Vigenère key must be letters only, got {self.keyword!r}")
        object.__setattr__(self, "keyword", keyword)

    @property
    def cipher_type(self) -> CipherType:
        return CipherType.VIGENERE

    @property
    def key(self) -> str:
        return self.keyword

    @property
    def display_key(self) -> str:
        return f'"{self.keyword}"'


CipherMethod = Union[CaesarMethod, RailFenceMethod, VigenereMethod]


# ============================================================================
# Candidates
# ============================================================================


@dataclass(frozen=True)
class Candidate:
    """
    One decryption produced by a breaker.

    `normalized_score` stays 0.0 until the orchestrator derives a normalised
    copy with `with_normalized_score`.
    """

    method: CipherMethod
    plaintext: str
    raw_score: float
    normalized_score: float = 0.0
    validation: Validation | None = None

    @property
    def cipher_type(self) -> CipherType:
        return self.method.cipher_type

    @property
    def key(self) -> str:
        return self.method.key

    def with_normalized_score(self, score: float) -> "Candidate":
        return replace(self, normalized_score=score)


# ============================================================================
# Breakers
# ============================================================================


class CipherBreaker(ABC):
    """
    Abstract base class for all cipher breakers.

    A breaker receives the shared dictionary at construction and, given only
    ciphertext, returns its single best candidate:
    - break_cipher(): Search the key space and return the best candidate
    - explain(): Describe a candidate for humans
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType
    description: str

    def __init__(
        self,
        dictionary: Dictionary,
        scorer: LanguageScorer | None = None,
        settings: Settings | None = None,
    ):
        self.dictionary = dictionary
        self.scorer = scorer or LanguageScorer(dictionary)
        self.validator = WordValidator(dictionary)
        self.settings = settings or get_settings()

    @abstractmethod
    def break_cipher(self, ciphertext: str, deadline: Deadline | None = None) -> Candidate:
        """
        Find the most plausible key without being told it.

        Args:
            ciphertext: The ciphertext to break
            deadline: Shared request deadline, polled during enumeration

        Returns:
            Best candidate, with its validation attached

        Raises:
            EngineTimeoutError: The deadline expired before any candidate existed
        """
        pass

    @abstractmethod
    def explain(self, ciphertext: str, candidate: Candidate) -> str:
        """
        Generate human-readable explanation of a candidate.

        Args:
            ciphertext: The ciphertext that was broken
            candidate: A candidate this breaker produced

        Returns:
            Explanation string
        """
        pass

    def _out_of_time(self, deadline: Deadline | None, best: Candidate | None) -> bool:
        """True when the search must stop; raises if there is nothing to return yet."""
        if deadline is None or not deadline.expired():
            return False
        if best is None:
            raise EngineTimeoutError(self.cipher_type.value, deadline.seconds or 0.0)
        return True

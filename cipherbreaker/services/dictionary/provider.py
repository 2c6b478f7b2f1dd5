"""
Dictionary provider.

An immutable, process-lifetime word set loaded once at startup and passed by
reference into every breaker. Nothing re-reads or mutates it afterwards.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar, Iterable, Mapping

from cipherbreaker.core.config import get_settings

logger = logging.getLogger(__name__)

BUNDLED_WORD_LIST = Path(__file__).with_name("words.txt")

# Curated list of very common English words; scores Vigenère candidates and
# always counts as valid vocabulary.
COMMON_WORDS: tuple[str, ...] = (
    "THE", "BE", "TO", "OF", "AND", "A", "IN", "THAT", "HAVE", "I", "IT", "FOR",
    "NOT", "ON", "WITH", "HE", "AS", "YOU", "DO", "AT", "THIS", "BUT", "HIS", "BY",
    "FROM", "THEY", "WE", "SAY", "HER", "SHE", "OR", "AN", "WILL", "MY", "ONE",
)


def _clean(words: Iterable[str]) -> set[str]:
    cleaned = set()
    for word in words:
        word = word.strip().upper()
        if word and word.isascii() and word.isalpha():
            cleaned.add(word)
    return cleaned


@dataclass(frozen=True, eq=False)
class Dictionary:
    """
    Uppercase word set plus the curated common-word list.

    Derived views are computed once at construction:
    - `validation_words`: common words plus every listed word of 2+ letters
    - `refinement_words`: common words plus every listed word of 4+ letters,
      indexed by length for near-miss lookups
    - `key_words`: words of 3-10 letters in a fixed order, tried as Vigenère keys
    """

    MIN_KEY_WORD: ClassVar[int] = 3
    MAX_KEY_WORD: ClassVar[int] = 10

    words: frozenset[str]
    common_words: tuple[str, ...] = COMMON_WORDS

    validation_words: frozenset[str] = field(init=False, repr=False)
    refinement_by_length: Mapping[int, tuple[str, ...]] = field(init=False, repr=False)
    key_words: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        common = frozenset(self.common_words)

        validation = common | {w for w in self.words if len(w) >= 2}
        object.__setattr__(self, "validation_words", frozenset(validation))

        by_length: dict[int, list[str]] = {}
        for word in sorted(common | {w for w in self.words if len(w) >= 4}):
            by_length.setdefault(len(word), []).append(word)
        object.__setattr__(
            self,
            "refinement_by_length",
            MappingProxyType({length: tuple(group) for length, group in by_length.items()}),
        )

        key_words = sorted(
            (w for w in self.words if self.MIN_KEY_WORD <= len(w) <= self.MAX_KEY_WORD),
            key=lambda w: (len(w), w),
        )
        object.__setattr__(self, "key_words", tuple(key_words))

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self.validation_words

    def is_common(self, word: str) -> bool:
        return word.upper() in self.common_words

    def refinement_words_near(self, length: int, spread: int = 2) -> Iterable[str]:
        """Refinement vocabulary whose length is within `spread` of `length`."""
        for size in range(max(1, length - spread), length + spread + 1):
            yield from self.refinement_by_length.get(size, ())

    @classmethod
    def from_words(
        cls,
        words: Iterable[str],
        common_words: Iterable[str] = COMMON_WORDS,
    ) -> "Dictionary":
        return cls(
            words=frozenset(_clean(words)),
            common_words=tuple(w.upper() for w in common_words),
        )

    @classmethod
    def load(cls, path: Path | str) -> "Dictionary":
        """Load a newline-separated word list."""
        path = Path(path)
        with path.open(encoding="utf-8") as handle:
            dictionary = cls.from_words(handle)

        logger.info("Loaded %d words from dictionary %s", len(dictionary), path)
        return dictionary


@lru_cache
def get_dictionary() -> Dictionary:
    """Load the configured word list once per process."""
    settings = get_settings()
    return Dictionary.load(settings.word_list_path or BUNDLED_WORD_LIST)

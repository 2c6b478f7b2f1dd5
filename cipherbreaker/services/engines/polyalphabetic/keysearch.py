"""
Systematic Vigenère key enumeration.

`SystematicKeySpace` is a finite, restartable lazy sequence: every iteration
starts over from the first key and nothing is materialised up front. Callers
bound how much of it they consume with `take_bounded`, and keep only the
trials they still need in a `TrialLeaderboard`.
"""

import heapq
import itertools
import string
from typing import Callable, Iterable, Iterator

from cipherbreaker.services.engines.base import Candidate

ALPHABET = string.ascii_uppercase


class SystematicKeySpace:
    """
    All keys of one length, seeded variants first.

    Order:
    1. For each seed (padded with 'A' or truncated to `length`), every
       single-letter substitution at every position
    2. Every key in A..Z^length, lexicographically
    """

    def __init__(self, length: int, seeds: Iterable[str] = ()):
        if length < 1:
            raise ValueError("Key length must be positive")
        self.length = length
        self.seeds = tuple(seed.upper().ljust(length, "A")[:length] for seed in seeds)

    def __iter__(self) -> Iterator[str]:
        return itertools.chain(self.seeded_variants(), self.exhaustive())

    def __len__(self) -> int:
        return len(self.seeds) * self.length * 26 + 26 ** self.length

    def seeded_variants(self) -> Iterator[str]:
        for seed in self.seeds:
            for pos in range(self.length):
                for letter in ALPHABET:
                    yield seed[:pos] + letter + seed[pos + 1:]

    def exhaustive(self) -> Iterator[str]:
        for letters in itertools.product(ALPHABET, repeat=self.length):
            yield "".join(letters)


def take_bounded(
    keys: Iterable[str],
    budget: int,
    stop: Callable[[], bool] | None = None,
) -> Iterator[str]:
    """
    Yield at most `budget` keys, ending early once `stop()` returns True.

    `stop` is checked before every key, so it can react to the outcome of
    the trial made with the previously yielded key.
    """
    taken = 0
    for key in keys:
        if taken >= budget or (stop is not None and stop()):
            return
        taken += 1
        yield key


def reduce_repeating_key(key: str) -> str:
    """
    Shortest key that repeats to `key`.

    "KQZJVKQZJV" and "KQZJV" decrypt identically; the shorter one is canonical.
    """
    length = len(key)
    for period in range(1, length):
        if length % period == 0 and key[:period] * (length // period) == key:
            return key[:period]
    return key


def rank_trial(candidate: Candidate) -> tuple[float, int, str]:
    """Sort key: highest score first, then the shorter key, then alphabetical."""
    return (-candidate.raw_score, len(candidate.key), candidate.key)


class TrialLeaderboard:
    """
    The few trials a search still needs, instead of every trial it made.

    Keeps the `size` best trials by `rank_trial`, the best fully-valid
    trial and the set of keys tried so far.
    """

    def __init__(self, size: int):
        self.size = size
        self.top: list[Candidate] = []
        self.best_valid: Candidate | None = None
        self.tried: set[str] = set()

    def __len__(self) -> int:
        return len(self.tried)

    def __contains__(self, key: object) -> bool:
        return key in self.tried

    def add(self, candidate: Candidate) -> None:
        self.tried.add(candidate.key)
        self.top = heapq.nsmallest(self.size, [*self.top, candidate], key=rank_trial)

        if candidate.validation is not None and candidate.validation.is_valid:
            if self.best_valid is None or rank_trial(candidate) < rank_trial(self.best_valid):
                self.best_valid = candidate

    @property
    def best(self) -> Candidate | None:
        return self.top[0] if self.top else None

    def winner(self) -> Candidate | None:
        """Best fully-valid trial, else the top scorer."""
        return self.best_valid or self.best

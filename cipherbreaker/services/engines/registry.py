from typing import Type

from cipherbreaker.core.config import Settings
from cipherbreaker.core.exceptions import EngineNotFoundError
from cipherbreaker.models.schemas import CipherType
from cipherbreaker.services.dictionary import Dictionary
from cipherbreaker.services.engines.base import CipherBreaker
from cipherbreaker.services.pipeline.scorer import LanguageScorer


class EngineRegistry:
    """
    Registry for cipher breakers.

    Breaker classes register themselves at import time; each registry
    instance builds and caches one breaker per cipher type, all sharing the
    same dictionary and scorer.
    """

    _engines: dict[CipherType, Type[CipherBreaker]] = {}

    def __init__(self, dictionary: Dictionary, settings: Settings | None = None):
        self.dictionary = dictionary
        self.settings = settings
        self.scorer = LanguageScorer(dictionary)
        self._instances: dict[CipherType, CipherBreaker] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherBreaker]) -> Type[CipherBreaker]:
        """
        Register a breaker class.

        Can be used as a decorator:
            @EngineRegistry.register
            class CaesarBreaker(CipherBreaker):
                ...
        """
        cls._engines[engine_class.cipher_type] = engine_class
        return engine_class

    def get_engine(self, cipher_type: CipherType) -> CipherBreaker:
        """
        Get the breaker instance for the specified cipher type.

        Raises:
            EngineNotFoundError: No breaker is registered for the type
        """
        if cipher_type not in self._engines:
            raise EngineNotFoundError(str(cipher_type.value))

        # Lazy instantiation with caching
        if cipher_type not in self._instances:
            self._instances[cipher_type] = self._engines[cipher_type](
                self.dictionary, scorer=self.scorer, settings=self.settings
            )

        return self._instances[cipher_type]

    @classmethod
    def list_registered(cls) -> list[CipherType]:
        return list(cls._engines.keys())

    @classmethod
    def is_registered(cls, cipher_type: CipherType) -> bool:
        return cipher_type in cls._engines


# Import engines to trigger registration
def _load_engines() -> None:
    """Load all engine modules to trigger registration."""
    from cipherbreaker.services.engines.monoalphabetic import caesar  # noqa: F401
    from cipherbreaker.services.engines.polyalphabetic import vigenere  # noqa: F401
    from cipherbreaker.services.engines.transposition import rail_fence  # noqa: F401


# Load engines when module is imported
_load_engines()

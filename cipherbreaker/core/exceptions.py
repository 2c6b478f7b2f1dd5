from typing import Any


class CryptanalysisError(Exception):
    """Base exception for all cryptanalysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CryptanalysisError):
    """Raised when input validation fails."""

    pass


class InvalidInputError(ValidationError):
    """Raised when the ciphertext is empty or not text."""

    pass


class CiphertextTooLongError(InvalidInputError):
    """Raised when ciphertext exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Ciphertext length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class EngineError(CryptanalysisError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )


class MethodFailureError(EngineError):
    """Raised when a single breaker fails; the orchestrator recovers from it."""

    def __init__(self, engine_name: str, reason: str):
        super().__init__(
            f"Engine '{engine_name}' failed: {reason}",
            {"engine_name": engine_name, "reason": reason},
        )


class MalformedCandidateError(MethodFailureError):
    """Raised when a breaker returns a result missing required fields."""

    pass


class EngineTimeoutError(EngineError):
    """Raised when a breaker hits its deadline before producing a candidate."""

    def __init__(self, engine_name: str, timeout: float):
        super().__init__(
            f"Engine '{engine_name}' timed out after {timeout}s",
            {"engine_name": engine_name, "timeout": timeout},
        )


class NoPlausibleDecryptionError(CryptanalysisError):
    """Raised when no candidate clears the minimum confidence floor."""

    def __init__(self, floor: float, attempted: list[str], failed: dict[str, str] | None = None):
        super().__init__(
            f"No decryption reached the minimum confidence of {floor:.0%}",
            {"floor": floor, "methods_attempted": attempted, "methods_failed": failed or {}},
        )

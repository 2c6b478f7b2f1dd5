from cipherbreaker.services.analysis.statistics import StatisticalAnalyzer
from cipherbreaker.services.pipeline.orchestrator import (
    DecryptionOrchestrator,
    OrchestrationResult,
    RankedCandidate,
)


class ExplanationGenerator:
    """
    Generates human-readable explanations for cryptanalysis results.

    All explanations are grounded in actual statistics and metrics.
    Every claim references a computed number.
    """

    # Reference values for comparisons
    ENGLISH_IOC = StatisticalAnalyzer.ENGLISH_IOC
    RANDOM_IOC = StatisticalAnalyzer.RANDOM_IOC

    def __init__(self, orchestrator: DecryptionOrchestrator | None = None):
        self.analyzer = StatisticalAnalyzer()
        # Source of the breakers whose own explanation describes the best candidate
        self.orchestrator = orchestrator

    def generate(self, ciphertext: str, result: OrchestrationResult) -> list[str]:
        """
        Generate explanations for a finished run.

        Args:
            ciphertext: The ciphertext that was broken
            result: The orchestrator's ranked result

        Returns:
            List of explanation strings
        """
        explanations = []

        # 1. Explain the statistical analysis
        explanations.extend(self._explain_statistics(ciphertext))

        # 2. Explain which methods ran
        explanations.extend(self._explain_methods(result))

        # 3. Explain the ranked candidates
        for ranked in result.candidates:
            explanations.append(self.describe_candidate(ranked))

        # 4. Let the winning breaker describe its key
        best_explanation = self.explain_best(ciphertext, result)
        if best_explanation is not None:
            explanations.append(best_explanation)

        return explanations

    def explain_best(self, ciphertext: str, result: OrchestrationResult) -> str | None:
        """The winning breaker's own description of its key, when breakers are known."""
        if self.orchestrator is None or not result.candidates:
            return None
        best = result.best.candidate
        return self.orchestrator.get_breaker(best.cipher_type).explain(ciphertext, best)

    def describe_candidate(self, ranked: RankedCandidate) -> str:
        """One line per candidate, as the result listing prints it."""
        candidate = ranked.candidate
        parts = [
            f"{ranked.rank}. {candidate.cipher_type.value.replace('_', ' ').title()} cipher",
            f"key {candidate.method.display_key}",
            f"confidence {candidate.normalized_score * 100:.1f}%",
            f"raw score {candidate.raw_score:.2f}",
        ]

        validation = candidate.validation
        if validation is not None:
            parts.append(f"valid words {validation.percentage:.1f}%")
            if validation.invalid_words:
                parts.append(f"invalid words: {', '.join(validation.invalid_words[:5])}")

        return "; ".join(parts) + "."

    def _explain_statistics(self, ciphertext: str) -> list[str]:
        letters = self.analyzer.letters(ciphertext)
        if len(letters) < 2:
            return [f"The ciphertext contains {len(letters)} letters; too few for statistics."]

        ioc = self.analyzer.index_of_coincidence(letters)
        return [
            f"The ciphertext contains {len(ciphertext)} characters, {len(letters)} of them letters.",
            f"Index of Coincidence: {ioc:.4f}. {self._interpret_ioc(ioc)}",
        ]

    def _interpret_ioc(self, ioc: float) -> str:
        """Interpret the Index of Coincidence value."""
        if ioc >= 0.060:
            return (
                f"This is close to English ({self.ENGLISH_IOC:.4f}), "
                "suggesting a Caesar shift or a transposition."
            )
        elif ioc >= 0.045:
            return (
                "This is between English and random, suggesting a "
                "Vigenère cipher with a short key."
            )
        else:
            return (
                f"This is closer to random ({self.RANDOM_IOC:.4f}), "
                "suggesting a Vigenère cipher with a longer key."
            )

    def _explain_methods(self, result: OrchestrationResult) -> list[str]:
        explanations = [
            "Methods attempted: "
            + ", ".join(c.value.replace("_", " ") for c in result.methods_attempted)
            + "."
        ]

        if result.early_exit_reason:
            explanations.append(f"Early exit: {result.early_exit_reason}.")

        for method, reason in result.methods_failed.items():
            explanations.append(f"{method.replace('_', ' ').title()} failed: {reason}")

        return explanations

"""Tests for Rail Fence cipher breaker."""

import pytest

from cipherbreaker.core.config import Settings
from cipherbreaker.services.engines.base import RailFenceMethod
from cipherbreaker.services.engines.transposition.rail_fence import RailFenceBreaker
from cipherbreaker.services.pipeline.scorer import ScoringProfile
from cipherbreaker.services.transforms import rail_fence_decode, rail_fence_encode


class TestRailFenceBreaker:
    @pytest.fixture
    def engine(self, dictionary, settings):
        return RailFenceBreaker(dictionary, settings=settings)

    def test_reference_vector(self, engine):
        candidate = engine.break_cipher("WECRLTEERDSOEEFEAOCAIVDEN")

        assert candidate.method == RailFenceMethod(3)
        assert candidate.plaintext == "WEAREDISCOVEREDFLEEATONCE"

    def test_scores_tie_without_whitespace(self, engine):
        # Every rail count rearranges the same letters; bigrams settle it
        ciphertext = "WECRLTEERDSOEEFEAOCAIVDEN"
        scores = [
            engine.scorer.score(rail_fence_decode(ciphertext, rails), ScoringProfile.RAIL_FENCE)
            for rails in range(2, 6)
        ]
        assert max(scores) == pytest.approx(min(scores))

    def test_respects_max_rails(self, dictionary):
        engine = RailFenceBreaker(dictionary, settings=Settings(max_rails=2))
        candidate = engine.break_cipher("WECRLTEERDSOEEFEAOCAIVDEN")
        assert candidate.method.rails == 2

    def test_validation_attached(self, engine):
        candidate = engine.break_cipher(rail_fence_encode("WE ARE DISCOVERED", 3))
        assert candidate.validation is not None

    def test_explain(self, engine):
        candidate = engine.break_cipher("WECRLTEERDSOEEFEAOCAIVDEN")
        assert "3 rails" in engine.explain("WECRLTEERDSOEEFEAOCAIVDEN", candidate)


class TestRailFenceMethod:
    def test_display(self):
        assert RailFenceMethod(4).display_key == "4 rails"
        assert RailFenceMethod(4).key == "4"

    def test_needs_two_rails(self):
        with pytest.raises(ValueError):
            RailFenceMethod(1)

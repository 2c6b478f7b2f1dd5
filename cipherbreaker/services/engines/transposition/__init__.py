"""Transposition cipher breakers."""

from cipherbreaker.services.engines.transposition.rail_fence import RailFenceBreaker

__all__ = [
    "RailFenceBreaker",
]

"""
Compatibility scoring module.

Computes physical, mental and overall compatibility between two profiles,
with shared interests and match reasons.
"""

from .scorer import CompatibilityScorer, score, create_scorer_from_config
from .weights import ScoringWeights, PhysicalWeights, MentalWeights

__all__ = [
    "CompatibilityScorer",
    "score",
    "create_scorer_from_config",
    "ScoringWeights",
    "PhysicalWeights",
    "MentalWeights",
]

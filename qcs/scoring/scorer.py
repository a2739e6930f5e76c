"""
Compatibility scoring between two profiles.

This module is the single entry point the pairing job, the bulk sync job
and the calculator UI all call:
1. Normalizes both profile records (JSON text or mappings)
2. Computes the physical and mental sub-scores
3. Blends them into the overall score
4. Collects shared interests and match reasons

The scorer holds only its weights; calls share no mutable state and can
run concurrently.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..fusion.blend import ScoreBlender, BlendConfig
from ..profiles.schema import Profile, ScoreResult
from .mental import mental_score, shared_items
from .physical import physical_score
from .reasons import generate_reasons
from .weights import ScoringWeights

logger = logging.getLogger(__name__)


class CompatibilityScorer:
    """
    Deterministic compatibility scorer.

    Attributes:
        weights: Point tables for the physical and mental scores
        blender: Blends mental and physical scores into the overall score
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        blend_config: Optional[BlendConfig] = None
    ):
        """
        Initialize the scorer.

        Args:
            weights: ScoringWeights (product defaults when omitted)
            blend_config: BlendConfig (60% mental / 40% physical when omitted)
        """
        self.weights = weights or ScoringWeights()
        self.weights.validate()
        self.blender = ScoreBlender(blend_config)

    def score(self, profile_a: Any, profile_b: Any, now: Optional[date] = None) -> ScoreResult:
        """
        Compute compatibility between two profiles.

        Args:
            profile_a: Profile or profile-shaped mapping
            profile_b: Profile or profile-shaped mapping
            now: Evaluation date for ages (today when omitted)

        Returns:
            ScoreResult with sub-scores, overall score, shared interests
            and reasons
        """
        today = now or date.today()
        a = Profile.coerce(profile_a)
        b = Profile.coerce(profile_b)

        physical = physical_score(a, b, today, self.weights.physical)
        mental = mental_score(a, b, self.weights.mental)
        shared_interests = shared_items(a.qualities.interests, b.qualities.interests)
        reasons = generate_reasons(
            a.qualities, b.qualities, shared_interests, self.weights.max_reasons
        )
        overall = self.blender.blend(mental, physical)

        logger.debug(
            f"Compatibility score | userA={a.user_id} userB={b.user_id} "
            f"physical={physical} mental={mental} overall={overall}"
        )

        return ScoreResult(
            physical_score=physical,
            mental_score=mental,
            overall_score=overall,
            shared_interests=shared_interests,
            compatibility_reasons=reasons,
        )

    def score_batch(
        self,
        pairs: Iterable[Tuple[Any, Any]],
        now: Optional[date] = None
    ) -> List[ScoreResult]:
        """
        Compute compatibility for multiple pairs.

        Args:
            pairs: Iterable of (profile_a, profile_b) tuples
            now: Evaluation date shared by every pair

        Returns:
            List of ScoreResult objects, in input order
        """
        today = now or date.today()
        return [self.score(a, b, now=today) for a, b in pairs]


_DEFAULT_SCORER = None


def score(
    profile_a: Any,
    profile_b: Any,
    now: Optional[date] = None,
    weights: Optional[ScoringWeights] = None
) -> ScoreResult:
    """
    Score two profiles with the product default weights (or `weights`).

    Convenience wrapper around CompatibilityScorer.score.
    """
    global _DEFAULT_SCORER
    if weights is not None:
        return CompatibilityScorer(weights).score(profile_a, profile_b, now=now)
    if _DEFAULT_SCORER is None:
        _DEFAULT_SCORER = CompatibilityScorer()
    return _DEFAULT_SCORER.score(profile_a, profile_b, now=now)


def create_scorer_from_config(config: Dict[str, Any]) -> CompatibilityScorer:
    """
    Factory function to create a CompatibilityScorer from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Configured CompatibilityScorer instance
    """
    weights = ScoringWeights.from_config(config)
    blend_config = BlendConfig.from_config(config)
    logger.info(f"Initialized CompatibilityScorer with mental_weight={blend_config.mental_weight}")
    return CompatibilityScorer(weights, blend_config)

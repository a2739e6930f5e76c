"""
Score blending for compatibility and profile QCS scores.

This module combines the physical and mental sub-scores into the overall
compatibility score, and holds the rounding and clamping rules every score
in the product goes through.

Blend Formula:
    overall = round(mental_weight * mental + (1 - mental_weight) * physical)

with mental_weight = 0.6 by default. Rounding is half-up (x.5 rounds
towards +inf), not Python's round-half-to-even.

The same module provides the logic/AI blend applied when a profile QCS has
an AI opinion attached:
    total = round(0.6 * logic + 0.4 * ai)    if ai is a positive number
    total = round(logic)                      otherwise
"""

import math
from dataclasses import dataclass
from typing import Dict, Any, Optional, Union

import numpy as np

Number = Union[int, float]


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def clamp_score(value: Number, low: int = 0, high: int = 100) -> Number:
    return max(low, min(high, value))


def validate_score(score: Optional[Number]) -> int:
    """
    Round a score and clamp it to [0, 100].

    None and NaN count as 0.
    """
    if score is None or (isinstance(score, float) and math.isnan(score)):
        return 0
    return int(clamp_score(round_half_up(score)))


def blend_score(logic_score: Number, ai_score: Optional[Number], logic_weight: float = 0.6) -> int:
    """
    Blend a deterministic logic score with an optional AI score.

    The AI score is only used when it is a positive, non-NaN number.
    """
    if isinstance(ai_score, (int, float)) and not isinstance(ai_score, bool) \
            and not math.isnan(ai_score) and ai_score > 0:
        return round_half_up(logic_score * logic_weight + ai_score * (1 - logic_weight))
    return round_half_up(logic_score)


@dataclass
class BlendConfig:
    """
    Configuration for the overall score blend.

    Attributes:
        mental_weight: Weight of the mental score (1 - mental_weight for physical)
    """
    mental_weight: float = 0.6

    def validate(self) -> None:
        """Validate configuration values."""
        if not 0 <= self.mental_weight <= 1:
            raise ValueError(f"mental_weight must be in [0, 1], got {self.mental_weight}")

    @property
    def physical_weight(self) -> float:
        return 1 - self.mental_weight

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "BlendConfig":
        """Create from main config dictionary."""
        blend_config = config.get("blend", {})
        return cls(mental_weight=blend_config.get("mental_weight", 0.6))


class ScoreBlender:
    """
    Combines physical and mental scores into the overall score.

    Attributes:
        config: BlendConfig with the blend weights
    """

    def __init__(self, config: Optional[BlendConfig] = None):
        """
        Initialize the blender.

        Args:
            config: BlendConfig instance (default weights when omitted)
        """
        self.config = config or BlendConfig()
        self.config.validate()

    def blend(self, mental_score: Number, physical_score: Number) -> int:
        """
        Blend one pair of sub-scores.

        Formula: round(mental * w + physical * (1 - w))
        """
        w = self.config.mental_weight
        return round_half_up(mental_score * w + physical_score * self.config.physical_weight)

    def blend_many(self, mental_scores: np.ndarray, physical_scores: np.ndarray) -> np.ndarray:
        """
        Vectorised blend, used to re-check a bulk sync results table.

        Args:
            mental_scores: Mental scores (N,)
            physical_scores: Physical scores (N,)

        Returns:
            Integer overall scores (N,)
        """
        mental_scores = np.asarray(mental_scores, dtype=float)
        physical_scores = np.asarray(physical_scores, dtype=float)

        if len(mental_scores) != len(physical_scores):
            raise ValueError(
                f"Score arrays must have same length: "
                f"{len(mental_scores)} vs {len(physical_scores)}"
            )

        w = self.config.mental_weight
        blended = mental_scores * w + physical_scores * self.config.physical_weight
        return np.floor(blended + 0.5).astype(int)

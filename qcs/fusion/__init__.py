"""Score blending, rounding and clamping."""

from .blend import (
    ScoreBlender,
    BlendConfig,
    blend_score,
    validate_score,
    round_half_up,
)

__all__ = [
    "ScoreBlender",
    "BlendConfig",
    "blend_score",
    "validate_score",
    "round_half_up",
]

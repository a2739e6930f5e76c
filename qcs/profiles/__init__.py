"""Profile records and tolerant parsing of stored profile data."""

from .schema import Profile, Qualities, Requirements, ScoreResult
from .parsing import parse_or_default, calculate_age

__all__ = [
    "Profile",
    "Qualities",
    "Requirements",
    "ScoreResult",
    "parse_or_default",
    "calculate_age",
]

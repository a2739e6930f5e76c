"""
Point tables for the compatibility scorer.

Every constant the scorer uses lives here so that callers needing a
different weighting pass a table instead of forking the algorithm.

The defaults reproduce the product's scoring exactly, including the uneven
per-direction splits (7/8 body type fallback, 7/8 age, 12/13 trait caps,
8/9 trait fallback, 3/2 goal fallback). "a" fields apply when profile A's
preferences judge profile B, "b" fields the other way round.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Any


@dataclass
class PhysicalWeights:
    """
    Points for the physical score.

    Budgets are always added to the denominator, whether or not the
    criterion could be evaluated.
    """
    height_budget: float = 20
    height_points: float = 10

    body_type_budget: float = 15
    body_type_match_points: float = 15
    body_type_no_preference_a: float = 7
    body_type_no_preference_b: float = 8

    age_budget: float = 15
    age_points_a: float = 7
    age_points_b: float = 8

    @property
    def max_score(self) -> float:
        return self.height_budget + self.body_type_budget + self.age_budget


@dataclass
class MentalWeights:
    """Points for the mental score."""
    interests_budget: float = 30
    interest_points: float = 10
    interests_cap: float = 30

    traits_budget: float = 25
    trait_points: float = 8
    traits_cap_a: float = 12
    traits_cap_b: float = 13
    traits_no_preference_a: float = 8
    traits_no_preference_b: float = 9

    values_budget: float = 20
    value_points: float = 6
    values_cap_a: float = 10
    values_cap_b: float = 10
    values_no_preference_a: float = 6
    values_no_preference_b: float = 6

    goals_budget: float = 25
    shared_goal_points: float = 15
    goal_points: float = 5
    goals_cap_a: float = 5
    goals_cap_b: float = 5
    goals_no_preference_a: float = 3
    goals_no_preference_b: float = 2

    @property
    def max_score(self) -> float:
        return self.interests_budget + self.traits_budget + self.values_budget + self.goals_budget


@dataclass
class ScoringWeights:
    """
    Complete weights table for the compatibility scorer.

    Attributes:
        physical: Physical score point table
        mental: Mental score point table
        max_reasons: Number of compatibility reasons kept
    """
    physical: PhysicalWeights = field(default_factory=PhysicalWeights)
    mental: MentalWeights = field(default_factory=MentalWeights)
    max_reasons: int = 3

    def __post_init__(self):
        if isinstance(self.physical, dict):
            self.physical = PhysicalWeights(**self.physical)
        if isinstance(self.mental, dict):
            self.mental = MentalWeights(**self.mental)

    def validate(self) -> None:
        """Reject negative points and empty budgets."""
        for table in (self.physical, self.mental):
            for f in fields(table):
                value = getattr(table, f.name)
                if value < 0:
                    raise ValueError(f"{type(table).__name__}.{f.name} must be >= 0, got {value}")
        if self.physical.max_score <= 0:
            raise ValueError("Physical budgets must sum to a positive number")
        if self.mental.max_score <= 0:
            raise ValueError("Mental budgets must sum to a positive number")
        if self.max_reasons < 0:
            raise ValueError(f"max_reasons must be >= 0, got {self.max_reasons}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringWeights":
        """Create from dictionary."""
        return cls(
            physical=PhysicalWeights(**d.get("physical", {})),
            mental=MentalWeights(**d.get("mental", {})),
            max_reasons=d.get("max_reasons", 3),
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringWeights":
        """
        Create from main config dictionary.

        Reads the `scoring` section; keys left out keep their defaults.

        Args:
            config: Main config dictionary

        Returns:
            ScoringWeights instance
        """
        return cls.from_dict(config.get("scoring", {}) or {})

"""
Mental (personality) compatibility sub-scorer.

Criteria and budgets (always 100 in total):
- Shared interests (30): 10 points per shared interest, capped
- Personality traits (25): the other side's traits found in each side's
  preferred list, or a flat credit when that list is empty
- Values (20): same rule as traits
- Relationship goals (25): a bonus for any shared goal, plus the same
  preferred-list rule per side

With no data on either side the flat credits alone give 34.
"""

from typing import List, Sequence

from ..fusion.blend import validate_score
from ..profiles.schema import Profile
from .weights import MentalWeights


def shared_items(items_a: Sequence, items_b: Sequence) -> List:
    """Items of `items_a` also present in `items_b`, in `items_a`'s order."""
    return [item for item in items_a if item in items_b]


def count_matches(items: Sequence, preferred: Sequence) -> int:
    return sum(1 for item in items if item in preferred)


def _preference_points(
    items: Sequence,
    preferred: Sequence,
    per_match: float,
    cap: float,
    no_preference: float
) -> float:
    if not preferred:
        return no_preference
    return min(count_matches(items, preferred) * per_match, cap)


def interest_points(profile_a: Profile, profile_b: Profile, weights: MentalWeights) -> float:
    shared = shared_items(profile_a.qualities.interests, profile_b.qualities.interests)
    return min(len(shared) * weights.interest_points, weights.interests_cap)


def trait_points(profile_a: Profile, profile_b: Profile, weights: MentalWeights) -> float:
    return (
        _preference_points(
            profile_b.qualities.personality_traits,
            profile_a.requirements.preferred_personality_traits,
            weights.trait_points, weights.traits_cap_a, weights.traits_no_preference_a,
        )
        + _preference_points(
            profile_a.qualities.personality_traits,
            profile_b.requirements.preferred_personality_traits,
            weights.trait_points, weights.traits_cap_b, weights.traits_no_preference_b,
        )
    )


def value_points(profile_a: Profile, profile_b: Profile, weights: MentalWeights) -> float:
    return (
        _preference_points(
            profile_b.qualities.values,
            profile_a.requirements.preferred_values,
            weights.value_points, weights.values_cap_a, weights.values_no_preference_a,
        )
        + _preference_points(
            profile_a.qualities.values,
            profile_b.requirements.preferred_values,
            weights.value_points, weights.values_cap_b, weights.values_no_preference_b,
        )
    )


def goal_points(profile_a: Profile, profile_b: Profile, weights: MentalWeights) -> float:
    goals_a = profile_a.qualities.relationship_goals
    goals_b = profile_b.qualities.relationship_goals

    points = 0
    if shared_items(goals_a, goals_b):
        points += weights.shared_goal_points

    points += _preference_points(
        goals_b,
        profile_a.requirements.preferred_relationship_goals,
        weights.goal_points, weights.goals_cap_a, weights.goals_no_preference_a,
    )
    points += _preference_points(
        goals_a,
        profile_b.requirements.preferred_relationship_goals,
        weights.goal_points, weights.goals_cap_b, weights.goals_no_preference_b,
    )
    return points


def mental_score(profile_a: Profile, profile_b: Profile, weights: MentalWeights) -> int:
    """
    Compute the mental compatibility score.

    Args:
        profile_a: First profile
        profile_b: Second profile
        weights: Mental point table

    Returns:
        Integer score clamped to [0, 100]
    """
    score = 0
    max_score = 0

    max_score += weights.interests_budget
    score += interest_points(profile_a, profile_b, weights)

    max_score += weights.traits_budget
    score += trait_points(profile_a, profile_b, weights)

    max_score += weights.values_budget
    score += value_points(profile_a, profile_b, weights)

    max_score += weights.goals_budget
    score += goal_points(profile_a, profile_b, weights)

    return validate_score(score / max_score * 100)

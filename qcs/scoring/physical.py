"""
Physical compatibility sub-scorer.

Criteria (both directions are always evaluated and summed):
- Height: each side's height against the other's height range
- Body type: each side's body type against the other's preferred list
- Age: each side's age against the other's age range

A criterion only earns points when both profiles carry the data it needs,
but its budget always counts towards the denominator:
    physical = round(score / (height + body_type + age budgets) * 100)
"""

import logging
from datetime import date

from ..fusion.blend import round_half_up, validate_score
from ..profiles.parsing import calculate_age
from ..profiles.schema import Profile
from .weights import PhysicalWeights

logger = logging.getLogger(__name__)


def height_points(profile_a: Profile, profile_b: Profile, weights: PhysicalWeights) -> float:
    if not profile_a.height or not profile_b.height:
        return 0

    points = 0
    if profile_b.requirements.accepts_height(profile_a.height):
        points += weights.height_points
    if profile_a.requirements.accepts_height(profile_b.height):
        points += weights.height_points
    return points


def body_type_points(profile_a: Profile, profile_b: Profile, weights: PhysicalWeights) -> float:
    """
    An empty preferred list is "no preference" and earns the partial
    credit for that side; otherwise a listed body type earns full points.
    """
    body_a = profile_a.qualities.body_type
    body_b = profile_b.qualities.body_type
    if not body_a or not body_b:
        return 0

    points = 0
    preferred_a = profile_a.requirements.preferred_body_types
    if not preferred_a:
        points += weights.body_type_no_preference_a
    elif body_b in preferred_a:
        points += weights.body_type_match_points

    preferred_b = profile_b.requirements.preferred_body_types
    if not preferred_b:
        points += weights.body_type_no_preference_b
    elif body_a in preferred_b:
        points += weights.body_type_match_points
    return points


def age_points(profile_a: Profile, profile_b: Profile, today: date, weights: PhysicalWeights) -> float:
    if profile_a.date_of_birth is None or profile_b.date_of_birth is None:
        return 0

    age_a = calculate_age(profile_a.date_of_birth, today)
    age_b = calculate_age(profile_b.date_of_birth, today)

    points = 0
    if age_b is not None and profile_a.requirements.accepts_age(age_b):
        points += weights.age_points_a
    if age_a is not None and profile_b.requirements.accepts_age(age_a):
        points += weights.age_points_b
    return points


def physical_score(
    profile_a: Profile,
    profile_b: Profile,
    today: date,
    weights: PhysicalWeights
) -> int:
    """
    Compute the physical compatibility score.

    Args:
        profile_a: First profile
        profile_b: Second profile
        today: Evaluation date used for ages
        weights: Physical point table

    Returns:
        Integer score clamped to [0, 100]. A preference match awards more
        than the body type budget, so the unclamped ratio can exceed 100.
    """
    score = 0
    max_score = 0

    max_score += weights.height_budget
    score += height_points(profile_a, profile_b, weights)

    max_score += weights.body_type_budget
    score += body_type_points(profile_a, profile_b, weights)

    max_score += weights.age_budget
    score += age_points(profile_a, profile_b, today, weights)

    raw = round_half_up(score / max_score * 100)
    if raw > 100:
        logger.debug(f"Physical score {raw} above 100, clamping")
    return validate_score(raw)

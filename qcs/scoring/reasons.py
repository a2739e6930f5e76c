"""Human-readable match reasons shown on swipe cards."""

from typing import List, Sequence

from ..profiles.schema import Qualities
from .mental import shared_items


def generate_reasons(
    qualities_a: Qualities,
    qualities_b: Qualities,
    shared_interests: Sequence[str],
    max_reasons: int = 3
) -> List[str]:
    """
    Build match reasons in fixed priority order and keep the first `max_reasons`.

    Priority: shared interests, shared values, shared relationship goals,
    same education level, same communication style.
    """
    reasons = []

    if len(shared_interests) == 1:
        reasons.append(f"You both love {shared_interests[0]}")
    elif len(shared_interests) > 1:
        reasons.append(
            f"You share {len(shared_interests)} common interests including "
            f"{', '.join(str(i) for i in shared_interests[:2])}"
        )

    shared_values = shared_items(qualities_a.values, qualities_b.values)
    if shared_values:
        reasons.append(f"You both value {str(shared_values[0]).lower()}")

    shared_goals = shared_items(qualities_a.relationship_goals, qualities_b.relationship_goals)
    if shared_goals:
        reasons.append(f"You're both looking for {str(shared_goals[0]).lower()}")

    if qualities_a.education_level and qualities_a.education_level == qualities_b.education_level:
        reasons.append("You're at similar education levels")

    if qualities_a.communication_style and qualities_a.communication_style == qualities_b.communication_style:
        reasons.append(f"You both have {qualities_a.communication_style} communication styles")

    return reasons[:max_reasons]

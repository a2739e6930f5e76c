"""
Per-profile quality score (profile QCS).

A deterministic score for one profile, used to bucket users before pairing
and stored as `total_qcs`.

Formula:
    base         = 50
    age          = max(0, 1 - |age - 25| / 20) * 15
    university   = 10 if it mentions "iit", 5 for any other university
    bio          = 10 if longer than 100 chars, 5 if longer than 50
    interests    = min(len(interests) * 2, 10)
    completion   = filled(first_name, bio, interests, university, profile_images) / 5 * 10
    qcs          = clamp(round(sum), 20, 95)
"""

import logging
from dataclasses import dataclass, asdict
from datetime import date
from typing import Dict, Any, Optional

from ..fusion.blend import round_half_up, clamp_score, blend_score
from ..profiles.parsing import age_in_years
from ..profiles.schema import Profile

logger = logging.getLogger(__name__)

BASE_SCORE = 50
OPTIMAL_AGE = 25
AGE_SPREAD = 20
AGE_POINTS = 15
MIN_QCS = 20
MAX_QCS = 95
COMPLETION_FIELDS = ("first_name", "bio", "interests", "university", "profile_images")


@dataclass
class ProfileQCS:
    """
    Profile QCS record as persisted by the sync job.

    Attributes:
        user_id: Owner of the profile
        logic_score: Deterministic score from `profile_quality_score`
        ai_score: Optional AI opinion, None when not available
        total_score: Blended score stored as the profile's `total_qcs`
    """
    user_id: Optional[str]
    logic_score: int
    ai_score: Optional[float]
    total_score: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def profile_quality_score(profile: Any, today: Optional[date] = None) -> int:
    """
    Compute the deterministic quality score of one profile.

    Args:
        profile: Profile or profile-shaped mapping
        today: Evaluation date for the age factor

    Returns:
        Integer score in [20, 95]
    """
    today = today or date.today()
    p = Profile.coerce(profile)
    score = BASE_SCORE

    age = age_in_years(p.date_of_birth, today)
    if age is not None:
        age_factor = max(0, 1 - abs(age - OPTIMAL_AGE) / AGE_SPREAD)
        score += age_factor * AGE_POINTS

    if p.university and "iit" in p.university.lower():
        score += 10
    elif p.university:
        score += 5

    if len(p.bio) > 100:
        score += 10
    elif len(p.bio) > 50:
        score += 5

    score += min(len(p.interests) * 2, 10)

    completed = sum(1 for name in COMPLETION_FIELDS if getattr(p, name))
    score += completed / len(COMPLETION_FIELDS) * 10

    return int(clamp_score(round_half_up(score), MIN_QCS, MAX_QCS))


def compute_profile_qcs(
    profile: Any,
    ai_score: Optional[float] = None,
    today: Optional[date] = None
) -> ProfileQCS:
    """
    Compute the stored QCS record for a profile.

    The AI score only contributes when it is a positive number.
    """
    p = Profile.coerce(profile)
    logic = profile_quality_score(p, today)
    total = blend_score(logic, ai_score)
    return ProfileQCS(user_id=p.user_id, logic_score=logic, ai_score=ai_score, total_score=total)

"""
On-demand pairing: rank a candidate pool for one user.

Candidates are restricted to profiles whose stored QCS is close to the
user's, scored with the compatibility scorer and ordered by score. A small
jitter derived from the two user ids breaks up ties without randomness:
the same user and candidate always get the same offset.

Jitter Formula:
    h = 32-bit string hash of (user_id + candidate_id)
    jitter = ((abs(h) % 10000) / 10000 - 0.5) * 4.0     # in [-2, 2)
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..fusion.blend import clamp_score
from ..profiles.parsing import age_in_years
from ..profiles.schema import Profile
from ..scoring.scorer import CompatibilityScorer

logger = logging.getLogger(__name__)

JITTER_RANGE = 4.0


def string_hash(text: str) -> int:
    """
    32-bit string hash (h = h * 31 + code unit, signed wrap-around).

    Code units are UTF-16, so ids hash identically to the web client.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def deterministic_jitter(user_id: str, candidate_id: str) -> float:
    """Offset in [-2.0, 2.0) that depends only on the two ids."""
    h = abs(string_hash(f"{user_id}{candidate_id}"))
    normalized = (h % 10000) / 10000
    return (normalized - 0.5) * JITTER_RANGE


@dataclass
class RankedCandidate:
    """
    One ranked candidate returned by the pairing job.

    Attributes:
        candidate_id: Candidate's user id
        candidate_name: Display name
        candidate_age: Age at evaluation date, None when unknown
        candidate_qcs: Candidate's stored profile QCS (0 when unknown)
        deterministic_score: Overall compatibility score before jitter
        jitter_applied: Offset added to break ties
        final_score: Clamped score used for ordering
        breakdown: Full ScoreResult as a dict
    """
    candidate_id: Optional[str]
    candidate_name: str
    candidate_age: Optional[int]
    candidate_qcs: float
    deterministic_score: float
    jitter_applied: float
    final_score: float
    breakdown: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "candidate_name": self.candidate_name,
            "candidate_age": self.candidate_age,
            "candidate_qcs": self.candidate_qcs,
            "deterministic_score": round(self.deterministic_score, 1),
            "jitter_applied": round(self.jitter_applied, 1),
            "final_score": round(self.final_score, 1),
            "breakdown": self.breakdown,
        }


class CandidateRanker:
    """
    Ranks a candidate pool against one user.

    Attributes:
        scorer: CompatibilityScorer used for each candidate
        qcs_window: Candidates must have QCS within user QCS +/- this window
        top_n: Number of candidates returned
    """

    def __init__(
        self,
        scorer: Optional[CompatibilityScorer] = None,
        qcs_window: float = 10,
        top_n: int = 10
    ):
        if qcs_window < 0:
            raise ValueError(f"qcs_window must be >= 0, got {qcs_window}")
        if top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {top_n}")
        self.scorer = scorer or CompatibilityScorer()
        self.qcs_window = qcs_window
        self.top_n = top_n

    @classmethod
    def from_config(cls, config: Dict[str, Any], scorer: Optional[CompatibilityScorer] = None) -> "CandidateRanker":
        """Create from main config dictionary (`pairing` section)."""
        pairing_config = config.get("pairing", {}) or {}
        return cls(
            scorer=scorer,
            qcs_window=pairing_config.get("qcs_window", 10),
            top_n=pairing_config.get("top_n", 10),
        )

    def eligible(self, user: Profile, candidates: Iterable[Any]) -> List[Profile]:
        """Active candidates, other than the user, inside the QCS window."""
        user_qcs = user.total_qcs or 0
        low, high = user_qcs - self.qcs_window, user_qcs + self.qcs_window

        pool = []
        for raw in candidates:
            candidate = Profile.coerce(raw)
            if not candidate.is_active:
                continue
            if user.user_id is not None and candidate.user_id == user.user_id:
                continue
            if low <= (candidate.total_qcs or 0) <= high:
                pool.append(candidate)
        return pool

    def rank(self, user: Any, candidates: Iterable[Any], now: Optional[date] = None) -> List[RankedCandidate]:
        """
        Rank candidates for `user`.

        Args:
            user: Profile or mapping of the user asking for matches
            candidates: Candidate profiles or mappings
            now: Evaluation date

        Returns:
            Up to top_n RankedCandidate records, best first. Ties on the
            final score are ordered by candidate id.
        """
        today = now or date.today()
        user = Profile.coerce(user)
        pool = self.eligible(user, candidates)

        logger.info(
            f"Ranking {len(pool)} candidates for user {user.user_id} "
            f"(QCS {user.total_qcs or 0} +/- {self.qcs_window})"
        )

        results = []
        for candidate in pool:
            result = self.scorer.score(user, candidate, now=today)
            jitter = deterministic_jitter(user.user_id or "", candidate.user_id or "")
            final = clamp_score(result.overall_score + jitter)
            results.append(RankedCandidate(
                candidate_id=candidate.user_id,
                candidate_name=candidate.display_name,
                candidate_age=age_in_years(candidate.date_of_birth, today),
                candidate_qcs=candidate.total_qcs or 0,
                deterministic_score=float(result.overall_score),
                jitter_applied=jitter,
                final_score=final,
                breakdown=result.to_dict(),
            ))

        results.sort(key=lambda r: (-r.final_score, r.candidate_id or ""))
        return results[:self.top_n]

"""Per-profile quality score (profile QCS)."""

from .profile_score import profile_quality_score, compute_profile_qcs, ProfileQCS

__all__ = ["profile_quality_score", "compute_profile_qcs", "ProfileQCS"]

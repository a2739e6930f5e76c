"""Tests for the profile quality score."""

from qcs.quality import profile_quality_score, compute_profile_qcs


def full_profile(**overrides):
    profile = {
        "user_id": "u1",
        "first_name": "Aarav",
        "bio": "x" * 120,
        "university": "IIT Bombay",
        "interests": ["a", "b", "c", "d", "e"],
        "profile_images": ["1.jpg"],
    }
    profile.update(overrides)
    return profile


class TestProfileQualityScore:
    def test_empty_profile_is_base(self, today):
        assert profile_quality_score({}, today) == 50

    def test_full_profile_without_age(self, today):
        # 50 + 10 university + 10 bio + 10 interests + 10 completion
        assert profile_quality_score(full_profile(), today) == 90

    def test_clamped_to_max(self, today):
        assert profile_quality_score(full_profile(date_of_birth="2000-01-01"), today) == 95

    def test_university_and_bio_tiers(self, today):
        profile = {"university": "Delhi University", "bio": "y" * 60}
        # 50 + 5 + 5 + completion 2/5 * 10
        assert profile_quality_score(profile, today) == 64

    def test_age_factor(self, today):
        # 30 whole years: factor 0.75, 11.25 points
        assert profile_quality_score({"date_of_birth": "1996-01-01"}, today) == 61

    def test_interest_points(self, today):
        # 3 interests give 6 points, one completed field gives 2
        assert profile_quality_score({"interests": ["a", "b", "c"]}, today) == 58


class TestComputeProfileQCS:
    def test_logic_only(self, today):
        record = compute_profile_qcs(full_profile(), today=today)
        assert record.user_id == "u1"
        assert record.logic_score == 90
        assert record.total_score == 90
        assert record.ai_score is None

    def test_with_ai_score(self, today):
        record = compute_profile_qcs({}, ai_score=80, today=today)
        assert record.total_score == 62
        assert record.to_dict() == {
            "user_id": None,
            "logic_score": 50,
            "ai_score": 80,
            "total_score": 62,
        }

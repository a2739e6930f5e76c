"""Tests for pair enumeration and candidate ranking."""

import pytest

from qcs.pairing import (
    CandidateRanker,
    PairGenerator,
    deterministic_jitter,
    generate_pairs_for_population,
)
from qcs.pairing.ranker import string_hash


class TestPairGenerator:
    def test_all_pairs(self):
        a, b = PairGenerator().generate_pairs(4)
        pairs = list(zip(a.tolist(), b.tolist()))
        assert pairs == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_cap(self):
        a, b = PairGenerator(max_pairs=2).generate_pairs(4)
        assert list(zip(a.tolist(), b.tolist())) == [(0, 1), (0, 2)]

    def test_too_few_profiles(self):
        a, b = PairGenerator().generate_pairs(1)
        assert len(a) == 0 and len(b) == 0

    def test_negative_cap(self):
        with pytest.raises(ValueError):
            PairGenerator(max_pairs=-1)

    def test_from_config(self):
        a, _ = generate_pairs_for_population(5, {"pair_generation": {"max_pairs": None}})
        assert len(a) == 10


class TestJitter:
    def test_string_hash(self):
        assert string_hash("") == 0
        assert string_hash("ab") == 3105
        assert string_hash("hello") == 99162322

    def test_string_hash_wraps_to_signed(self):
        h = string_hash("a much longer identifier string")
        assert -2 ** 31 <= h < 2 ** 31

    def test_known_values(self):
        assert deterministic_jitter("a", "b") == pytest.approx(-0.758)
        assert deterministic_jitter("hel", "lo") == pytest.approx(-1.0712)

    def test_range_and_determinism(self):
        for i in range(50):
            value = deterministic_jitter("user", f"candidate-{i}")
            assert -2.0 <= value < 2.0
            assert value == deterministic_jitter("user", f"candidate-{i}")


def make_profile(user_id, qcs, **extra):
    profile = {
        "user_id": user_id,
        "first_name": user_id.upper(),
        "total_qcs": qcs,
        "qualities": {"interests": ["hiking"]},
    }
    profile.update(extra)
    return profile


class TestCandidateRanker:
    def test_window_filters_pool(self, today):
        user = make_profile("u1", 60)
        candidates = [
            user,
            make_profile("u2", 65),
            make_profile("u3", 75),
            make_profile("u4", 50),
            make_profile("u5", 60, is_active=False),
        ]
        ranked = CandidateRanker().rank(user, candidates, now=today)
        assert sorted(r.candidate_id for r in ranked) == ["u2", "u4"]

    def test_missing_qcs_counts_as_zero(self, today):
        user = make_profile("u1", None)
        candidates = [make_profile("u2", None), make_profile("u3", 20)]
        ranked = CandidateRanker().rank(user, candidates, now=today)
        assert [r.candidate_id for r in ranked] == ["u2"]

    def test_top_n_and_order(self, today):
        user = make_profile("u0", 50)
        candidates = [make_profile(f"u{i}", 50) for i in range(1, 15)]
        ranked = CandidateRanker(top_n=5).rank(user, candidates, now=today)
        assert len(ranked) == 5
        scores = [r.final_score for r in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_final_score_is_jittered_overall(self, profile_a, profile_b, today):
        profile_a["total_qcs"] = 70
        profile_b["total_qcs"] = 72
        ranked = CandidateRanker().rank(profile_a, [profile_b], now=today)
        assert len(ranked) == 1
        candidate = ranked[0]
        assert candidate.deterministic_score == 84
        assert candidate.jitter_applied == deterministic_jitter("u1", "u2")
        assert candidate.final_score == pytest.approx(min(100, 84 + candidate.jitter_applied))
        assert candidate.candidate_age == 30
        assert candidate.breakdown["mental_score"] == 73

    def test_candidate_age_uses_elapsed_days(self, today):
        user = make_profile("u0", 50)
        # exactly 25 calendar years, but 6 leap days short of 25 * 365.25 days
        candidate = make_profile("u1", 50, date_of_birth="2001-10-19")
        ranked = CandidateRanker().rank(user, [candidate], now=today)
        assert ranked[0].candidate_age == 24

    def test_repeatable(self, today):
        user = make_profile("u0", 50)
        candidates = [make_profile(f"u{i}", 50) for i in range(1, 8)]
        ranker = CandidateRanker()
        first = [r.to_dict() for r in ranker.rank(user, candidates, now=today)]
        second = [r.to_dict() for r in ranker.rank(user, candidates, now=today)]
        assert first == second

    def test_from_config(self):
        ranker = CandidateRanker.from_config({"pairing": {"qcs_window": 5, "top_n": 3}})
        assert ranker.qcs_window == 5
        assert ranker.top_n == 3

    def test_invalid_settings(self):
        with pytest.raises(ValueError):
            CandidateRanker(qcs_window=-1)
        with pytest.raises(ValueError):
            CandidateRanker(top_n=-1)

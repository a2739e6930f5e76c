"""End-to-end tests for the bulk sync runner."""

import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from qcs.pairing import PairGenerator
from qcs.run import run_sync, score_population
from qcs.scoring import CompatibilityScorer
from qcs.profiles import Profile

PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_PATH = PROJECT_ROOT / "configs" / "config.yaml"
SAMPLE_PATH = PROJECT_ROOT / "data" / "sample_profiles.json"


class TestScorePopulation:
    def test_rows_follow_pair_order(self, profile_a, profile_b, today):
        profiles = [Profile.from_dict(profile_a), Profile.from_dict(profile_b), Profile()]
        a, b = PairGenerator().generate_pairs(len(profiles))
        pairs = list(zip(a.tolist(), b.tolist()))

        df = score_population(CompatibilityScorer(), profiles, pairs, today, n_jobs=2, batch_size=1)
        assert len(df) == 3
        assert df["user1_id"].tolist() == ["u1", "u1", "u2"]
        assert df.iloc[0]["overall_score"] == 84
        assert df.iloc[0]["shared_interests"] == ["hiking", "music"]


class TestRunSync:
    def test_sample_run(self, tmp_path):
        result = run_sync(
            str(CONFIG_PATH),
            str(SAMPLE_PATH),
            output_dir=str(tmp_path),
            today=date(2026, 10, 19),
            rank_user="u1",
        )
        assert result["success"]
        assert result["n_profiles"] == 5
        assert result["n_pairs"] == 10

        scores = pd.read_csv(result["artifacts"]["compatibility_scores"])
        first = scores.iloc[0]
        assert (first["user1_id"], first["user2_id"]) == ("u1", "u2")
        assert first["overall_score"] == 84
        assert json.loads(first["shared_interests"]) == ["hiking", "music"]
        assert first["calculated_at"] == "2026-10-19T00:00:00"

        qcs = pd.read_csv(result["artifacts"]["profile_qcs"])
        assert qcs["total_score"].between(20, 95).all()

        report = json.loads(Path(result["artifacts"]["evaluation_report"]).read_text())
        assert report["blend_check"]["passed"] is True

        ranking = json.loads(Path(result["artifacts"]["pairing"]).read_text())
        assert ranking["user_id"] == "u1"
        candidate_ids = [c["candidate_id"] for c in ranking["top_candidates"]]
        assert "u1" not in candidate_ids
        assert "u5" not in candidate_ids

    def test_unknown_rank_user(self, tmp_path):
        with pytest.raises(ValueError):
            run_sync(str(CONFIG_PATH), str(SAMPLE_PATH), output_dir=str(tmp_path), rank_user="nobody")

"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from qcs.configs import load_config, validate_config, get_config_value
from qcs.scoring import ScoringWeights, create_scorer_from_config

CONFIG_PATH = Path(__file__).parent.parent / "configs" / "config.yaml"


@pytest.fixture
def config():
    return load_config(str(CONFIG_PATH))


class TestLoadConfig:
    def test_shipped_config_is_valid(self, config):
        assert validate_config(config) == []

    def test_shipped_weights_match_defaults(self, config):
        assert ScoringWeights.from_config(config) == ScoringWeights()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_scorer_from_config(self, config, profile_a, profile_b, today):
        scorer = create_scorer_from_config(config)
        assert scorer.score(profile_a, profile_b, now=today).overall_score == 84


class TestValidateConfig:
    def test_missing_sections(self):
        issues = validate_config({})
        assert len(issues) == 5

    def test_bad_values(self, config):
        config["blend"]["mental_weight"] = 2
        config["scoring"]["mental"]["trait_points"] = -1
        config["scoring"]["physical"]["height_points"] = "ten"
        config["pairing"]["qcs_window"] = -5
        config["bulk_sync"]["n_jobs"] = 0
        issues = validate_config(config)
        assert len(issues) == 5

    def test_non_numeric_pairing_values(self, config):
        config["pairing"]["qcs_window"] = "ten"
        config["pairing"]["top_n"] = None
        issues = validate_config(config)
        assert issues == [
            "pairing.qcs_window must be numeric, got 'ten'",
            "pairing.top_n must be numeric, got None",
        ]


class TestGetConfigValue:
    def test_nested(self, config):
        assert get_config_value(config, "scoring.mental.interest_points") == 10
        assert get_config_value(config, "pairing.top_n") == 10

    def test_default(self, config):
        assert get_config_value(config, "scoring.nope", default="x") == "x"

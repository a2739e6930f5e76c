"""Tests for bulk sync evaluation metrics."""

import json

import numpy as np
import pandas as pd
import pytest

from qcs.evaluation import (
    compute_score_distribution_stats,
    compute_subscore_agreement,
    sanity_check_blend,
    create_evaluation_report,
)
from qcs.evaluation.metrics import DEFAULT_QUANTILES, compute_reason_coverage


def results_frame():
    return pd.DataFrame({
        "physical_score": [100, 0, 50, 80],
        "mental_score": [73, 34, 60, 90],
        "overall_score": [84, 20, 56, 86],
        "compatibility_reasons": [["a", "b"], [], ["c"], ["d"]],
    })


class TestDistribution:
    def test_stats(self):
        stats = compute_score_distribution_stats(np.array([0, 50, 100]))
        assert stats.mean == 50
        assert stats.min == 0
        assert stats.max == 100
        assert stats.quantiles["p50"] == 50

    def test_default_quantiles(self):
        stats = compute_score_distribution_stats(np.array([0, 50, 100]))
        assert list(stats.quantiles) == ["p10", "p25", "p50", "p75", "p90"]
        assert isinstance(DEFAULT_QUANTILES, tuple)

    def test_empty(self):
        with pytest.raises(ValueError):
            compute_score_distribution_stats(np.array([]))


class TestAgreement:
    def test_perfect_agreement(self):
        agreement = compute_subscore_agreement(np.array([1, 2, 3]), np.array([10, 20, 30]))
        assert agreement.spearman == pytest.approx(1.0)
        assert agreement.n_pairs == 3

    def test_constant_column(self):
        assert compute_subscore_agreement(np.array([5, 5]), np.array([1, 2])).spearman == 0.0


class TestBlendCheck:
    def test_consistent_rows_pass(self):
        df = results_frame()
        check = sanity_check_blend(df["physical_score"], df["mental_score"], df["overall_score"])
        assert check.passed

    def test_uses_run_blend_weight(self):
        args = (np.array([40]), np.array([60]), np.array([50]))
        assert sanity_check_blend(*args, mental_weight=0.5).passed
        assert sanity_check_blend(*args, mental_weight=0.6).n_violations == 1

    def test_violation_detected(self):
        check = sanity_check_blend(np.array([100]), np.array([73]), np.array([83]))
        assert check.n_violations == 1
        assert not check.passed

    def test_out_of_range(self):
        check = sanity_check_blend(np.array([130]), np.array([70]), np.array([94]))
        assert check.out_of_range == 1


class TestReport:
    def test_reason_coverage(self):
        coverage = compute_reason_coverage(results_frame()["compatibility_reasons"])
        assert coverage["with_reasons"] == 0.75
        assert coverage["mean_reasons"] == 1.0

    def test_create_and_save(self, tmp_path):
        report = create_evaluation_report("test", results_frame())
        assert report.n_pairs == 4
        assert report.blend_check.passed
        assert set(report.distribution_stats) == {"physical_score", "mental_score", "overall_score"}

        path = tmp_path / "report.json"
        report.save(str(path))
        saved = json.loads(path.read_text())
        assert saved["blend_check"]["passed"] is True
        assert "Pairs scored: 4" in report.summary()

    def test_empty_results(self):
        df = results_frame().iloc[0:0]
        report = create_evaluation_report("empty", df)
        assert report.n_pairs == 0
        assert report.distribution_stats == {}

    def test_missing_columns(self):
        with pytest.raises(ValueError):
            create_evaluation_report("bad", pd.DataFrame({"physical_score": [1]}))

"""Evaluation module for bulk sync score analysis."""

from .metrics import (
    compute_score_distribution_stats,
    compute_subscore_agreement,
    sanity_check_blend,
    EvaluationReport,
    create_evaluation_report
)

__all__ = [
    "compute_score_distribution_stats",
    "compute_subscore_agreement",
    "sanity_check_blend",
    "EvaluationReport",
    "create_evaluation_report"
]

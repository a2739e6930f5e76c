"""
Evaluation metrics for bulk compatibility syncs.

There are no outcome labels for compatibility, so a sync report focuses on:
1. Score distribution analysis per score column
2. Agreement between the physical and mental sub-scores
3. Sanity checks (the overall score must follow the blend formula)
4. How often match reasons are produced

This module DOES NOT claim real-world predictive accuracy.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Sequence
import json

import numpy as np
import pandas as pd
from scipy.stats import spearmanr

from ..fusion.blend import ScoreBlender, BlendConfig

logger = logging.getLogger(__name__)

SCORE_COLUMNS = ["physical_score", "mental_score", "overall_score"]
DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 20.0, "p50": 55.0, "p90": 80.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class SubScoreAgreement:
    """Rank agreement between the physical and mental sub-scores."""
    spearman: float
    n_pairs: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spearman": float(self.spearman),
            "n_pairs": int(self.n_pairs)
        }


@dataclass
class BlendCheck:
    """Results of the overall-score sanity check."""
    n_violations: int
    violation_rate: float
    out_of_range: int

    @property
    def passed(self) -> bool:
        return self.n_violations == 0 and self.out_of_range == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_violations": int(self.n_violations),
            "violation_rate": float(self.violation_rate),
            "out_of_range": int(self.out_of_range),
            "passed": bool(self.passed)
        }


@dataclass
class EvaluationReport:
    """
    Complete evaluation report for one sync run.

    Contains distribution statistics per score column, sub-score agreement,
    the blend sanity check and reason coverage.
    """
    name: str
    n_pairs: int
    distribution_stats: Dict[str, ScoreDistributionStats]
    agreement: Optional[SubScoreAgreement] = None
    blend_check: Optional[BlendCheck] = None
    additional_metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "name": self.name,
            "n_pairs": int(self.n_pairs),
            "distribution_stats": {k: v.to_dict() for k, v in self.distribution_stats.items()},
            "additional_metrics": self.additional_metrics
        }
        if self.agreement:
            result["agreement"] = self.agreement.to_dict()
        if self.blend_check:
            result["blend_check"] = self.blend_check.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Evaluation Report: {self.name}",
            "=" * 50,
            f"Pairs scored: {self.n_pairs}",
        ]

        for column, stats in self.distribution_stats.items():
            lines.extend([
                "",
                f"{column}:",
                f"  Mean: {stats.mean:.2f}",
                f"  Std:  {stats.std:.2f}",
                f"  Min:  {stats.min:.0f}",
                f"  Max:  {stats.max:.0f}",
            ])
            for q_name, q_value in stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.1f}")

        if self.agreement:
            lines.extend([
                "",
                "Physical / Mental Agreement:",
                f"  Spearman: {self.agreement.spearman:.4f}",
            ])

        if self.blend_check:
            lines.extend([
                "",
                "Blend Check:",
                f"  Violations: {self.blend_check.n_violations} ({self.blend_check.violation_rate:.2%})",
                f"  Out of range: {self.blend_check.out_of_range}",
            ])

        for key, value in self.additional_metrics.items():
            lines.append(f"{key}: {value}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution of an empty score array")

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_subscore_agreement(physical: np.ndarray, mental: np.ndarray) -> SubScoreAgreement:
    """
    Spearman rank correlation between physical and mental scores.

    Returns 0.0 when either column is constant (correlation undefined).
    """
    physical = np.asarray(physical, dtype=float)
    mental = np.asarray(mental, dtype=float)

    if len(physical) < 2 or np.all(physical == physical[0]) or np.all(mental == mental[0]):
        return SubScoreAgreement(spearman=0.0, n_pairs=len(physical))

    correlation, _ = spearmanr(physical, mental)
    return SubScoreAgreement(spearman=float(correlation), n_pairs=len(physical))


def sanity_check_blend(
    physical: np.ndarray,
    mental: np.ndarray,
    overall: np.ndarray,
    mental_weight: float = 0.6
) -> BlendCheck:
    """
    Check that every overall score equals the half-up rounded blend of its
    sub-scores and that all scores lie in [0, 100].

    Args:
        physical: Physical scores
        mental: Mental scores
        overall: Overall scores
        mental_weight: Blend weight of the mental score

    Returns:
        BlendCheck instance
    """
    physical = np.asarray(physical, dtype=float)
    mental = np.asarray(mental, dtype=float)
    overall = np.asarray(overall, dtype=float)

    expected = ScoreBlender(BlendConfig(mental_weight=mental_weight)).blend_many(mental, physical)
    n_violations = int(np.sum(expected != overall))

    stacked = np.concatenate([physical, mental, overall])
    out_of_range = int(np.sum((stacked < 0) | (stacked > 100)))

    n = len(overall)
    return BlendCheck(
        n_violations=n_violations,
        violation_rate=n_violations / n if n > 0 else 0.0,
        out_of_range=out_of_range
    )


def compute_reason_coverage(reasons: pd.Series) -> Dict[str, float]:
    """
    Share of pairs with at least one reason, and mean reasons per pair.

    Args:
        reasons: Series of reason lists
    """
    counts = reasons.apply(lambda r: len(r) if isinstance(r, list) else 0)
    if len(counts) == 0:
        return {"with_reasons": 0.0, "mean_reasons": 0.0}
    return {
        "with_reasons": float((counts > 0).mean()),
        "mean_reasons": float(counts.mean())
    }


def create_evaluation_report(
    name: str,
    results: pd.DataFrame,
    mental_weight: float = 0.6,
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> EvaluationReport:
    """
    Create a complete evaluation report from a sync results table.

    Args:
        name: Name of the run
        results: DataFrame with physical_score, mental_score, overall_score
            and optionally compatibility_reasons columns
        mental_weight: Blend weight used by the run
        quantiles: Quantiles to compute

    Returns:
        EvaluationReport instance
    """
    missing = [c for c in SCORE_COLUMNS if c not in results.columns]
    if missing:
        raise ValueError(f"Results table missing columns: {missing}")

    if results.empty:
        logger.warning("No pairs scored; report has no distribution statistics")
        return EvaluationReport(name=name, n_pairs=0, distribution_stats={})

    dist_stats = {
        column: compute_score_distribution_stats(results[column].values, quantiles)
        for column in SCORE_COLUMNS
    }

    agreement = compute_subscore_agreement(
        results["physical_score"].values, results["mental_score"].values
    )

    blend_check = sanity_check_blend(
        results["physical_score"].values,
        results["mental_score"].values,
        results["overall_score"].values,
        mental_weight
    )
    if not blend_check.passed:
        logger.warning(f"Blend check failed: {blend_check.to_dict()}")

    additional = {}
    if "compatibility_reasons" in results.columns:
        additional["reason_coverage"] = compute_reason_coverage(results["compatibility_reasons"])

    return EvaluationReport(
        name=name,
        n_pairs=len(results),
        distribution_stats=dist_stats,
        agreement=agreement,
        blend_check=blend_check,
        additional_metrics=additional
    )

"""
Bulk sync runner for compatibility and profile QCS scores.

This is the single entrypoint for recomputing scores over a population.

Usage:
    python -m qcs.run --config configs/config.yaml --profiles data/profiles.json

The sync performs the following steps:
1. Load configuration and profiles
2. Compute the profile QCS of every profile
3. Enumerate profile pairs
4. Score every pair in parallel
5. Write result tables and an evaluation report
6. Optionally rank candidates for one user (--rank-user)
"""

import argparse
import logging
import sys
import json
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence, Tuple

import pandas as pd
from joblib import Parallel, delayed

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def _score_chunk(scorer, profiles, chunk: Sequence[Tuple[int, int]], today: date) -> List[Dict[str, Any]]:
    rows = []
    for i, j in chunk:
        a, b = profiles[i], profiles[j]
        result = scorer.score(a, b, now=today)
        row = {"user1_id": a.user_id, "user2_id": b.user_id}
        row.update(result.to_dict())
        rows.append(row)
    return rows


def score_population(
    scorer,
    profiles: List[Any],
    pairs: Sequence[Tuple[int, int]],
    today: date,
    n_jobs: int = -1,
    backend: str = "threading",
    batch_size: int = 256
) -> pd.DataFrame:
    """
    Score every pair of a population.

    Pairs are split into chunks and scored with joblib. Scoring calls share
    nothing, so chunk order does not matter; rows come back in pair order.

    Args:
        scorer: CompatibilityScorer
        profiles: Profiles indexed by the pair indices
        pairs: Sequence of (i, j) index pairs
        today: Evaluation date
        n_jobs: joblib worker count
        backend: joblib backend
        batch_size: Pairs per chunk

    Returns:
        DataFrame with one row per pair
    """
    chunks = [pairs[k:k + batch_size] for k in range(0, len(pairs), batch_size)]
    logger.info(f"Scoring {len(pairs)} pairs in {len(chunks)} chunks (n_jobs={n_jobs}, backend={backend})")

    chunk_rows = Parallel(n_jobs=n_jobs, backend=backend)(
        delayed(_score_chunk)(scorer, profiles, chunk, today) for chunk in chunks
    )

    rows = [row for chunk in chunk_rows for row in chunk]
    columns = ["user1_id", "user2_id", "physical_score", "mental_score", "overall_score",
               "shared_interests", "compatibility_reasons"]
    return pd.DataFrame(rows, columns=columns)


def run_sync(
    config_path: str,
    profiles_path: str,
    output_dir: Optional[str] = None,
    today: Optional[date] = None,
    rank_user: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run the complete bulk sync.

    Args:
        config_path: Path to the configuration YAML file
        profiles_path: Path to the profile export
        output_dir: If provided, write artifacts here instead of config default
        today: Evaluation date (system date when omitted)
        rank_user: If provided, also rank candidates for this user id

    Returns:
        Dictionary with run results and paths to artifacts
    """
    from .configs import load_config, validate_config, get_config_value
    from .data_loading import load_profiles
    from .evaluation import create_evaluation_report
    from .pairing import CandidateRanker, generate_pairs_for_population
    from .quality import compute_profile_qcs
    from .scoring import create_scorer_from_config

    logger.info("=" * 60)
    logger.info("QCS BULK SYNC")
    logger.info("=" * 60)

    config = load_config(config_path)
    issues = validate_config(config)
    if issues:
        for issue in issues:
            logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))

    today = today or date.today()
    logger.info(f"Evaluation date: {today.isoformat()}")

    out_dir = Path(output_dir or get_config_value(config, "global.output_dir", "artifacts"))
    out_dir.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # 1. Load profiles
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 1: Loading Profiles")
    logger.info("=" * 60)

    profiles = load_profiles(profiles_path)
    logger.info(f"Loaded {len(profiles)} profiles")

    # =========================================================================
    # 2. Profile QCS
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 2: Profile QCS")
    logger.info("=" * 60)

    qcs_rows = [compute_profile_qcs(p, today=today).to_dict() for p in profiles]
    qcs_df = pd.DataFrame(qcs_rows, columns=["user_id", "logic_score", "ai_score", "total_score"])
    qcs_path = out_dir / "profile_qcs.csv"
    qcs_df.to_csv(qcs_path, index=False)
    logger.info(f"Saved {len(qcs_df)} profile QCS rows to {qcs_path}")

    # Pairing reads the refreshed QCS
    for profile, row in zip(profiles, qcs_rows):
        profile.total_qcs = row["total_score"]

    # =========================================================================
    # 3. Pair compatibility
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 3: Pair Compatibility")
    logger.info("=" * 60)

    scorer = create_scorer_from_config(config)
    indices_a, indices_b = generate_pairs_for_population(len(profiles), config)
    pairs = list(zip(indices_a.tolist(), indices_b.tolist()))

    results = score_population(
        scorer, profiles, pairs, today,
        n_jobs=get_config_value(config, "bulk_sync.n_jobs", -1),
        backend=get_config_value(config, "bulk_sync.backend", "threading"),
        batch_size=get_config_value(config, "bulk_sync.batch_size", 256),
    )

    scores_path = out_dir / "compatibility_scores.csv"
    results.assign(
        shared_interests=results["shared_interests"].apply(json.dumps),
        compatibility_reasons=results["compatibility_reasons"].apply(json.dumps),
        calculated_at=datetime.combine(today, datetime.min.time()).isoformat(),
    ).to_csv(scores_path, index=False)
    logger.info(f"Saved {len(results)} pair scores to {scores_path}")

    # =========================================================================
    # 4. Evaluation report
    # =========================================================================
    logger.info("\n" + "=" * 60)
    logger.info("STEP 4: Evaluation")
    logger.info("=" * 60)

    report = create_evaluation_report(
        "bulk_sync", results, mental_weight=scorer.blender.config.mental_weight
    )
    report_path = out_dir / "evaluation_report.json"
    report.save(str(report_path))
    logger.info("\n" + report.summary())

    artifacts = {
        "profile_qcs": str(qcs_path),
        "compatibility_scores": str(scores_path),
        "evaluation_report": str(report_path),
    }

    # =========================================================================
    # 5. Candidate ranking (optional)
    # =========================================================================
    if rank_user is not None:
        logger.info("\n" + "=" * 60)
        logger.info(f"STEP 5: Ranking Candidates for {rank_user}")
        logger.info("=" * 60)

        user = next((p for p in profiles if p.user_id == rank_user), None)
        if user is None:
            raise ValueError(f"User not found in profiles: {rank_user}")

        ranker = CandidateRanker.from_config(config, scorer=scorer)
        ranked = ranker.rank(user, profiles, now=today)

        ranking_path = out_dir / f"pairing_{rank_user}.json"
        with open(ranking_path, "w") as f:
            json.dump({
                "user_id": rank_user,
                "qcs": user.total_qcs,
                "qcs_range": [(user.total_qcs or 0) - ranker.qcs_window,
                              (user.total_qcs or 0) + ranker.qcs_window],
                "top_candidates": [r.to_dict() for r in ranked],
            }, f, indent=2)
        logger.info(f"Saved {len(ranked)} ranked candidates to {ranking_path}")
        artifacts["pairing"] = str(ranking_path)

    return {
        "success": True,
        "n_profiles": len(profiles),
        "n_pairs": len(results),
        "artifacts": artifacts,
    }


def _parse_date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM-DD, got {value!r}")


def main():
    """Main entry point for the bulk sync."""
    parser = argparse.ArgumentParser(
        description="Recompute compatibility and profile QCS scores for a population"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--profiles",
        type=str,
        required=True,
        help="Path to profile export (.json, .jsonl, .csv, .yaml)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for artifacts (overrides config)"
    )
    parser.add_argument(
        "--today",
        type=_parse_date_arg,
        default=None,
        help="Evaluation date YYYY-MM-DD (default: system date)"
    )
    parser.add_argument(
        "--rank-user",
        type=str,
        default=None,
        help="Also rank candidates for this user id"
    )

    args = parser.parse_args()

    try:
        result = run_sync(
            args.config,
            args.profiles,
            output_dir=args.output_dir,
            today=args.today,
            rank_user=args.rank_user,
        )
        if result["success"]:
            logger.info("\nSync completed successfully!")
            return 0
        else:
            logger.error("\nSync failed!")
            return 1
    except Exception as e:
        logger.exception(f"Sync failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Pair enumeration and candidate ranking."""

from .generator import PairGenerator, generate_pairs_for_population
from .ranker import CandidateRanker, RankedCandidate, deterministic_jitter

__all__ = [
    "PairGenerator",
    "generate_pairs_for_population",
    "CandidateRanker",
    "RankedCandidate",
    "deterministic_jitter",
]

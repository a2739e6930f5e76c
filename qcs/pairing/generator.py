"""
Pair enumeration for bulk compatibility sync.

Key Design Decisions:
- Pairs are unordered: (A, B) and (B, A) are considered the same pair
- Self-pairs are excluded: (A, A) is never generated
- Enumeration order is fixed so repeated syncs touch pairs in the same order
"""

import logging
from typing import Tuple, Optional

import numpy as np

logger = logging.getLogger(__name__)


class PairGenerator:
    """
    Generator for profile index pairs.

    Attributes:
        max_pairs: Maximum number of pairs to generate (None for all)
    """

    def __init__(self, max_pairs: Optional[int] = None):
        """
        Initialize the pair generator.

        Args:
            max_pairs: Maximum number of pairs to generate
        """
        if max_pairs is not None and max_pairs < 0:
            raise ValueError(f"max_pairs must be >= 0, got {max_pairs}")
        self.max_pairs = max_pairs

    def generate_pairs(self, n_persons: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate unordered pairs of profile indices.

        Args:
            n_persons: Number of profiles

        Returns:
            Tuple of (indices_a, indices_b) arrays where each
            (indices_a[i], indices_b[i]) is a pair with indices_a[i] < indices_b[i],
            in row-major order and truncated to max_pairs
        """
        max_possible = n_persons * (n_persons - 1) // 2
        target_pairs = max_possible if self.max_pairs is None else min(self.max_pairs, max_possible)

        logger.info(f"Generating {target_pairs} pairs from {n_persons} profiles")

        if target_pairs == 0:
            return np.zeros(0, dtype=int), np.zeros(0, dtype=int)

        indices_a, indices_b = np.triu_indices(n_persons, k=1)
        indices_a = indices_a[:target_pairs]
        indices_b = indices_b[:target_pairs]

        if target_pairs < max_possible:
            logger.warning(f"Pair cap reached: {max_possible - target_pairs} pairs skipped")

        return indices_a, indices_b


def generate_pairs_for_population(n_persons: int, config: dict) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convenience function to generate pairs from config.

    Args:
        n_persons: Number of profiles in the population
        config: Configuration dictionary with pair_generation settings

    Returns:
        Tuple of (indices_a, indices_b)
    """
    pair_config = config.get("pair_generation", {}) or {}
    generator = PairGenerator(max_pairs=pair_config.get("max_pairs"))
    return generator.generate_pairs(n_persons)

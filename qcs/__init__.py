"""
QCS Compatibility Scoring

This package implements the deterministic compatibility scorer behind the
swipe and pairing features, plus the batch and pairing jobs that call it.

Key Design Decisions:
- One consolidated scorer; weight differences between callers are a weights
  table, not forked logic
- Scoring is pure: no I/O, no randomness, evaluation date injected
- Malformed profile data fails soft to empty defaults
- Physical and mental scores are blended 40/60 into the overall score
"""

__version__ = "1.0.0"

"""
Domain models for progress statistics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressSummary:
    """
    Dashboard summary over the whole progress set.

    Attributes:
        total_seen: Number of items reviewed at least once.
        learned_count: Items with at least two consecutive successful reviews.
        due_count: Items whose next review time has passed.
        average_ease: Mean ease factor, rounded to two decimals (2.5 if empty).
    """

    total_seen: int
    learned_count: int
    due_count: int
    average_ease: float

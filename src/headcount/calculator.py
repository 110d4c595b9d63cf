"""Weighted headcount used for catering and seating.

Teens and children count as fractional adults. Every place that produces a
headcount (RSVP submission, snapshot aggregation) goes through
``compute_headcount`` so stored and displayed values never drift apart.
"""

ADULT_WEIGHT = 1.0
TEEN_WEIGHT = 0.75
CHILD_WEIGHT = 0.3


def compute_headcount(adults: int, teens: int, children: int) -> float:
    return adults * ADULT_WEIGHT + teens * TEEN_WEIGHT + children * CHILD_WEIGHT


def display_headcount(value: float) -> float:
    """Round a stored headcount for presentation only."""
    return round(value, 2)

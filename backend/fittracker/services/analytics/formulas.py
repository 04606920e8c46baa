"""
Numeric building blocks shared by the coaching functions.
"""
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Sequence, Tuple

from fittracker.services.analytics.domain import MuscleGroup, WorkoutSession

TRAILING_WEEK = timedelta(days=7)


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """
    Epley estimate of a one-rep maximum.

    e1RM = weight * (1 + reps / 30)
    """
    return weight * (1 + reps / 30.0)


def linear_regression(points: Sequence[Tuple[float, float]]) -> Tuple[float, float]:
    """
    Ordinary least squares fit through (x, y) points.

    Returns:
        (slope, intercept). A degenerate fit (no points, or every x equal)
        yields a slope of 0 and the mean of y as intercept.
    """
    n = len(points)
    if n == 0:
        return 0.0, 0.0

    sum_x = sum(x for x, _ in points)
    sum_y = sum(y for _, y in points)
    sum_xy = sum(x * y for x, y in points)
    sum_xx = sum(x * x for x, _ in points)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return 0.0, sum_y / n

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def completed_within(
    sessions: Iterable[WorkoutSession],
    now: datetime,
    window: timedelta = TRAILING_WEEK,
) -> List[WorkoutSession]:
    """
    Completed sessions with now - window < date <= now.

    A session dated exactly `window` before `now` is outside the window.
    """
    cutoff = now - window
    return [s for s in sessions if s.is_completed and cutoff < s.date <= now]


def sets_per_muscle(sessions: Iterable[WorkoutSession]) -> Dict[MuscleGroup, int]:
    """Set count per muscle group, with every group present (in canonical order)."""
    counts = {group: 0 for group in MuscleGroup}
    for session in sessions:
        for exercise in session.exercises:
            counts[exercise.muscle_group] += len(exercise.sets)
    return counts


def volume_per_muscle(sessions: Iterable[WorkoutSession]) -> Dict[MuscleGroup, float]:
    """Lifted volume per muscle group, with every group present."""
    totals = {group: 0.0 for group in MuscleGroup}
    for session in sessions:
        for exercise in session.exercises:
            totals[exercise.muscle_group] += exercise.volume
    return totals


def session_density(session: WorkoutSession) -> float:
    """Lifted volume per minute; 0 when the session has no duration."""
    if not session.duration or session.duration <= 0:
        return 0.0
    return session.total_volume / (session.duration / 60)

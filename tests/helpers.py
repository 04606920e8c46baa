"""Builders for synthetic workout histories."""
from datetime import datetime, timedelta

from fittracker.services.analytics.domain import (
    Exercise,
    MuscleGroup,
    WorkoutSession,
    WorkoutSet,
    WorkoutType,
)

# A Sunday
NOW = datetime(2026, 10, 18, 12, 0, 0)


def sets(count, reps=10, weight=100.0, rpe=8):
    return tuple(WorkoutSet(reps=reps, weight=weight, rpe=rpe) for _ in range(count))


def exercise(name, group=MuscleGroup.CHEST, set_list=()):
    return Exercise(name=name, muscle_group=group, sets=tuple(set_list))


def session(days_ago=1.0, exercises=(), completed=True, duration=None, **kwargs):
    return WorkoutSession(
        date=NOW - timedelta(days=days_ago),
        exercises=tuple(exercises),
        is_completed=completed,
        duration=duration,
        **kwargs,
    )


def group_session(counts, days_ago=1.0):
    """One session with `counts[group]` sets for each muscle group given."""
    return session(
        days_ago=days_ago,
        exercises=[exercise(f"{g.value} work", g, sets(n)) for g, n in counts.items()],
    )


def bench_history(e1rms, days_ago=(6, 4, 2), name="Bench Press", rpe=8):
    """Sessions whose best bench set has exactly the given e1RM (30 reps doubles the weight)."""
    return [
        session(
            days_ago=d,
            exercises=[exercise(name, MuscleGroup.CHEST, [WorkoutSet(reps=30, weight=e / 2, rpe=rpe)])],
        )
        for e, d in zip(e1rms, days_ago)
    ]


def cardio(days_ago=1.0, workout_type=WorkoutType.RUN, distance=5000.0, duration=1800.0, **kwargs):
    return session(days_ago=days_ago, type=workout_type, distance=distance, duration=duration, **kwargs)

"""
Longer-range views over the history: muscle balance, the consistency
heatmap and lifetime totals.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Sequence

from fittracker.services.analytics.domain import (
    MuscleGroup,
    WorkoutFilter,
    WorkoutSession,
    WorkoutType,
)
from fittracker.services.analytics.formulas import completed_within, volume_per_muscle

METRES_TO_MILES = 0.000621371

# Upper bounds (exclusive) of heatmap intensity levels 1-3; above is level 4
HEATMAP_LEVELS = (2_000, 5_000, 10_000)


@dataclass(frozen=True)
class MuscleVolume:
    muscle: MuscleGroup
    volume: float
    share: float  # relative to the largest group, 0-1


@dataclass(frozen=True)
class HeatmapCell:
    day: date
    volume: float
    level: int


def muscle_volume_distribution(
    sessions: Sequence[WorkoutSession],
    now: datetime,
    days: int = 30,
) -> List[MuscleVolume]:
    """
    Volume per muscle group over the trailing window, canonical order.

    Only completed sessions strictly after `now - days` count.
    """
    totals = volume_per_muscle(completed_within(sessions, now, timedelta(days=days)))
    max_volume = max(totals.values())

    return [
        MuscleVolume(
            muscle=group,
            volume=volume,
            share=volume / max_volume if max_volume else 0.0,
        )
        for group, volume in totals.items()
    ]


def heatmap_level(volume: float) -> int:
    if volume <= 0:
        return 0
    for level, bound in enumerate(HEATMAP_LEVELS, start=1):
        if volume < bound:
            return level
    return len(HEATMAP_LEVELS) + 1


def consistency_heatmap(
    sessions: Sequence[WorkoutSession],
    today: date,
    weeks: int = 15,
) -> List[List[HeatmapCell]]:
    """
    Calendar grid of daily volume, one list of seven days per week.

    The grid starts on the Sunday of the week `weeks - 1` weeks before
    `today`, so the final column holds the current week.
    """
    daily: Dict[date, float] = defaultdict(float)
    for session in sessions:
        daily[session.date.date()] += session.total_volume

    start = today - timedelta(weeks=weeks - 1)
    # date.weekday(): Monday=0 ... Sunday=6
    start -= timedelta(days=(start.weekday() + 1) % 7)

    grid = []
    for week in range(weeks):
        column = []
        for weekday in range(7):
            day = start + timedelta(days=week * 7 + weekday)
            volume = daily.get(day, 0.0)
            column.append(HeatmapCell(day=day, volume=volume, level=heatmap_level(volume)))
        grid.append(column)
    return grid


# ========================================
# History helpers
# ========================================

def lifetime_volume(sessions: Sequence[WorkoutSession]) -> int:
    return int(sum(s.total_volume for s in sessions))


def format_volume(volume: int) -> str:
    """Compact volume label: 950, 12.5k, 1.2M."""
    if volume >= 1_000_000:
        return f"{volume / 1_000_000:.1f}M"
    if volume >= 1_000:
        return f"{volume / 1_000:.1f}k"
    return str(volume)


def filter_sessions(
    sessions: Sequence[WorkoutSession],
    workout_filter: WorkoutFilter = WorkoutFilter.ALL,
) -> List[WorkoutSession]:
    """Sessions matching the filter, newest first."""
    ordered = sorted(sessions, key=lambda s: s.date, reverse=True)
    if workout_filter is WorkoutFilter.STRENGTH:
        return [s for s in ordered if s.type is WorkoutType.STRENGTH]
    if workout_filter is WorkoutFilter.CARDIO:
        return [s for s in ordered if s.type.is_cardio]
    return ordered


def session_headline(session: WorkoutSession) -> str:
    """Short badge text for a history row."""
    if session.type is WorkoutType.STRENGTH:
        return f"{int(session.total_volume)} lbs"
    miles = (session.distance or 0) * METRES_TO_MILES
    return f"{miles:.2f} mi"

from datetime import date

import pytest

from fittracker.services.analytics import trends
from fittracker.services.analytics.domain import MuscleGroup, WorkoutFilter, WorkoutType

from helpers import NOW, cardio, exercise, session, sets


def test_muscle_volume_distribution_is_relative_to_largest_group():
    history = [
        session(days_ago=2, exercises=[exercise("Squat", MuscleGroup.LEGS, sets(4))]),
        session(days_ago=5, exercises=[exercise("Bench", MuscleGroup.CHEST, sets(2))]),
        session(days_ago=40, exercises=[exercise("Curl", MuscleGroup.ARMS, sets(10))]),
    ]

    distribution = trends.muscle_volume_distribution(history, NOW)

    assert [m.muscle for m in distribution] == list(MuscleGroup)
    by_muscle = {m.muscle: m for m in distribution}
    assert by_muscle[MuscleGroup.LEGS].share == pytest.approx(1.0)
    assert by_muscle[MuscleGroup.CHEST].share == pytest.approx(0.5)
    assert by_muscle[MuscleGroup.ARMS].volume == 0


def test_muscle_volume_distribution_empty():
    assert all(m.share == 0 for m in trends.muscle_volume_distribution([], NOW))


def test_muscle_volume_distribution_counts_completed_sessions_inside_window():
    history = [
        session(days_ago=30, exercises=[exercise("Squat", MuscleGroup.LEGS, sets(10))]),
        session(days_ago=1, completed=False, exercises=[exercise("Row", MuscleGroup.BACK, sets(10))]),
        session(days_ago=3, exercises=[exercise("Bench", MuscleGroup.CHEST, sets(2))]),
    ]

    by_muscle = {m.muscle: m for m in trends.muscle_volume_distribution(history, NOW)}

    assert by_muscle[MuscleGroup.CHEST].volume == 2000
    assert by_muscle[MuscleGroup.CHEST].share == pytest.approx(1.0)
    assert by_muscle[MuscleGroup.LEGS].volume == 0
    assert by_muscle[MuscleGroup.BACK].volume == 0


@pytest.mark.parametrize(
    "volume, level",
    [(0, 0), (1, 1), (1999, 1), (2000, 2), (4999, 2), (5000, 3), (9999, 3), (10000, 4)],
)
def test_heatmap_level(volume, level):
    assert trends.heatmap_level(volume) == level


def test_consistency_heatmap_starts_on_sunday():
    grid = trends.consistency_heatmap([], date(2026, 10, 18))

    assert len(grid) == 15
    assert all(len(week) == 7 for week in grid)
    assert grid[0][0].day == date(2026, 7, 12)
    assert grid[-1][0].day == date(2026, 10, 18)


def test_consistency_heatmap_midweek():
    grid = trends.consistency_heatmap([], date(2026, 10, 21))

    assert grid[0][0].day == date(2026, 7, 12)
    assert grid[-1][3].day == date(2026, 10, 21)


def test_consistency_heatmap_sums_daily_volume():
    history = [
        session(days_ago=0, exercises=[exercise("Bench", set_list=sets(3))]),
        session(days_ago=0.1, exercises=[exercise("Row", set_list=sets(3))]),
    ]

    grid = trends.consistency_heatmap(history, NOW.date())

    today = grid[-1][0]
    assert today.volume == pytest.approx(6000)
    assert today.level == 3


def test_format_volume():
    assert trends.format_volume(950) == "950"
    assert trends.format_volume(12_500) == "12.5k"
    assert trends.format_volume(1_200_000) == "1.2M"


def test_lifetime_volume():
    history = [session(exercises=[exercise("Bench", set_list=sets(2))]), cardio()]

    assert trends.lifetime_volume(history) == 2000


def test_filter_sessions_newest_first():
    old_lift = session(days_ago=5, exercises=[exercise("Bench", set_list=sets(1))])
    new_lift = session(days_ago=1, exercises=[exercise("Bench", set_list=sets(1))])
    run = cardio(days_ago=3)
    swim = cardio(days_ago=2, workout_type=WorkoutType.SWIM)
    history = [old_lift, run, new_lift, swim]

    assert trends.filter_sessions(history) == [new_lift, swim, run, old_lift]
    assert trends.filter_sessions(history, WorkoutFilter.STRENGTH) == [new_lift, old_lift]
    assert trends.filter_sessions(history, WorkoutFilter.CARDIO) == [swim, run]


def test_session_headline():
    lift = session(exercises=[exercise("Bench", set_list=sets(2, reps=5, weight=135))])

    assert trends.session_headline(lift) == "1350 lbs"
    assert trends.session_headline(cardio(distance=5000)) == "3.11 mi"
    assert trends.session_headline(cardio(distance=None)) == "0.00 mi"

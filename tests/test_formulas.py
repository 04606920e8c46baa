from datetime import timedelta

import pytest

from fittracker.services.analytics.domain import MuscleGroup
from fittracker.services.analytics.formulas import (
    completed_within,
    estimate_one_rep_max,
    linear_regression,
    session_density,
    sets_per_muscle,
    volume_per_muscle,
)

from helpers import NOW, exercise, group_session, session, sets


def test_epley_estimate():
    assert estimate_one_rep_max(100, 30) == pytest.approx(200)
    assert estimate_one_rep_max(100, 10) == pytest.approx(133.333, rel=1e-4)
    assert estimate_one_rep_max(100, 0) == pytest.approx(100)


def test_epley_applies_to_single_reps():
    assert estimate_one_rep_max(300, 1) == pytest.approx(310)


def test_linear_regression_exact_line():
    slope, intercept = linear_regression([(0, 1), (1, 3), (2, 5)])

    assert slope == pytest.approx(2)
    assert intercept == pytest.approx(1)


def test_linear_regression_degenerate_inputs():
    assert linear_regression([]) == (0.0, 0.0)
    assert linear_regression([(1, 4), (1, 6)]) == (0.0, 5.0)


def test_completed_within_window_bounds():
    inside = session(days_ago=3)
    boundary = session(days_ago=7)
    future = session(days_ago=-0.5)
    open_session = session(days_ago=1, completed=False)

    result = completed_within([inside, boundary, future, open_session], NOW)

    assert result == [inside]


def test_completed_within_custom_window():
    old = session(days_ago=20)

    assert completed_within([old], NOW) == []
    assert completed_within([old], NOW, timedelta(days=30)) == [old]


def test_sets_per_muscle_includes_every_group_in_order():
    counts = sets_per_muscle([group_session({MuscleGroup.ARMS: 4, MuscleGroup.CHEST: 2})])

    assert list(counts) == list(MuscleGroup)
    assert counts[MuscleGroup.ARMS] == 4
    assert counts[MuscleGroup.CHEST] == 2
    assert counts[MuscleGroup.CORE] == 0


def test_volume_per_muscle_sums_weight_times_reps():
    history = [
        session(exercises=[exercise("Squat", MuscleGroup.LEGS, sets(3, reps=5, weight=200))]),
        session(exercises=[exercise("Lunge", MuscleGroup.LEGS, sets(2, reps=10, weight=50))]),
    ]

    assert volume_per_muscle(history)[MuscleGroup.LEGS] == pytest.approx(4000)


def test_session_density():
    timed = session(duration=600, exercises=[exercise("Row", set_list=sets(3))])

    assert session_density(timed) == pytest.approx(300)
    assert session_density(session(exercises=[exercise("Row", set_list=sets(3))])) == 0.0

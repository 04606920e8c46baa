import pytest

from fittracker.services.analytics import routines
from fittracker.services.analytics.domain import MuscleGroup, UnknownRoutineError, WorkoutType

from helpers import NOW, exercise, session, sets


def test_catalog_names():
    assert list(routines.ROUTINES) == [
        "Back / Bi",
        "Chest / Tri",
        "Upper Body",
        "Lower Body",
        "Legs (Hamstring)",
        "Legs (Quads)",
        "Full Body",
    ]


def test_unknown_routine():
    with pytest.raises(UnknownRoutineError):
        routines.get_routine("Arms Day")


def test_start_session_uses_templates_first_time():
    started = routines.start_session("Chest / Tri", [], NOW)

    assert started.date == NOW
    assert started.type is WorkoutType.STRENGTH
    assert not started.is_completed
    assert started.notes == "Chest / Tri"
    assert [e.name for e in started.exercises] == ["Bench Press", "Overhead Press", "Tricep Pushdowns"]
    assert all(not e.sets for e in started.exercises)


def test_start_session_copies_last_completed_session_without_sets():
    older = session(
        days_ago=9,
        notes="Lower Body",
        exercises=[exercise("Squats", MuscleGroup.LEGS, sets(3))],
    )
    latest = session(
        days_ago=2,
        notes="Lower Body",
        exercises=[
            exercise("Front Squat", MuscleGroup.LEGS, sets(4)),
            exercise("Calf Raise", MuscleGroup.LEGS, sets(2)),
        ],
    )
    unfinished = session(
        days_ago=1,
        completed=False,
        notes="Lower Body",
        exercises=[exercise("Hack Squat", MuscleGroup.LEGS, sets(1))],
    )

    started = routines.start_session("Lower Body", [older, latest, unfinished], NOW)

    assert [e.name for e in started.exercises] == ["Front Squat", "Calf Raise"]
    assert all(e.sets == () for e in started.exercises)


def test_routine_preview():
    done = session(
        notes="Back / Bi",
        exercises=[exercise("Deadlift", MuscleGroup.BACK), exercise("Curl", MuscleGroup.ARMS)],
    )
    empty = session(notes="Full Body")

    assert routines.routine_preview("Back / Bi", [done]) == "Deadlift, Curl"
    assert routines.routine_preview("Full Body", [empty]) == "No exercises recorded"
    assert routines.routine_preview("Upper Body", [done]) == "New (Blank)"

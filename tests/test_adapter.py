from datetime import datetime

import pytest

from fittracker.services.analytics.adapter import (
    HealthImportAdapter,
    ManualAdapter,
    get_adapter,
    parse_timestamp,
    serialize_session,
)
from fittracker.services.analytics.domain import MuscleGroup, WorkoutType


@pytest.mark.parametrize(
    "value",
    [
        "2026-10-18T12:00:00",
        "2026-10-18T12:00:00Z",
        "2026-10-18T14:00:00+02:00",
        1792324800000,
        datetime(2026, 10, 18, 12),
    ],
)
def test_parse_timestamp_returns_naive_utc(value):
    assert parse_timestamp(value) == datetime(2026, 10, 18, 12)


def test_parse_timestamp_rejects_unknown_types():
    with pytest.raises(ValueError):
        parse_timestamp(None)


def test_manual_adapter_reads_app_format():
    raw = {
        "id": "abc",
        "date": "2026-10-17T09:30:00Z",
        "type": "strength",
        "isCompleted": True,
        "duration": 3600,
        "notes": "Chest / Tri",
        "exercises": [
            {
                "name": "Bench Press",
                "muscleGroup": "Chest",
                "sets": [{"reps": 8, "weight": 185, "rpe": 8}, {"reps": 6, "weight": 195}],
            },
            {"name": "Tricep Pushdowns", "muscleGroup": "Arms", "sets": []},
        ],
    }

    session = ManualAdapter().normalize(raw)

    assert session.id == "abc"
    assert session.date == datetime(2026, 10, 17, 9, 30)
    assert session.is_completed
    assert session.type is WorkoutType.STRENGTH
    assert session.duration == 3600.0
    assert session.notes == "Chest / Tri"
    assert session.exercises[0].sets[1].rpe == 0
    assert session.exercises[1].muscle_group is MuscleGroup.ARMS
    assert session.total_volume == 185 * 8 + 195 * 6


def test_manual_adapter_rejects_unknown_muscle_group():
    raw = {"date": "2026-10-17T09:30:00", "exercises": [{"name": "Neck Curl", "muscleGroup": "Neck"}]}

    with pytest.raises(ValueError):
        ManualAdapter().normalize(raw)


@pytest.mark.parametrize(
    "bad_set",
    [
        {"reps": None, "weight": 100},
        {"reps": 5, "weight": "heavy"},
        {"reps": [5], "weight": 100},
        {"reps": 5, "weight": 100, "rpe": {"value": 8}},
    ],
)
def test_manual_adapter_rejects_unusable_set_numbers(bad_set):
    raw = {
        "date": "2026-10-17T09:30:00",
        "exercises": [{"name": "Bench Press", "muscleGroup": "Chest", "sets": [bad_set]}],
    }

    with pytest.raises(ValueError):
        ManualAdapter().normalize(raw)


def test_manual_adapter_rejects_unusable_session_numbers():
    raw = {"date": "2026-10-17T09:30:00", "distance": {"km": 5}}

    with pytest.raises(ValueError):
        ManualAdapter().normalize(raw)


def test_manual_round_trip_keeps_identity():
    raw = {
        "id": "xyz",
        "date": "2026-10-17T09:30:00",
        "type": "run",
        "isCompleted": True,
        "distance": 5000,
        "duration": 1500,
    }

    first = ManualAdapter().normalize(raw)
    second = ManualAdapter().normalize(serialize_session(first))

    assert second == first


@pytest.mark.parametrize(
    "activity, expected",
    [
        ("HKWorkoutActivityTypeRunning", WorkoutType.RUN),
        ("HKWorkoutActivityTypeCycling", WorkoutType.CYCLE),
        ("HKWorkoutActivityTypeSwimming", WorkoutType.SWIM),
        ("HKWorkoutActivityTypeTraditionalStrengthTraining", WorkoutType.STRENGTH),
        ("HKWorkoutActivityTypeYoga", WorkoutType.WALK),
    ],
)
def test_health_import_maps_activity_types(activity, expected):
    raw = {"workoutActivityType": activity, "startDate": "2026-10-17T07:00:00Z"}

    assert HealthImportAdapter().normalize(raw).type is expected


def test_health_import_reads_totals_and_duration():
    raw = {
        "workoutActivityType": "running",
        "startDate": "2026-10-17T07:00:00Z",
        "endDate": "2026-10-17T07:30:00Z",
        "totalDistance": 5000,
        "totalEnergyBurned": 320,
        "averageHeartRate": 151,
    }

    session = HealthImportAdapter().normalize(raw)

    assert session.is_completed
    assert session.exercises == ()
    assert session.duration == 1800.0
    assert session.distance == 5000.0
    assert session.calories == 320.0
    assert session.average_heart_rate == 151.0


def test_health_import_requires_start_date():
    with pytest.raises(ValueError):
        HealthImportAdapter().normalize({"workoutActivityType": "running"})


def test_health_import_rejects_unusable_duration():
    raw = {"workoutActivityType": "running", "startDate": "2026-10-17T07:00:00Z", "duration": {"s": 1}}

    with pytest.raises(ValueError):
        HealthImportAdapter().normalize(raw)


def test_health_import_rejects_end_before_start():
    raw = {
        "workoutActivityType": "running",
        "startDate": "2026-10-17T07:30:00Z",
        "endDate": "2026-10-17T07:00:00Z",
    }

    with pytest.raises(ValueError):
        HealthImportAdapter().normalize(raw)


def test_get_adapter():
    assert isinstance(get_adapter("health"), HealthImportAdapter)
    assert isinstance(get_adapter("MANUAL"), ManualAdapter)
    assert isinstance(get_adapter("garmin"), ManualAdapter)

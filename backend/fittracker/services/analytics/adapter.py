"""
Data Source Adapters - Normalize raw workout payloads into domain sessions.

Supported sources:
- Manual input / app backups (the camelCase format the API emits)
- Imported workouts from a health platform feed (cardio, always completed)
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fittracker.core.logging import get_logger
from fittracker.services.analytics.domain import (
    BodyMetric,
    Exercise,
    MuscleGroup,
    WorkoutSession,
    WorkoutSet,
    WorkoutType,
)

logger = get_logger(__name__)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a timestamp into a naive UTC datetime.

    Accepts datetimes, ISO 8601 strings and epoch milliseconds.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _number(value: Any, cast=float):
    """Convert a payload number, raising ValueError for any unusable value."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Expected a number, got {value!r}")
    return cast(float(value)) if cast is int else cast(value)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return _number(value)


class RawDataAdapter(ABC):
    """Abstract base class for data source adapters."""

    source_name: str = "unknown"
    default_type: WorkoutType = WorkoutType.STRENGTH

    @abstractmethod
    def normalize(self, raw_data: Dict[str, Any]) -> WorkoutSession:
        """
        Normalize raw data to a domain session.

        Args:
            raw_data: Raw data from the source

        Returns:
            WorkoutSession snapshot
        """
        pass

    def _detect_workout_type(self, raw_data: Dict[str, Any]) -> WorkoutType:
        """Detect workout type from raw data."""
        # Common field names for activity type
        type_fields = ["type", "activityType", "activity_type", "workoutActivityType", "sport"]

        for field_name in type_fields:
            if raw_data.get(field_name):
                return self._map_workout_type(str(raw_data[field_name]))

        return self.default_type

    def _map_workout_type(self, raw_type: str) -> WorkoutType:
        """Map source-specific type to unified type."""
        cycling_types = ["cycle", "cycling", "ride", "bike", "virtualride"]
        running_types = ["run", "running", "treadmill", "jog"]
        walking_types = ["walk", "walking", "hike", "hiking"]
        swimming_types = ["swim", "swimming", "pool", "open_water"]
        strength_types = ["strength", "weighttraining", "weight_training", "gym", "lifting"]

        raw_lower = raw_type.lower()

        if any(t in raw_lower for t in strength_types):
            return WorkoutType.STRENGTH
        if any(t in raw_lower for t in cycling_types):
            return WorkoutType.CYCLE
        if any(t in raw_lower for t in running_types):
            return WorkoutType.RUN
        if any(t in raw_lower for t in walking_types):
            return WorkoutType.WALK
        if any(t in raw_lower for t in swimming_types):
            return WorkoutType.SWIM

        return self.default_type


class ManualAdapter(RawDataAdapter):
    """
    Adapter for sessions entered in the app or restored from a backup.

    Expected format:
    {
        "id": "...",
        "date": "2024-01-15T10:00:00" | epoch ms,
        "type": "strength",
        "isCompleted": true,
        "exercises": [
            {"name": "Bench Press", "muscleGroup": "Chest",
             "sets": [{"reps": 8, "weight": 185, "rpe": 8}]}
        ],
        "duration": 3600,         // seconds
        "distance": 5000,         // metres
        "averageHeartRate": 130,
        "calories": 400,
        "notes": "Chest / Tri"
    }
    """

    source_name = "manual"

    def normalize(self, raw_data: Dict[str, Any]) -> WorkoutSession:
        exercises = tuple(self._parse_exercise(e) for e in raw_data.get("exercises") or [])

        kwargs: Dict[str, Any] = {}
        if raw_data.get("id"):
            kwargs["id"] = str(raw_data["id"])

        session = WorkoutSession(
            date=parse_timestamp(raw_data["date"]),
            exercises=exercises,
            is_completed=bool(raw_data.get("isCompleted", False)),
            type=self._detect_workout_type(raw_data),
            distance=_optional_float(raw_data.get("distance")),
            duration=_optional_float(raw_data.get("duration")),
            average_heart_rate=_optional_float(raw_data.get("averageHeartRate")),
            calories=_optional_float(raw_data.get("calories")),
            latitude=_optional_float(raw_data.get("latitude")),
            longitude=_optional_float(raw_data.get("longitude")),
            notes=raw_data.get("notes"),
            **kwargs,
        )
        return session

    def _parse_exercise(self, raw: Dict[str, Any]) -> Exercise:
        sets = tuple(
            WorkoutSet(
                reps=_number(s.get("reps", 0), int),
                weight=_number(s.get("weight", 0.0)),
                rpe=_number(s.get("rpe") or 0, int),
            )
            for s in raw.get("sets") or []
        )
        return Exercise(
            name=str(raw["name"]),
            muscle_group=MuscleGroup(raw.get("muscleGroup", MuscleGroup.CHEST.value)),
            sets=sets,
        )


class HealthImportAdapter(RawDataAdapter):
    """
    Adapter for workouts synced from a phone health platform.

    Imported workouts have no exercise breakdown and are always completed.
    Distances arrive in metres, durations in seconds.
    """

    source_name = "health"
    default_type = WorkoutType.WALK

    def normalize(self, raw_data: Dict[str, Any]) -> WorkoutSession:
        start = raw_data.get("startDate") or raw_data.get("start_date") or raw_data.get("date")
        if start is None:
            raise ValueError("Imported workout has no start date")

        session = WorkoutSession(
            date=parse_timestamp(start),
            is_completed=True,
            type=self._detect_workout_type(raw_data),
            distance=_optional_float(raw_data.get("totalDistance", raw_data.get("distance"))),
            duration=self._extract_duration(raw_data),
            average_heart_rate=_optional_float(raw_data.get("averageHeartRate")),
            calories=_optional_float(raw_data.get("totalEnergyBurned", raw_data.get("calories"))),
        )

        logger.debug(
            "Normalized imported workout",
            workout_type=session.type.value,
            duration=session.duration,
        )
        return session

    def _extract_duration(self, raw_data: Dict[str, Any]) -> Optional[float]:
        """Extract duration in seconds."""
        if raw_data.get("duration") is not None:
            return _optional_float(raw_data["duration"])
        if raw_data.get("startDate") and raw_data.get("endDate"):
            start = parse_timestamp(raw_data["startDate"])
            end = parse_timestamp(raw_data["endDate"])
            if end < start:
                raise ValueError("Imported workout ends before it starts")
            return (end - start).total_seconds()
        return None


# ========================================
# Serialization back to the app format
# ========================================

def serialize_session(session: WorkoutSession) -> Dict[str, Any]:
    """Domain session to the camelCase payload ManualAdapter reads."""
    return {
        "id": session.id,
        "date": session.date.isoformat(),
        "type": session.type.value,
        "isCompleted": session.is_completed,
        "exercises": serialize_exercises(list(session.exercises)),
        "distance": session.distance,
        "duration": session.duration,
        "averageHeartRate": session.average_heart_rate,
        "calories": session.calories,
        "latitude": session.latitude,
        "longitude": session.longitude,
        "notes": session.notes,
        "totalVolume": session.total_volume,
    }


def serialize_exercises(exercises: List[Exercise]) -> List[Dict[str, Any]]:
    return [
        {
            "name": e.name,
            "muscleGroup": e.muscle_group.value,
            "sets": [{"reps": s.reps, "weight": s.weight, "rpe": s.rpe} for s in e.sets],
        }
        for e in exercises
    ]


def serialize_metric(metric: BodyMetric) -> Dict[str, Any]:
    return {
        "id": metric.id,
        "date": metric.date.isoformat(),
        "weight": metric.weight,
        "bodyFat": metric.body_fat,
    }


# ========================================
# Factory
# ========================================

_ADAPTERS: Dict[str, RawDataAdapter] = {
    "manual": ManualAdapter(),
    "health": HealthImportAdapter(),
}


def get_adapter(source: str) -> RawDataAdapter:
    """
    Get adapter for a data source.

    Args:
        source: Source name (manual, health)

    Returns:
        Appropriate adapter instance
    """
    adapter = _ADAPTERS.get(source.lower())
    if adapter is None:
        logger.warning("Unknown data source, using manual adapter", source=source)
        return _ADAPTERS["manual"]
    return adapter

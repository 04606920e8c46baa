"""
Domain types for workout analytics.

These are immutable snapshots: the analytics engine only ever reads them,
and the mutation helpers return new objects instead of changing old ones.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class MuscleGroup(str, Enum):
    """The six muscle-group buckets, declared in canonical order."""
    CHEST = "Chest"
    BACK = "Back"
    LEGS = "Legs"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    CORE = "Core"


class WorkoutType(str, Enum):
    STRENGTH = "strength"
    RUN = "run"
    WALK = "walk"
    CYCLE = "cycle"
    SWIM = "swim"

    @property
    def is_cardio(self) -> bool:
        return self is not WorkoutType.STRENGTH


class RecompFocus(str, Enum):
    """Body-recomposition goal that drives the volume and step targets."""
    STANDARD = "Standard"
    FAT_LOSS = "Fat Loss"
    MUSCLE = "Muscle"

    @property
    def weekly_set_target(self) -> int:
        return _WEEKLY_SET_TARGETS[self]

    @property
    def step_target(self) -> int:
        return 10_000 if self is RecompFocus.FAT_LOSS else 8_000


_WEEKLY_SET_TARGETS = {
    RecompFocus.FAT_LOSS: 12,
    RecompFocus.STANDARD: 15,
    RecompFocus.MUSCLE: 18,
}


class VolumeTier(str, Enum):
    OPTIMAL = "Optimal"
    BUILDING = "Building"
    BEHIND = "Behind"


class WorkoutFilter(str, Enum):
    ALL = "all"
    STRENGTH = "strength"
    CARDIO = "cardio"


class SessionCompletedError(ValueError):
    """Raised when trying to change a session that has been completed."""


class ExerciseNotFoundError(ValueError):
    """Raised when a set is logged against an exercise the session lacks."""


class UnknownRoutineError(ValueError):
    """Raised for routine names outside the catalog."""


@dataclass(frozen=True)
class WorkoutSet:
    reps: int
    weight: float
    rpe: int = 0  # 0 = unspecified

    def __post_init__(self):
        if self.reps < 0:
            raise ValueError(f"reps must be >= 0, got {self.reps}")
        if self.weight < 0:
            raise ValueError(f"weight must be >= 0, got {self.weight}")
        if not 0 <= self.rpe <= 10:
            raise ValueError(f"rpe must be within 0-10, got {self.rpe}")

    @property
    def volume(self) -> float:
        return self.weight * self.reps


@dataclass(frozen=True)
class Exercise:
    name: str
    muscle_group: MuscleGroup = MuscleGroup.CHEST
    sets: Tuple[WorkoutSet, ...] = ()

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)

    def matches(self, name: str) -> bool:
        """Case- and whitespace-insensitive name comparison."""
        return normalize_exercise_name(self.name) == normalize_exercise_name(name)

    def best_set(self) -> Optional[WorkoutSet]:
        """Heaviest set by weight; the earliest one wins a tie."""
        if not self.sets:
            return None
        return max(self.sets, key=lambda s: s.weight)


@dataclass(frozen=True)
class WorkoutSession:
    date: datetime
    exercises: Tuple[Exercise, ...] = ()
    is_completed: bool = False
    type: WorkoutType = WorkoutType.STRENGTH
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    distance: Optional[float] = None  # metres
    duration: Optional[float] = None  # seconds
    average_heart_rate: Optional[float] = None
    calories: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    notes: Optional[str] = None  # routine the session was started from

    @property
    def total_volume(self) -> float:
        return sum(e.volume for e in self.exercises)

    @property
    def total_sets(self) -> int:
        return sum(len(e.sets) for e in self.exercises)

    def find_exercise(self, name: str) -> Optional[Exercise]:
        for exercise in self.exercises:
            if exercise.matches(name):
                return exercise
        return None


@dataclass(frozen=True)
class BodyMetric:
    date: datetime
    weight: Optional[float] = None
    body_fat: Optional[float] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class OverloadThresholds:
    """
    Product-tuned cut-offs for the regression-based overload advice.

    Slopes are in lbs of estimated 1RM gained per logged session.
    """
    high_velocity_slope: float = 2.5
    steady_slope: float = 0.5
    plateau_slope: float = -1.0
    detraining_days: float = 14.0


@dataclass(frozen=True)
class VolumeStatus:
    label: str
    tier: VolumeTier


def normalize_exercise_name(name: str) -> str:
    return " ".join(name.split()).casefold()


# ========================================
# Session mutation (returns new snapshots)
# ========================================

def _ensure_open(session: WorkoutSession) -> None:
    if session.is_completed:
        raise SessionCompletedError(f"Session {session.id} is completed and read-only")


def add_exercise(
    session: WorkoutSession,
    name: str,
    muscle_group: MuscleGroup,
) -> WorkoutSession:
    """Append an empty exercise to an in-progress session."""
    _ensure_open(session)
    return replace(
        session,
        exercises=session.exercises + (Exercise(name=name.strip(), muscle_group=muscle_group),),
    )


def log_set(session: WorkoutSession, exercise_name: str, workout_set: WorkoutSet) -> WorkoutSession:
    """Append a set to the named exercise of an in-progress session."""
    _ensure_open(session)

    exercises = list(session.exercises)
    for index, exercise in enumerate(exercises):
        if exercise.matches(exercise_name):
            exercises[index] = replace(exercise, sets=exercise.sets + (workout_set,))
            return replace(session, exercises=tuple(exercises))

    raise ExerciseNotFoundError(f"Session {session.id} has no exercise named {exercise_name!r}")


def complete_session(session: WorkoutSession, duration: Optional[float] = None) -> WorkoutSession:
    """Mark a session completed; afterwards it is only read by analytics."""
    _ensure_open(session)
    if duration is None:
        duration = session.duration
    return replace(session, is_completed=True, duration=duration)

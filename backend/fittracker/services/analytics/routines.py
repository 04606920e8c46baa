"""
Routine catalog and starting new sessions from it.

A session started from a routine remembers the routine name in `notes`;
the next time the same routine is started, the exercises of the most
recent completed session are carried over with their sets cleared.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Sequence, Tuple

from fittracker.services.analytics.domain import (
    Exercise,
    MuscleGroup,
    UnknownRoutineError,
    WorkoutSession,
    WorkoutType,
)


@dataclass(frozen=True)
class ExerciseTemplate:
    name: str
    muscle_group: MuscleGroup


@dataclass(frozen=True)
class Routine:
    name: str
    description: str
    templates: Tuple[ExerciseTemplate, ...] = ()


ROUTINES: Dict[str, Routine] = {
    routine.name: routine
    for routine in (
        Routine(
            "Back / Bi",
            "Back and Biceps",
            (
                ExerciseTemplate("Deadlift", MuscleGroup.BACK),
                ExerciseTemplate("Pull Ups", MuscleGroup.BACK),
                ExerciseTemplate("Bicep Curls", MuscleGroup.ARMS),
            ),
        ),
        Routine(
            "Chest / Tri",
            "Chest, Shoulders, Triceps",
            (
                ExerciseTemplate("Bench Press", MuscleGroup.CHEST),
                ExerciseTemplate("Overhead Press", MuscleGroup.SHOULDERS),
                ExerciseTemplate("Tricep Pushdowns", MuscleGroup.ARMS),
            ),
        ),
        Routine("Upper Body", "Chest, Back, Shoulders, Arms"),
        Routine(
            "Lower Body",
            "Lower Body",
            (
                ExerciseTemplate("Squats", MuscleGroup.LEGS),
                ExerciseTemplate("Leg Press", MuscleGroup.LEGS),
            ),
        ),
        Routine("Legs (Hamstring)", "Posterior chain"),
        Routine("Legs (Quads)", "Anterior chain"),
        Routine("Full Body", "Everything"),
    )
}

NEW_ROUTINE_PREVIEW = "New (Blank)"
EMPTY_ROUTINE_PREVIEW = "No exercises recorded"


def get_routine(name: str) -> Routine:
    try:
        return ROUTINES[name]
    except KeyError:
        raise UnknownRoutineError(f"Unknown routine: {name}") from None


def last_routine_session(
    routine_name: str,
    sessions: Sequence[WorkoutSession],
) -> Optional[WorkoutSession]:
    """Most recent completed session started from the routine."""
    matching = [s for s in sessions if s.notes == routine_name and s.is_completed]
    if not matching:
        return None
    return max(matching, key=lambda s: s.date)


def routine_preview(routine_name: str, sessions: Sequence[WorkoutSession]) -> str:
    """Exercises done the last time the routine was trained."""
    last = last_routine_session(routine_name, sessions)
    if last is None:
        return NEW_ROUTINE_PREVIEW
    if not last.exercises:
        return EMPTY_ROUTINE_PREVIEW
    return ", ".join(e.name for e in last.exercises)


def start_session(
    routine_name: str,
    sessions: Sequence[WorkoutSession],
    now: datetime,
) -> WorkoutSession:
    """
    Create an in-progress strength session for a routine.

    Exercises come from the last completed session of the routine, falling
    back to the routine's templates the first time it is used.
    """
    routine = get_routine(routine_name)
    last = last_routine_session(routine_name, sessions)

    if last is not None:
        exercises = tuple(
            Exercise(name=e.name, muscle_group=e.muscle_group) for e in last.exercises
        )
    else:
        exercises = tuple(
            Exercise(name=t.name, muscle_group=t.muscle_group) for t in routine.templates
        )

    return WorkoutSession(
        date=now,
        exercises=exercises,
        type=WorkoutType.STRENGTH,
        notes=routine.name,
    )

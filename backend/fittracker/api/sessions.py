"""
Workout Sessions API endpoints.
"""
import uuid
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import AliasChoices, BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.api.deps import get_calculator, get_now
from fittracker.core.database import get_db
from fittracker.core.logging import get_logger
from fittracker.services.analytics import InsightsCalculator, SessionStore, get_adapter
from fittracker.services.analytics.adapter import serialize_session
from fittracker.services.analytics.domain import (
    ExerciseNotFoundError,
    MuscleGroup,
    SessionCompletedError,
    UnknownRoutineError,
    WorkoutFilter,
    WorkoutSession,
    WorkoutSet,
    WorkoutType,
    add_exercise,
    complete_session,
    log_set,
)
from fittracker.services.analytics.routines import start_session
from fittracker.services.analytics.trends import filter_sessions, session_headline

logger = get_logger(__name__)
router = APIRouter()


# ========================================
# Request/Response Schemas
# ========================================

class SetPayload(BaseModel):
    reps: int = Field(..., ge=0)
    weight: float = Field(..., ge=0)
    rpe: int = Field(0, ge=0, le=10, description="0 = not reported")


class ExercisePayload(BaseModel):
    name: str = Field(..., min_length=1)
    muscleGroup: MuscleGroup = MuscleGroup.CHEST
    sets: list[SetPayload] = Field(default_factory=list)


class CreateSessionRequest(BaseModel):
    """Request to log a workout session directly."""
    date: Optional[datetime] = Field(None, description="Defaults to now")
    type: WorkoutType = WorkoutType.STRENGTH
    isCompleted: bool = False
    exercises: list[ExercisePayload] = Field(default_factory=list)
    distance: Optional[float] = Field(None, ge=0, description="Metres")
    duration: Optional[float] = Field(None, ge=0, description="Seconds")
    averageHeartRate: Optional[float] = Field(None, ge=0)
    calories: Optional[float] = Field(None, ge=0)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    notes: Optional[str] = Field(None, max_length=100)


class StartRoutineRequest(BaseModel):
    routine: str = Field(..., description="Routine name from the catalog")


class SessionPayload(CreateSessionRequest):
    """A stored session in the app format, as exported in backups."""
    id: Optional[uuid.UUID] = None
    date: datetime


class HealthWorkoutPayload(BaseModel):
    """One workout from a health platform feed."""
    workoutActivityType: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("workoutActivityType", "activityType", "type", "sport"),
    )
    startDate: datetime = Field(..., validation_alias=AliasChoices("startDate", "start_date", "date"))
    endDate: Optional[datetime] = None
    duration: Optional[float] = Field(None, ge=0, description="Seconds")
    totalDistance: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("totalDistance", "distance"), description="Metres"
    )
    totalEnergyBurned: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("totalEnergyBurned", "calories")
    )
    averageHeartRate: Optional[float] = Field(None, ge=0)


class ImportSessionsRequest(BaseModel):
    """Workouts synced from a health platform."""
    workouts: list[HealthWorkoutPayload]


class AddExerciseRequest(BaseModel):
    name: str = Field(..., min_length=1)
    muscleGroup: MuscleGroup


class LogSetRequest(SetPayload):
    exercise: str = Field(..., min_length=1)


class CompleteSessionRequest(BaseModel):
    duration: Optional[float] = Field(None, ge=0, description="Seconds")


class SessionResponse(BaseModel):
    """Workout session response."""
    id: str
    date: str
    type: str
    isCompleted: bool
    exercises: list[dict[str, Any]]
    distance: Optional[float]
    duration: Optional[float]
    averageHeartRate: Optional[float]
    calories: Optional[float]
    latitude: Optional[float]
    longitude: Optional[float]
    notes: Optional[str]
    totalVolume: float
    headline: str


def _to_response(session: WorkoutSession) -> SessionResponse:
    return SessionResponse(**serialize_session(session), headline=session_headline(session))


async def _load_or_404(store: SessionStore, session_id: str) -> WorkoutSession:
    session = await store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# ========================================
# API Endpoints
# ========================================

@router.post("", response_model=SessionResponse)
async def create_session(
    request: CreateSessionRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Log a workout session.
    """
    payload = request.model_dump(mode="json")
    payload["date"] = request.date or now
    session = get_adapter("manual").normalize(payload)

    await SessionStore(db).save(session)
    logger.info("Session created", session_id=session.id, workout_type=session.type.value)

    return _to_response(session)


@router.post("/from-routine", response_model=SessionResponse)
async def create_session_from_routine(
    request: StartRoutineRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Start an in-progress session from a routine, reusing the exercises
    of the last time the routine was trained.
    """
    store = SessionStore(db)
    history = await store.list_sessions()

    try:
        session = start_session(request.routine, history, now)
    except UnknownRoutineError as e:
        raise HTTPException(status_code=404, detail=str(e))

    await store.save(session)
    logger.info(
        "Session started from routine",
        session_id=session.id,
        routine=request.routine,
        exercises=len(session.exercises),
    )
    return _to_response(session)


@router.post("/import", response_model=list[SessionResponse])
async def import_sessions(
    request: ImportSessionsRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Import completed workouts from a health platform feed.
    """
    adapter = get_adapter("health")
    payloads = [raw.model_dump(mode="json", exclude_none=True) for raw in request.workouts]
    try:
        sessions = [adapter.normalize(payload) for payload in payloads]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid workout: {e}")

    store = SessionStore(db)
    for session in sessions:
        await store.save(session)

    logger.info("Imported workouts", count=len(sessions))
    return [_to_response(s) for s in sessions]


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    workout_filter: WorkoutFilter = Query(WorkoutFilter.ALL, alias="filter"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get workout sessions, newest first.
    """
    sessions = await SessionStore(db).list_sessions()
    return [_to_response(s) for s in filter_sessions(sessions, workout_filter)]


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Get a specific session by ID.
    """
    session = await _load_or_404(SessionStore(db), session_id)
    return _to_response(session)


@router.get("/{session_id}/summary")
async def get_session_summary(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    calculator: InsightsCalculator = Depends(get_calculator),
):
    """
    Per-session statistics (summary, breakdown, events).
    """
    session = await _load_or_404(SessionStore(db), session_id)
    return calculator.summarize_session(session)


@router.post("/{session_id}/exercises", response_model=SessionResponse)
async def add_session_exercise(
    session_id: str,
    request: AddExerciseRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Add an exercise to an in-progress session.
    """
    store = SessionStore(db)
    session = await _load_or_404(store, session_id)

    try:
        session = add_exercise(session, request.name, request.muscleGroup)
    except SessionCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    await store.save(session)
    return _to_response(session)


@router.post("/{session_id}/sets", response_model=SessionResponse)
async def log_session_set(
    session_id: str,
    request: LogSetRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Log a set against one of the session's exercises.
    """
    store = SessionStore(db)
    session = await _load_or_404(store, session_id)
    workout_set = WorkoutSet(reps=request.reps, weight=request.weight, rpe=request.rpe)

    try:
        session = log_set(session, request.exercise, workout_set)
    except SessionCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    await store.save(session)
    logger.info(
        "Set logged",
        session_id=session_id,
        exercise=request.exercise,
        reps=request.reps,
        weight=request.weight,
    )
    return _to_response(session)


@router.post("/{session_id}/complete", response_model=SessionResponse)
async def complete_workout(
    session_id: str,
    request: CompleteSessionRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Finish a session. Without an explicit duration, the time since the
    session started is used.
    """
    store = SessionStore(db)
    session = await _load_or_404(store, session_id)

    duration = request.duration
    if duration is None and session.duration is None:
        duration = max((now - session.date).total_seconds(), 0.0)

    try:
        session = complete_session(session, duration)
    except SessionCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    await store.save(session)
    logger.info("Session completed", session_id=session_id, duration=session.duration)
    return _to_response(session)


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a workout session.
    """
    deleted = await SessionStore(db).delete(session_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Session not found")

    logger.info("Session deleted", session_id=session_id)
    return {"message": "Session deleted"}

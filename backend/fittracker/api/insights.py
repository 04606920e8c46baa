"""
Coaching Insights API endpoints.

Each request loads a fresh snapshot of the history and hands it to the
calculator; nothing is cached between requests.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.api.deps import get_calculator, get_focus, get_now
from fittracker.core.database import get_db
from fittracker.services.analytics import InsightsCalculator, PreferenceStore, SessionStore
from fittracker.services.analytics import coaching
from fittracker.services.analytics.domain import RecompFocus

router = APIRouter()


@router.get("/today")
async def today(
    exercise: str | None = Query(None, description="Exercise for the overload insight"),
    db: AsyncSession = Depends(get_db),
    focus: RecompFocus = Depends(get_focus),
    now: datetime = Depends(get_now),
    calculator: InsightsCalculator = Depends(get_calculator),
):
    """
    The daily trainer briefing.
    """
    sessions = await SessionStore(db).list_sessions()
    recovery = await PreferenceStore(db).get_recovery()

    briefing = calculator.today_briefing(
        sessions,
        focus=focus,
        now=now,
        recovery_score=int(recovery["score"]),
        exercise_name=exercise,
    )
    return briefing.to_dict()


@router.get("/volume")
async def volume_status(
    db: AsyncSession = Depends(get_db),
    focus: RecompFocus = Depends(get_focus),
    now: datetime = Depends(get_now),
):
    """
    Weekly volume tier against the focus target.
    """
    sessions = await SessionStore(db).list_sessions()
    status = coaching.analyze_volume_status(sessions, focus, now)
    return {
        "label": status.label,
        "tier": status.tier.value,
        "weeklySetTarget": coaching.weekly_set_target(focus),
    }


@router.get("/balance")
async def muscle_balance(
    days: int = Query(30, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
    focus: RecompFocus = Depends(get_focus),
    now: datetime = Depends(get_now),
    calculator: InsightsCalculator = Depends(get_calculator),
):
    """
    Weak-link detection, upper/lower symmetry and per-muscle volume.
    """
    sessions = await SessionStore(db).list_sessions()
    return {
        "laggingMuscle": coaching.find_lagging_muscle(sessions, focus, now),
        "symmetry": coaching.analyze_symmetry(sessions, now),
        "muscles": calculator.muscle_balance(sessions, now, days=days),
    }


@router.get("/overload")
async def overload(
    exercise: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    calculator: InsightsCalculator = Depends(get_calculator),
):
    """
    Progressive overload advice for one exercise.
    """
    sessions = await SessionStore(db).list_sessions()
    return {"exercise": exercise, "suggestion": calculator.overload(exercise, sessions, now)}


@router.get("/density")
async def training_density(
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Latest lbs/min compared with recent sessions.
    """
    sessions = await SessionStore(db).list_sessions()
    return {"density": coaching.analyze_training_density(sessions, now)}


@router.get("/heatmap")
async def heatmap(
    weeks: int = Query(15, ge=1, le=52),
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    calculator: InsightsCalculator = Depends(get_calculator),
):
    """
    Consistency grid of daily volume, one column per week.
    """
    sessions = await SessionStore(db).list_sessions()
    return {"weeks": calculator.heatmap(sessions, now, weeks=weeks)}


@router.get("/history")
async def history_overview(
    db: AsyncSession = Depends(get_db),
    calculator: InsightsCalculator = Depends(get_calculator),
):
    """
    Workout count and lifetime volume.
    """
    sessions = await SessionStore(db).list_sessions()
    return calculator.history_overview(sessions)

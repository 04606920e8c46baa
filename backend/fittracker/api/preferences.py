"""
Coaching preferences API endpoints: recomp focus and recovery check-in.
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.api.deps import get_focus, get_now
from fittracker.core.database import get_db
from fittracker.core.logging import get_logger
from fittracker.services.analytics import PreferenceStore
from fittracker.services.analytics import coaching
from fittracker.services.analytics.domain import RecompFocus

logger = get_logger(__name__)
router = APIRouter()


class FocusRequest(BaseModel):
    focus: RecompFocus


class CheckInRequest(BaseModel):
    score: int = Field(..., ge=1, le=10, description="1 = sore/tired, 10 = fresh")


class PreferencesResponse(BaseModel):
    focus: RecompFocus
    weeklySetTarget: int
    stepTarget: int
    recoveryScore: int
    lastCheckIn: str | None
    checkInDue: bool
    dailyTarget: str


async def _build_response(store: PreferenceStore, focus: RecompFocus, now: datetime) -> PreferencesResponse:
    recovery = await store.get_recovery()
    score = int(recovery["score"])
    return PreferencesResponse(
        focus=focus,
        weeklySetTarget=coaching.weekly_set_target(focus),
        stepTarget=coaching.step_target(focus),
        recoveryScore=score,
        lastCheckIn=recovery["date"],
        checkInDue=recovery["date"] != now.date().isoformat(),
        dailyTarget=coaching.flexible_target(score, focus),
    )


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    db: AsyncSession = Depends(get_db),
    focus: RecompFocus = Depends(get_focus),
    now: datetime = Depends(get_now),
):
    """
    Current focus, derived targets and today's check-in state.
    """
    return await _build_response(PreferenceStore(db), focus, now)


@router.put("/focus", response_model=PreferencesResponse)
async def set_focus(
    request: FocusRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Change the recomp focus.
    """
    store = PreferenceStore(db)
    await store.set_focus(request.focus)
    logger.info("Recomp focus changed", focus=request.focus.value)
    return await _build_response(store, request.focus, now)


@router.post("/check-in", response_model=PreferencesResponse)
async def check_in(
    request: CheckInRequest,
    db: AsyncSession = Depends(get_db),
    focus: RecompFocus = Depends(get_focus),
    now: datetime = Depends(get_now),
):
    """
    Record today's recovery score.
    """
    store = PreferenceStore(db)
    await store.set_recovery(request.score, now.date())
    logger.info("Recovery check-in", score=request.score)
    return await _build_response(store, focus, now)

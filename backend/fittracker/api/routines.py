"""
Routine catalog API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.core.database import get_db
from fittracker.services.analytics import SessionStore
from fittracker.services.analytics.routines import ROUTINES, routine_preview

router = APIRouter()


@router.get("")
async def list_routines(
    db: AsyncSession = Depends(get_db),
):
    """
    Routine catalog with what was trained the last time each was used.
    """
    sessions = await SessionStore(db).list_sessions()
    return [
        {
            "name": routine.name,
            "description": routine.description,
            "preview": routine_preview(routine.name, sessions),
        }
        for routine in ROUTINES.values()
    ]

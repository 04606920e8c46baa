"""
Shared FastAPI dependencies.
"""
from datetime import datetime, timezone

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.core.config import settings
from fittracker.core.database import get_db
from fittracker.services.analytics import InsightsCalculator, PreferenceStore
from fittracker.services.analytics.domain import RecompFocus


def get_now() -> datetime:
    """Current time as naive UTC, the convention used for stored dates."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_calculator() -> InsightsCalculator:
    return InsightsCalculator()


async def get_focus(db: AsyncSession = Depends(get_db)) -> RecompFocus:
    """Active recomp focus, falling back to the configured default."""
    return await PreferenceStore(db).get_focus(RecompFocus(settings.DEFAULT_RECOMP_FOCUS))

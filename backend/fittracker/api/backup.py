"""
Backup API endpoints: export and restore the full history.
"""
import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.api.sessions import SessionPayload
from fittracker.core.database import get_db
from fittracker.core.logging import get_logger
from fittracker.services.analytics import MetricStore, SessionStore, get_adapter
from fittracker.services.analytics.adapter import parse_timestamp, serialize_metric, serialize_session
from fittracker.services.analytics.domain import BodyMetric

logger = get_logger(__name__)
router = APIRouter()


class BodyMetricPayload(BaseModel):
    id: Optional[uuid.UUID] = None
    date: datetime
    weight: Optional[float] = Field(None, gt=0, description="lbs")
    bodyFat: Optional[float] = Field(None, gt=0, lt=100, description="Percent")


class BackupData(BaseModel):
    workouts: list[SessionPayload]
    bodyMetrics: list[BodyMetricPayload] = Field(default_factory=list)


def _to_metric(payload: BodyMetricPayload) -> BodyMetric:
    kwargs = {"id": str(payload.id)} if payload.id else {}
    return BodyMetric(
        date=parse_timestamp(payload.date),
        weight=payload.weight,
        body_fat=payload.bodyFat,
        **kwargs,
    )


@router.get("", response_model=BackupData)
async def export_backup(
    db: AsyncSession = Depends(get_db),
):
    """
    Export every session and body metric.
    """
    sessions = await SessionStore(db).list_sessions()
    metrics = await MetricStore(db).list_metrics()
    return BackupData(
        workouts=[serialize_session(s) for s in sessions],
        bodyMetrics=[serialize_metric(m) for m in metrics],
    )


@router.post("/restore")
async def restore_backup(
    backup: BackupData,
    db: AsyncSession = Depends(get_db),
):
    """
    Replace the stored history with a backup. Nothing is written unless
    the whole backup parses.
    """
    adapter = get_adapter("manual")
    try:
        sessions = [adapter.normalize(w.model_dump(mode="json")) for w in backup.workouts]
        metrics = [_to_metric(m) for m in backup.bodyMetrics]
    except ValueError as e:
        logger.warning("Restore rejected", error=str(e))
        raise HTTPException(status_code=422, detail=f"Invalid backup: {e}")

    restored_sessions = await SessionStore(db).replace_all(sessions)
    restored_metrics = await MetricStore(db).replace_all(metrics)

    logger.info("Backup restored", workouts=restored_sessions, body_metrics=restored_metrics)
    return {"workouts": restored_sessions, "bodyMetrics": restored_metrics}

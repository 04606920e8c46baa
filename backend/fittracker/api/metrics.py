"""
Body Metrics API endpoints.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.api.deps import get_now
from fittracker.core.database import get_db
from fittracker.core.logging import get_logger
from fittracker.services.analytics import MetricStore
from fittracker.services.analytics.adapter import serialize_metric
from fittracker.services.analytics.domain import BodyMetric

logger = get_logger(__name__)
router = APIRouter()


class LogMetricRequest(BaseModel):
    weight: Optional[float] = Field(None, gt=0, description="lbs")
    bodyFat: Optional[float] = Field(None, gt=0, lt=100, description="Percent")


@router.post("")
async def log_metric(
    request: LogMetricRequest,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Log body weight and/or body fat.
    """
    if request.weight is None and request.bodyFat is None:
        raise HTTPException(status_code=422, detail="Provide weight or bodyFat")

    metric = await MetricStore(db).add(
        BodyMetric(date=now, weight=request.weight, body_fat=request.bodyFat)
    )
    logger.info("Body metric logged", has_weight=metric.weight is not None, has_body_fat=metric.body_fat is not None)
    return serialize_metric(metric)


@router.get("")
async def list_metrics(
    db: AsyncSession = Depends(get_db),
):
    """
    All body metrics, oldest first, plus the latest body fat reading.
    """
    metrics = await MetricStore(db).list_metrics()
    body_fat = [m for m in metrics if m.body_fat is not None]
    return {
        "metrics": [serialize_metric(m) for m in metrics],
        "latestBodyFat": body_fat[-1].body_fat if body_fat else None,
    }

"""
Body Metric database model.
"""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fittracker.core.database import Base


class BodyMetricRecord(Base):
    """Body weight / body fat measurement."""

    __tablename__ = "body_metrics"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    date: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        index=True
    )
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    body_fat: Mapped[float | None] = mapped_column(Float, nullable=True)

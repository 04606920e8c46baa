"""
Workout Session database model.
"""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fittracker.core.database import Base, JSONType


class WorkoutSessionRecord(Base):
    """Workout session stored in database."""

    __tablename__ = "workout_sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow
    )
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="strength")
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # [{"name", "muscleGroup", "sets": [{"reps", "weight", "rpe"}]}]
    exercises: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)

    distance: Mapped[float | None] = mapped_column(Float, nullable=True)  # metres
    duration: Mapped[float | None] = mapped_column(Float, nullable=True)  # seconds
    average_heart_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    calories: Mapped[float | None] = mapped_column(Float, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    def to_dict(self) -> dict:
        """Convert to the app payload format."""
        return {
            "id": str(self.id),
            "date": self.date.isoformat(),
            "type": self.type,
            "isCompleted": self.is_completed,
            "exercises": self.exercises or [],
            "distance": self.distance,
            "duration": self.duration,
            "averageHeartRate": self.average_heart_rate,
            "calories": self.calories,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "notes": self.notes,
        }

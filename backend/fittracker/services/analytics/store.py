"""
Stores - Database operations for sessions, body metrics and preferences.

Rows are converted to immutable domain snapshots on the way out, so
nothing above this layer touches ORM objects.
"""
import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittracker.core.logging import get_logger
from fittracker.models.metric import BodyMetricRecord
from fittracker.models.preference import UserPreference
from fittracker.models.session import WorkoutSessionRecord
from fittracker.services.analytics.adapter import ManualAdapter, serialize_exercises
from fittracker.services.analytics.domain import BodyMetric, RecompFocus, WorkoutSession

logger = get_logger(__name__)

RECOMP_FOCUS_KEY = "recomp_focus"
RECOVERY_CHECK_IN_KEY = "recovery_check_in"
DEFAULT_RECOVERY_SCORE = 8


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(value)
    except ValueError:
        logger.warning("Invalid id format", id=value)
        return None


class SessionStore:
    """
    Database store for workout sessions.

    Handles CRUD operations for the WorkoutSessionRecord model.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self._adapter = ManualAdapter()

    def _to_domain(self, record: WorkoutSessionRecord) -> WorkoutSession:
        return self._adapter.normalize(record.to_dict())

    async def _get_record(self, session_id: str) -> Optional[WorkoutSessionRecord]:
        session_uuid = _parse_uuid(session_id)
        if session_uuid is None:
            return None
        result = await self.db.execute(
            select(WorkoutSessionRecord).where(WorkoutSessionRecord.id == session_uuid)
        )
        return result.scalar_one_or_none()

    async def list_sessions(self) -> List[WorkoutSession]:
        """All sessions, oldest first."""
        result = await self.db.execute(
            select(WorkoutSessionRecord).order_by(WorkoutSessionRecord.date)
        )
        return [self._to_domain(record) for record in result.scalars().all()]

    async def get(self, session_id: str) -> Optional[WorkoutSession]:
        """
        Get a session by ID.

        Args:
            session_id: Session ID

        Returns:
            WorkoutSession or None if not found
        """
        record = await self._get_record(session_id)
        return self._to_domain(record) if record else None

    async def save(self, session: WorkoutSession) -> WorkoutSession:
        """
        Insert or update a session snapshot.

        Raises:
            ValueError: if the session id is not a UUID
        """
        try:
            session_uuid = uuid.UUID(session.id)
        except ValueError:
            raise ValueError(f"Invalid session id format: {session.id}")

        record = await self.db.get(WorkoutSessionRecord, session_uuid)
        created = record is None
        if created:
            record = WorkoutSessionRecord(id=session_uuid)
            self.db.add(record)

        record.date = session.date
        record.type = session.type.value
        record.is_completed = session.is_completed
        record.notes = session.notes
        # Fresh list so the JSON column registers the change
        record.exercises = serialize_exercises(list(session.exercises))
        record.distance = session.distance
        record.duration = session.duration
        record.average_heart_rate = session.average_heart_rate
        record.calories = session.calories
        record.latitude = session.latitude
        record.longitude = session.longitude

        await self.db.flush()

        logger.debug(
            "Created workout session" if created else "Updated workout session",
            session_id=session.id,
            workout_type=session.type.value,
            completed=session.is_completed,
        )
        return session

    async def delete(self, session_id: str) -> bool:
        """
        Delete a session.

        Returns:
            True if deleted, False if not found
        """
        record = await self._get_record(session_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.flush()
        return True

    async def replace_all(self, sessions: Sequence[WorkoutSession]) -> int:
        """Overwrite every stored session (backup restore)."""
        await self.db.execute(delete(WorkoutSessionRecord))
        for session in sessions:
            await self.save(session)
        logger.info("Replaced workout sessions", count=len(sessions))
        return len(sessions)


class MetricStore:
    """Database store for body metrics."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_metrics(self) -> List[BodyMetric]:
        """All metrics, oldest first."""
        result = await self.db.execute(select(BodyMetricRecord).order_by(BodyMetricRecord.date))
        return [
            BodyMetric(date=r.date, weight=r.weight, body_fat=r.body_fat, id=str(r.id))
            for r in result.scalars().all()
        ]

    async def add(self, metric: BodyMetric) -> BodyMetric:
        self.db.add(
            BodyMetricRecord(
                id=uuid.UUID(metric.id),
                date=metric.date,
                weight=metric.weight,
                body_fat=metric.body_fat,
            )
        )
        await self.db.flush()
        return metric

    async def replace_all(self, metrics: Sequence[BodyMetric]) -> int:
        await self.db.execute(delete(BodyMetricRecord))
        for metric in metrics:
            await self.add(metric)
        return len(metrics)


class PreferenceStore:
    """Key/value preference store backing the coaching configuration."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, key: str) -> Optional[UserPreference]:
        result = await self.db.execute(
            select(UserPreference).where(UserPreference.preference_key == key)
        )
        return result.scalar_one_or_none()

    async def get_value(self, key: str) -> Optional[Dict[str, Any]]:
        preference = await self._get(key)
        return preference.preference_value if preference else None

    async def set_value(self, key: str, value: Dict[str, Any]) -> None:
        preference = await self._get(key)
        if preference is None:
            self.db.add(UserPreference(preference_key=key, preference_value=value))
        else:
            preference.preference_value = dict(value)
        await self.db.flush()
        logger.debug("Saved preference", key=key)

    async def get_focus(self, default: RecompFocus) -> RecompFocus:
        value = await self.get_value(RECOMP_FOCUS_KEY)
        if not value:
            return default
        try:
            return RecompFocus(value.get("focus"))
        except ValueError:
            logger.warning("Stored recomp focus is invalid", value=value)
            return default

    async def set_focus(self, focus: RecompFocus) -> None:
        await self.set_value(RECOMP_FOCUS_KEY, {"focus": focus.value})

    async def get_recovery(self) -> Dict[str, Any]:
        """Latest recovery check-in; the score defaults to 8 before any check-in."""
        value = await self.get_value(RECOVERY_CHECK_IN_KEY)
        if not value:
            return {"score": DEFAULT_RECOVERY_SCORE, "date": None}
        return value

    async def set_recovery(self, score: int, day: date) -> None:
        await self.set_value(RECOVERY_CHECK_IN_KEY, {"score": score, "date": day.isoformat()})

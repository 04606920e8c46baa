"""
Insights Calculator - Main engine for composing coaching output.

Orchestrates:
- Strategy selection based on workout type
- The pure coaching functions over a history snapshot
- Logging of what was computed

The calculator holds no history of its own; every call receives the
snapshot it works on.
"""
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from fittracker.core.config import settings
from fittracker.core.logging import get_logger
from fittracker.services.analytics import coaching, trends
from fittracker.services.analytics.domain import (
    OverloadThresholds,
    RecompFocus,
    VolumeTier,
    WorkoutSession,
    WorkoutType,
)
from fittracker.services.analytics.strategies import (
    CardioStrategy,
    SessionStrategy,
    StrengthStrategy,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class TodayBriefing:
    """Everything the "Today" screen shows, computed from one snapshot."""
    focus: str
    weekly_set_target: int
    step_target: int
    volume_status: str
    volume_tier: VolumeTier
    lagging_muscle: str
    symmetry: str
    overload_exercise: str
    overload: str
    density: str
    recovery_score: int
    daily_target: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["volume_tier"] = self.volume_tier.value
        return data


def thresholds_from_settings() -> OverloadThresholds:
    """Overload decision thresholds as configured in the environment."""
    return OverloadThresholds(
        high_velocity_slope=settings.OVERLOAD_HIGH_VELOCITY_SLOPE,
        steady_slope=settings.OVERLOAD_STEADY_SLOPE,
        plateau_slope=settings.OVERLOAD_PLATEAU_SLOPE,
        detraining_days=settings.OVERLOAD_DETRAINING_DAYS,
    )


class InsightsCalculator:
    """
    Main coaching engine.

    Usage:
        calculator = InsightsCalculator()
        briefing = calculator.today_briefing(
            sessions,
            focus=RecompFocus.STANDARD,
            now=datetime.utcnow(),
            recovery_score=8,
        )
    """

    def __init__(self, thresholds: Optional[OverloadThresholds] = None):
        self.thresholds = thresholds or thresholds_from_settings()

        strength = StrengthStrategy()
        cardio = CardioStrategy()
        self._strategies: Dict[WorkoutType, SessionStrategy] = {
            workout_type: strategy
            for strategy in (strength, cardio)
            for workout_type in strategy.workout_types
        }

    def _get_strategy(self, workout_type: WorkoutType) -> SessionStrategy:
        return self._strategies[workout_type]

    def summarize_session(self, session: WorkoutSession) -> Dict[str, Any]:
        """
        Compute per-session statistics without touching the history.

        Returns:
            Dict with level1, level2, level3 keys plus the history headline
        """
        stats = self._get_strategy(session.type).compute_all(session)
        stats["headline"] = trends.session_headline(session)

        logger.debug(
            "Computed session statistics",
            session_id=session.id,
            workout_type=session.type.value,
            events_count=len(stats["level3"].get("events", [])),
        )
        return stats

    def overload(
        self,
        exercise_name: str,
        sessions: Sequence[WorkoutSession],
        now: datetime,
    ) -> str:
        return coaching.suggest_progressive_overload(
            exercise_name, sessions, now, thresholds=self.thresholds
        )

    def today_briefing(
        self,
        sessions: Sequence[WorkoutSession],
        focus: RecompFocus,
        now: datetime,
        recovery_score: int,
        exercise_name: Optional[str] = None,
    ) -> TodayBriefing:
        """
        Compose the daily briefing.

        Args:
            sessions: History snapshot
            focus: Active recomp focus
            now: Current time
            recovery_score: Today's 1-10 check-in
            exercise_name: Exercise for the overload insight
                (defaults to the configured headline exercise)
        """
        exercise_name = exercise_name or settings.HEADLINE_EXERCISE
        volume = coaching.analyze_volume_status(sessions, focus, now)

        briefing = TodayBriefing(
            focus=focus.value,
            weekly_set_target=coaching.weekly_set_target(focus),
            step_target=coaching.step_target(focus),
            volume_status=volume.label,
            volume_tier=volume.tier,
            lagging_muscle=coaching.find_lagging_muscle(sessions, focus, now),
            symmetry=coaching.analyze_symmetry(sessions, now),
            overload_exercise=exercise_name,
            overload=self.overload(exercise_name, sessions, now),
            density=coaching.analyze_training_density(sessions, now),
            recovery_score=recovery_score,
            daily_target=coaching.flexible_target(recovery_score, focus),
        )

        logger.info(
            "Computed today briefing",
            sessions=len(sessions),
            focus=focus.value,
            volume_tier=volume.tier.value,
            recovery_score=recovery_score,
        )
        return briefing

    def history_overview(self, sessions: Sequence[WorkoutSession]) -> Dict[str, Any]:
        """Workout count and lifetime volume for the history header."""
        volume = trends.lifetime_volume(sessions)
        return {
            "workouts": len(sessions),
            "lifetime_volume": volume,
            "lifetime_volume_label": trends.format_volume(volume),
        }

    def muscle_balance(self, sessions: Sequence[WorkoutSession], now: datetime, days: int = 30) -> List[Dict[str, Any]]:
        return [
            {"muscle": m.muscle.value, "volume": round(m.volume, 1), "share": round(m.share, 3)}
            for m in trends.muscle_volume_distribution(sessions, now, days=days)
        ]

    def heatmap(self, sessions: Sequence[WorkoutSession], now: datetime, weeks: int = 15) -> List[List[Dict[str, Any]]]:
        return [
            [
                {"date": cell.day.isoformat(), "volume": round(cell.volume, 1), "level": cell.level}
                for cell in week
            ]
            for week in trends.consistency_heatmap(sessions, now.date(), weeks=weeks)
        ]
